"""
Problem statement extraction.

Pulls the Japanese and English problem statements out of a stored AtCoder
task page. Statements live in ``<section>`` blocks whose first ``<h3>``
names them; bilingual pages wrap each language in ``span.lang-ja`` and
``span.lang-en``, older pages have no wrapper at all.

Dependencies: beautifulsoup4, soupsieve
System role: Full-text source for problem documents
"""

import logging
from urllib.parse import urlparse

import soupsieve
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from atcoder_search.core.exceptions import MalformedInputError

logger = logging.getLogger(__name__)

NO_ID = "[No ID]"

JA_MARKER = "問題"
EN_MARKER = "Statement"

# Elements excluded from statement text: sample blocks and headings
SKIPPED_TAGS = frozenset({"pre", "h3"})


class FullTextExtractor:
    """
    Extracts bilingual statement text from problem HTML.

    Selectors are compiled once; instances hold no mutable state and may be
    shared between tasks and threads.
    """

    def __init__(self) -> None:
        self._span_ja = soupsieve.compile("span.lang-ja")
        self._span_en = soupsieve.compile("span.lang-en")
        self._section = soupsieve.compile("section")
        self._h3 = soupsieve.compile("h3")
        self._og_url = soupsieve.compile('meta[property="og:url"]')

    def extract(self, html: str) -> tuple[list[str], list[str]]:
        """
        Extract statement segments from an HTML document.

        Missing language sections are not an error; they yield empty lists.

        Args:
            html: Raw HTML of the task page

        Returns:
            tuple: (japanese segments, english segments) in document order

        Raises:
            MalformedInputError: If the input cannot be parsed as HTML
        """
        if not isinstance(html, str):
            raise MalformedInputError(
                f"expected HTML text, got {type(html).__name__}"
            )

        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise MalformedInputError(f"failed to parse HTML: {e}") from e

        problem_id = self.problem_id(soup)

        ja_root = self._span_ja.select_one(soup)
        # Pages without a Japanese wrapper predate bilingual statements
        text_ja = self._collect(ja_root if ja_root is not None else soup, JA_MARKER)
        if text_ja:
            logger.debug(
                f"{__name__}:extract - Retrieved japanese problem statement [{problem_id}]"
            )

        text_en: list[str] = []
        en_root = self._span_en.select_one(soup)
        if en_root is not None:
            text_en = self._collect(en_root, EN_MARKER)
            if text_en:
                logger.debug(
                    f"{__name__}:extract - Retrieved english problem statement [{problem_id}]"
                )

        return text_ja, text_en

    def problem_id(self, soup: BeautifulSoup) -> str:
        """
        Read the task id from the canonical URL meta tag.

        Used for log labels only.
        """
        for meta in self._og_url.select(soup):
            content = meta.get("content")
            if content:
                return urlparse(content).path.rsplit("/", 1)[-1]
        return NO_ID

    def _collect(self, root: Tag, marker: str) -> list[str]:
        segments = []
        for section in self._section.select(root):
            h3 = self._h3.select_one(section)
            if h3 is None:
                continue
            heading = next(h3.strings, None)
            # Substring match tolerates surrounding whitespace and typos in later characters
            if heading is not None and marker in heading:
                segments.append(self._render(section))
        return segments

    def _render(self, element: Tag) -> str:
        parts = []
        for child in element.children:
            if isinstance(child, Tag):
                if child.name in SKIPPED_TAGS:
                    continue
                if child.name == "var":
                    parts.append(f" {self._render(child)} ")
                else:
                    parts.append(self._render(child))
            elif isinstance(child, NavigableString) and not isinstance(
                child, PreformattedString
            ):
                parts.append(child.strip())
        return "".join(parts)


EXTRACTOR = FullTextExtractor()
