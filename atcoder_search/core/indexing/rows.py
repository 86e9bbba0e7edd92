"""
Rows of the indexing domains.

A row is plain data read from the store. ``to_document`` turns it into
the flat engine document: problems go through statement extraction and
field expansion, users gain their colour bands, and recommendation rows
look up their nearest-difficulty neighbours.

Dependencies: atcoder_search.core.indexing, atcoder_search.models
System role: Row to document conversion per indexing domain
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, NamedTuple

from atcoder_search.core.exceptions import MalformedInputError, TransformationError
from atcoder_search.core.indexing.expansion import Document, expand
from atcoder_search.core.indexing.extractor import EXTRACTOR
from atcoder_search.models.common import rate_to_color
from atcoder_search.models.problem import ProblemDocument
from atcoder_search.models.recommend import RecommendDocument
from atcoder_search.models.user import UserDocument

CONTEST_URL = "https://atcoder.jp/contests/{contest_id}"

# 2 * sigma^2 of the gaussian weighting difficulty distance
DIFFICULTY_SPREAD = 57707.8
DEFAULT_CATEGORY_WEIGHT = 1.0


@dataclass(frozen=True)
class ProblemRow:
    """Problem joined with its contest."""

    problem_id: str
    problem_title: str
    problem_url: str
    contest_id: str
    contest_title: str
    difficulty: int | None
    start_at: int
    duration: int
    rate_change: str
    category: str
    html: str

    @property
    def row_id(self) -> str:
        return self.problem_id

    def to_document(self) -> Document:
        """
        Build the problem document.

        Raises:
            TransformationError: If the stored HTML cannot be parsed
        """
        try:
            statement_ja, statement_en = EXTRACTOR.extract(self.html)
        except MalformedInputError as e:
            raise TransformationError(
                f"failed to extract statements: {e.message}", row_id=self.problem_id
            ) from e

        document = ProblemDocument(
            problem_id=self.problem_id,
            problem_title=self.problem_title,
            problem_url=self.problem_url,
            contest_id=self.contest_id,
            contest_title=self.contest_title,
            contest_url=CONTEST_URL.format(contest_id=self.contest_id),
            difficulty=self.difficulty,
            color=None if self.difficulty is None else rate_to_color(self.difficulty),
            start_at=datetime.fromtimestamp(self.start_at, tz=timezone.utc),
            duration=self.duration,
            rate_change=self.rate_change,
            category=self.category,
            statement_ja=statement_ja,
            statement_en=statement_en,
        )
        return expand(document)


@dataclass(frozen=True)
class UserRow:
    """Ranking record of one user."""

    user_name: str
    rating: int
    highest_rating: int
    affiliation: str | None
    birth_year: int | None
    country: str | None
    crown: str | None
    join_count: int
    rank: int
    wins: int

    @property
    def row_id(self) -> str:
        return self.user_name

    def to_document(self) -> Document:
        document = UserDocument(
            user_name=self.user_name,
            rating=self.rating,
            color=rate_to_color(self.rating),
            highest_rating=self.highest_rating,
            highest_color=rate_to_color(self.highest_rating),
            affiliation=self.affiliation,
            birth_year=self.birth_year,
            country=self.country,
            crown=self.crown,
            join_count=self.join_count,
            rank=self.rank,
            wins=self.wins,
        )
        return expand(document)


class Neighbour(NamedTuple):
    """Problem close in difficulty, with the category weight towards it."""

    problem_id: str
    difficulty: int
    weight: float | None


# (problem_id, difficulty, category) -> nearest-difficulty problems
NeighbourLookup = Callable[[str, int, str | None], Awaitable[list[Neighbour]]]


def difficulty_correlation(a: int, b: int) -> float:
    """Gaussian similarity of two difficulties, rounded to 6 places."""
    return round(math.exp(-((a - b) ** 2) / DIFFICULTY_SPREAD), 6)


def format_weight(value: float) -> str:
    """Shortest fixed-point form: ``1.0`` -> ``1``, ``0.25`` -> ``0.25``."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class RecommendRow:
    """Problem with difficulty statistics; neighbours are fetched on conversion."""

    problem_id: str
    category: str | None
    difficulty: int | None
    is_experimental: bool | None
    solved_count: float | None
    lookup: NeighbourLookup

    @property
    def row_id(self) -> str:
        return self.problem_id

    async def correlations(self) -> tuple[str | None, str | None]:
        """
        Difficulty and category correlation strings.

        Returns:
            tuple: Both None when the problem has no difficulty
        """
        if self.difficulty is None:
            return None, None

        neighbours = await self.lookup(self.problem_id, self.difficulty, self.category)
        difficulty = " ".join(
            f"{n.problem_id}|{format_weight(difficulty_correlation(self.difficulty, n.difficulty))}"
            for n in neighbours
        )
        category = " ".join(
            f"{n.problem_id}|{format_weight(DEFAULT_CATEGORY_WEIGHT if n.weight is None else n.weight)}"
            for n in neighbours
        )
        return difficulty, category

    async def to_document(self) -> Document:
        difficulty, category = await self.correlations()
        document = RecommendDocument(
            problem_id=self.problem_id,
            difficulty_correlation=difficulty,
            category_correlation=category,
            difficulty=self.difficulty,
            is_experimental=bool(self.is_experimental),
            solved_count=self.solved_count or 0.0,
        )
        return expand(document)
