"""
Keyword sanitization for the Solr standard query parser.

Dependencies: re, unicodedata (stdlib)
System role: Escapes user text before it enters a query parameter
"""

import re
import unicodedata

ESCAPE_CHAR = "\\"

# Reserved syntax of the standard query parser, including the boolean keywords
SOLR_SPECIAL_CHARACTERS = re.compile(
    r'(\+|-|&&|\|\||!|\(|\)|\{|\}|\[|\]|\^|"|~|\*|\?|:|/|AND|OR)'
)


def sanitize(text: str) -> str:
    """
    Escape Solr special characters after NFKC normalization.

    Full-width input normalizes to its ASCII form first, so ``ＡＮＤ`` and
    ``AND`` are escaped alike.

    Args:
        text: Raw user input

    Returns:
        str: Text safe to place in ``q`` or an ``fq`` clause

    Usage:
        sanitize("foo OR bar")  # 'foo \\OR bar'
    """
    normalized = unicodedata.normalize("NFKC", text)
    return SOLR_SPECIAL_CHARACTERS.sub(lambda m: ESCAPE_CHAR + m.group(0), normalized)
