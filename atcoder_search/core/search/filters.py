"""
Filter and facet rendering.

Every filter clause is tagged with its filter name and every facet
excludes the tag of the same name, so a facet counts values as if its
own filter were not applied.

Dependencies: json (stdlib)
System role: ``fq`` and ``json.facet`` rendering for search requests
"""

import json
from typing import Any, Iterable

from atcoder_search.core.search.sanitize import sanitize

RANGE_WILDCARD = "*"


def range_expression(lower: Any = None, upper: Any = None) -> str | None:
    """
    Render a half-open range ``[lower TO upper}``.

    The lower bound is inclusive, the upper bound exclusive. An absent
    bound becomes ``*``.

    Returns:
        str | None: Range expression, or None when both bounds are absent
    """
    if lower is None and upper is None:
        return None
    low = RANGE_WILDCARD if lower is None else lower
    high = RANGE_WILDCARD if upper is None else upper
    return f"[{low} TO {high}}}"


def range_filter(tag: str, field: str, lower: Any = None, upper: Any = None) -> str | None:
    """Tagged range clause, or None when the range is unbounded on both sides."""
    expression = range_expression(lower, upper)
    if expression is None:
        return None
    return f"{{!tag={tag}}}{field}:{expression}"


def terms_filter(tag: str, field: str, values: Iterable[str] | None) -> str | None:
    """
    Tagged disjunction over sanitized values.

    Returns:
        str | None: ``{!tag=t}field:(a OR b)``, or None for no values
    """
    if values is None:
        return None
    terms = [sanitize(value) for value in values]
    if not terms:
        return None
    return f"{{!tag={tag}}}{field}:({' OR '.join(terms)})"


def term_facet(field: str, tag: str) -> dict[str, Any]:
    """Terms facet over every value of ``field`` in index order, zero counts included."""
    return {
        "type": "terms",
        "field": field,
        "limit": -1,
        "mincount": 0,
        "sort": "index",
        "domain": {"excludeTags": [tag]},
    }


def range_facet(
    field: str,
    tag: str,
    start: int = 0,
    end: int = 4000,
    gap: int = 400,
) -> dict[str, Any]:
    """Range facet with fixed buckets plus before/after/between counts."""
    return {
        "type": "range",
        "field": field,
        "start": start,
        "end": end,
        "gap": gap,
        "other": "all",
        "domain": {"excludeTags": [tag]},
    }


def serialize_facets(facets: dict[str, dict[str, Any]]) -> str:
    """
    Serialize a facet request for the ``json.facet`` parameter.

    Keys are sorted so equal requests produce identical parameters.

    Returns:
        str: JSON text, or an empty string for no facets
    """
    if not facets:
        return ""
    return json.dumps(facets, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
