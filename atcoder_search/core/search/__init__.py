"""
Search query construction.

Keyword sanitization, the edismax parameter builder, filter/facet
rendering and structured query string decoding.
"""

from atcoder_search.core.search.filters import (
    range_facet,
    range_filter,
    serialize_facets,
    term_facet,
    terms_filter,
)
from atcoder_search.core.search.problem import build_problem_query
from atcoder_search.core.search.query import EDisMaxQueryBuilder, Operator, Query, paging, to_sort
from atcoder_search.core.search.sanitize import sanitize
from atcoder_search.core.search.structured_qs import parse_structured_query
from atcoder_search.core.search.user import build_user_query

__all__ = [
    "EDisMaxQueryBuilder",
    "Operator",
    "Query",
    "build_problem_query",
    "build_user_query",
    "paging",
    "parse_structured_query",
    "range_facet",
    "range_filter",
    "sanitize",
    "serialize_facets",
    "term_facet",
    "terms_filter",
    "to_sort",
]
