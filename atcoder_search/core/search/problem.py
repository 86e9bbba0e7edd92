"""
Problem search query.

Dependencies: atcoder_search.models.problem
System role: ProblemSearchParameter to Solr select parameters
"""

from typing import Any

from atcoder_search.core.search.filters import (
    range_filter,
    serialize_facets,
    term_facet,
    terms_filter,
)
from atcoder_search.core.search.query import EDisMaxQueryBuilder, Operator, Query, paging, to_sort
from atcoder_search.core.search.sanitize import sanitize
from atcoder_search.models.problem import (
    FACET_FIELDS,
    PROBLEM_FIELD_LIST,
    ProblemFilterParameter,
    ProblemSearchParameter,
)

DEFAULT_SORT = "problem_id asc"
QUERY_FIELDS = "text_ja text_en text_1gram"


def filter_clauses(filter_: ProblemFilterParameter | None) -> list[str]:
    """Tagged ``fq`` clauses for the active problem filters."""
    if filter_ is None:
        return []
    clauses = [terms_filter("category", "category", filter_.category)]
    if filter_.difficulty is not None:
        clauses.append(
            range_filter(
                "difficulty", "difficulty", filter_.difficulty.from_, filter_.difficulty.to
            )
        )
    return [clause for clause in clauses if clause]


def facet_request(facet: list[str] | None) -> dict[str, Any]:
    """Facet request; names outside the allow-list are skipped."""
    facets: dict[str, Any] = {}
    for name in facet or []:
        field = FACET_FIELDS.get(name)
        if field is not None:
            facets[name] = term_facet(field, tag=name)
    return facets


def build_problem_query(params: ProblemSearchParameter) -> Query:
    """
    Render a problem search request.

    Args:
        params: Validated request

    Returns:
        list: Ordered ``(name, value)`` select parameters
    """
    rows, start = paging(params.limit, params.page)
    keyword = sanitize(params.keyword) if params.keyword else ""

    return (
        EDisMaxQueryBuilder()
        .facet(serialize_facets(facet_request(params.facet)))
        .fl(PROBLEM_FIELD_LIST)
        .fq(filter_clauses(params.filter))
        .op(Operator.AND)
        .q(keyword)
        .q_alt("*:*")
        .qf(QUERY_FIELDS)
        .rows(rows)
        .sort(to_sort(params.sort, DEFAULT_SORT))
        .sow(True)
        .start(start)
        .build()
    )
