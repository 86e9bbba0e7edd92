"""
User search query.

Dependencies: atcoder_search.models.user
System role: UserSearchParameter to Solr select parameters
"""

from typing import Any

from atcoder_search.core.search.filters import (
    range_facet,
    range_filter,
    serialize_facets,
    term_facet,
    terms_filter,
)
from atcoder_search.core.search.query import EDisMaxQueryBuilder, Operator, Query, paging, to_sort
from atcoder_search.core.search.sanitize import sanitize
from atcoder_search.models.common import RangeFilterParameter
from atcoder_search.models.user import (
    RANGE_FIELDS,
    TERM_FIELDS,
    USER_FIELD_LIST,
    UserFilterParameter,
    UserSearchParameter,
)


def filter_clauses(filter_: UserFilterParameter | None) -> list[str]:
    """Tagged ``fq`` clauses in filter declaration order."""
    if filter_ is None:
        return []
    clauses = []
    for name in UserFilterParameter.model_fields:
        value = getattr(filter_, name)
        if value is None:
            continue
        if isinstance(value, RangeFilterParameter):
            clause = range_filter(name, name, value.from_, value.to)
        else:
            clause = terms_filter(name, name, value)
        if clause:
            clauses.append(clause)
    return clauses


def facet_request(facet: list[str] | None) -> dict[str, Any]:
    """Terms facets for categorical fields, 400-wide range facets for numeric ones."""
    facets: dict[str, Any] = {}
    for name in facet or []:
        if name in TERM_FIELDS:
            facets[name] = term_facet(name, tag=name)
        elif name in RANGE_FIELDS:
            facets[name] = range_facet(name, tag=name)
    return facets


def build_user_query(params: UserSearchParameter) -> Query:
    """
    Render a user search request.

    Without a sort key Solr's relevance order applies.
    """
    rows, start = paging(params.limit, params.page)
    keyword = sanitize(params.keyword) if params.keyword else ""

    return (
        EDisMaxQueryBuilder()
        .facet(serialize_facets(facet_request(params.facet)))
        .fl(USER_FIELD_LIST)
        .fq(filter_clauses(params.filter))
        .op(Operator.AND)
        .q(keyword)
        .q_alt("*:*")
        .qf("user_name")
        .rows(rows)
        .sort(to_sort(params.sort))
        .sow(True)
        .start(start)
        .build()
    )
