"""
Search service.

Runs validated search requests against a core and assembles the result
envelope with paging statistics and facet counts.

Dependencies: atcoder_search.core.search, atcoder_search.boundary.solr
System role: Use case behind the search endpoints
"""

import json
import logging
import time
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from atcoder_search.boundary.solr import (
    SolrRangeFacetCount,
    SolrTermFacetCount,
    StandaloneSolrCore,
)
from atcoder_search.core.exceptions import SearchEngineError
from atcoder_search.core.search import Query, build_problem_query, build_user_query
from atcoder_search.models.common import SearchParameterBase, SearchResultResponse, SearchResultStats
from atcoder_search.models.problem import ProblemResponse, ProblemSearchParameter
from atcoder_search.models.user import UserResponse, UserSearchParameter
from atcoder_search.observability.logger import QUERYLOG

logger = logging.getLogger(__name__)
querylog = logging.getLogger(QUERYLOG)

RANGE_FACET_KEYS = frozenset({"before", "after", "between"})


def parse_facets(facets: dict[str, Any] | None) -> dict[str, Any]:
    """
    Normalise the ``facets`` section of a select response.

    ``count`` is kept as is; range facets keep their before/after/between
    counts; term facets keep their buckets.

    Raises:
        SearchEngineError: If a facet body does not match its count model
    """
    parsed: dict[str, Any] = {}
    for name, value in (facets or {}).items():
        if not isinstance(value, dict):
            parsed[name] = value
            continue
        model = SolrRangeFacetCount if RANGE_FACET_KEYS & value.keys() else SolrTermFacetCount
        try:
            parsed[name] = model.model_validate(value).model_dump(exclude_none=True)
        except ValidationError as e:
            raise SearchEngineError(
                f"failed to deserialize facet [{name}]: {e.error_count()} errors",
                operation="select",
            ) from e
    return parsed


class SearchService:
    """Executes searches on one core."""

    def __init__(self, core: StandaloneSolrCore) -> None:
        self.core = core

    async def _search(
        self,
        params: SearchParameterBase,
        build: Callable[[Any], Query],
        document_model: type[BaseModel],
    ) -> SearchResultResponse:
        start_process = time.perf_counter()
        query = build(params)
        echoed = params.echo()
        try:
            response = await self.core.select(query, document_model=document_model)
            facet = parse_facets(response.facets)
        except SearchEngineError as e:
            e.details["params"] = echoed
            raise

        elapsed = int((time.perf_counter() - start_process) * 1000)
        total = response.response.num_found
        rows = params.rows

        querylog.info(
            f"elapsed_time={elapsed} hits={total} params={json.dumps(echoed, ensure_ascii=False)}"
        )

        stats = SearchResultStats(
            time=elapsed,
            total=total,
            index=response.response.start // rows + 1,
            pages=(total + rows - 1) // rows,
            count=len(response.response.docs),
            params=echoed,
            facet=facet,
        )
        return SearchResultResponse(stats=stats, items=response.response.docs)

    async def search_problems(self, params: ProblemSearchParameter) -> SearchResultResponse:
        """
        Search problems.

        Raises:
            SearchEngineError: If Solr fails or returns an unreadable body
        """
        return await self._search(params, build_problem_query, ProblemResponse)

    async def search_users(self, params: UserSearchParameter) -> SearchResultResponse:
        """
        Search users.

        Raises:
            SearchEngineError: If Solr fails or returns an unreadable body
        """
        return await self._search(params, build_user_query, UserResponse)
