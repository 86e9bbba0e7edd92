"""
Search API endpoints.

Routes:
- GET /search/problem - Full-text problem search with filters and facets
- GET /search/user - User ranking search with filters and facets

Query strings are structured: ``filter.difficulty.from=800`` nests and
comma-separated values become lists (``facet=category,difficulty``).

Dependencies: atcoder_search.application.services, atcoder_search.models
System role: Search HTTP API
"""

import logging
from typing import TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from atcoder_search.api.deps import get_problem_search_service, get_user_search_service
from atcoder_search.api.routers.error_handling import handle_search_errors
from atcoder_search.application.services import SearchService
from atcoder_search.core.exceptions import RequestValidationError
from atcoder_search.core.search import parse_structured_query
from atcoder_search.models.common import SearchParameterBase
from atcoder_search.models.problem import ProblemSearchParameter
from atcoder_search.models.user import UserSearchParameter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

P = TypeVar("P", bound=SearchParameterBase)


def validate_search_parameter(model: type[P], query_string: str) -> P:
    """
    Decode and validate a structured query string.

    Raises:
        RequestValidationError: Malformed query string or invalid values;
            carries the decoded parameters for the error response
    """
    raw = parse_structured_query(query_string)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        summary = ", ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in errors
        )
        raise RequestValidationError(
            f"Validation error: [{summary}]", errors=errors, params=raw
        ) from e


@router.get("/problem")
@handle_search_errors
async def search_problem(
    request: Request,
    search_service: SearchService = Depends(get_problem_search_service),
) -> JSONResponse:
    """
    Search problems.

    Returns:
        JSONResponse: Search result envelope

    Raises:
        HTTP 400: Invalid query string or parameter value
        HTTP 500: Search engine failure
    """
    params = validate_search_parameter(ProblemSearchParameter, request.url.query)
    result = await search_service.search_problems(params)
    return JSONResponse(content=result.model_dump(mode="json"))


@router.get("/user")
@handle_search_errors
async def search_user(
    request: Request,
    search_service: SearchService = Depends(get_user_search_service),
) -> JSONResponse:
    """
    Search users.

    Returns:
        JSONResponse: Search result envelope

    Raises:
        HTTP 400: Invalid query string or parameter value
        HTTP 500: Search engine failure
    """
    params = validate_search_parameter(UserSearchParameter, request.url.query)
    result = await search_service.search_users(params)
    return JSONResponse(content=result.model_dump(mode="json"))
