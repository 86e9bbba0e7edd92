"""
Search error handling utilities.

Decorator mapping search failures to JSON responses in the search result
envelope: request validation errors become 400 with the validation
message, engine failures become 500 with a generic message while the
cause is logged.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from atcoder_search.core.exceptions import (
    AtCoderSearchException,
    RequestValidationError,
    SearchEngineError,
)
from atcoder_search.models.common import SearchResultResponse
from atcoder_search.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

UNEXPECTED_ERROR = "unexpected error"


def _error_response(status_code: int, params: Any, message: str) -> JSONResponse:
    body = SearchResultResponse.error(params if isinstance(params, dict) else {}, message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def handle_search_errors(func: F) -> F:
    """
    Decorator converting search exceptions into JSON error responses.

    This centralizes:
    - Logging of errors with context
    - Mapping exceptions to HTTP status codes
    - Uniform error bodies echoing the request parameters
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except RequestValidationError as e:
            logger.warning(
                "Invalid search request",
                extra={"error_msg": e.message, "errors": str(e.errors)},
            )
            return _error_response(status.HTTP_400_BAD_REQUEST, e.params, e.message)

        except SearchEngineError as e:
            log_exception_with_context(
                logger,
                "request failed",
                e,
                operation=e.operation,
                status_code=e.status_code,
            )
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, e.details.get("params"), UNEXPECTED_ERROR
            )

        except AtCoderSearchException as e:
            log_exception_with_context(logger, "Unexpected failure in search", e)
            return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, None, UNEXPECTED_ERROR)

    return wrapper  # type: ignore
