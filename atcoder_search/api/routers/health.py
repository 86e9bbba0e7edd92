"""
Health check API endpoints.

Routes: GET /liveness, GET /readiness

Dependencies: atcoder_search.boundary.solr
System role: Health check HTTP API
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from atcoder_search.api.deps import get_search_cores
from atcoder_search.boundary.solr import StandaloneSolrCore
from atcoder_search.core.exceptions import SearchEngineError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(tags=["health"])


def _respond(healthy: bool, message: str) -> JSONResponse:
    body = HealthResponse(status="healthy" if healthy else "unhealthy", message=message)
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


async def _ping(core: StandaloneSolrCore) -> bool:
    try:
        await core.ping()
    except SearchEngineError as e:
        logger.error("Core ping failed", extra={"core": core.name, "error_msg": str(e)})
        return False
    return True


async def _has_documents(core: StandaloneSolrCore) -> bool:
    try:
        core_status = await core.status()
    except SearchEngineError as e:
        logger.error("Core status failed", extra={"core": core.name, "error_msg": str(e)})
        return False
    return core_status.index.num_docs > 0


@router.get("/liveness", response_model=HealthResponse)
async def liveness(cores: list[StandaloneSolrCore] = Depends(get_search_cores)) -> JSONResponse:
    """Every core answers ping."""
    results = await asyncio.gather(*(_ping(core) for core in cores))
    if all(results):
        return _respond(True, "All cores alive")
    return _respond(False, "Core ping failed")


@router.get("/readiness", response_model=HealthResponse)
async def readiness(cores: list[StandaloneSolrCore] = Depends(get_search_cores)) -> JSONResponse:
    """Every core holds at least one document."""
    results = await asyncio.gather(*(_has_documents(core) for core in cores))
    if all(results):
        return _respond(True, "All cores ready")
    return _respond(False, "Core not ready")
