"""
FastAPI application with assembled routers.

Initializes FastAPI app with the search and health routers and configures
the uvicorn server.

Dependencies: fastapi, atcoder_search.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from atcoder_search.api.deps import get_core_cache
from atcoder_search.configs import get_settings
from atcoder_search.observability.middleware import RequestLoggingMiddleware

from .routers import health_router, search_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Closes the cached Solr clients on shutdown.
    """
    logger = logging.getLogger("uvicorn")
    yield
    await get_core_cache().close()
    logger.info("Solr clients closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="AtCoder Search API",
        description="Full-text search over AtCoder problems and user rankings",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router, prefix="/api")
    app.include_router(search_router, prefix="/api")

    return app


def run(host: str | None = None, port: int | None = None) -> None:
    """Serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "atcoder_search.api.main:create_app",
        factory=True,
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
