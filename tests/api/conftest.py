"""
API test fixtures.

Builds the application with the search services and health cores
replaced by mocks through FastAPI dependency overrides.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from atcoder_search.api.deps import (
    get_problem_search_service,
    get_search_cores,
    get_user_search_service,
)
from atcoder_search.api.main import create_app
from atcoder_search.application.services import SearchService


def make_core(name: str) -> AsyncMock:
    core = AsyncMock()
    core.name = name
    return core


@pytest.fixture
def problem_core() -> AsyncMock:
    return make_core("problems")


@pytest.fixture
def user_core() -> AsyncMock:
    return make_core("users")


@pytest.fixture
def client(problem_core, user_core):
    app = create_app()
    app.dependency_overrides[get_problem_search_service] = lambda: SearchService(problem_core)
    app.dependency_overrides[get_user_search_service] = lambda: SearchService(user_core)
    app.dependency_overrides[get_search_cores] = lambda: [problem_core, user_core]
    yield TestClient(app)
    app.dependency_overrides.clear()
