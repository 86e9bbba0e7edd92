"""
Tests for the search service.
"""

from unittest.mock import AsyncMock

import pytest

from atcoder_search.application.services.search_service import SearchService, parse_facets
from atcoder_search.boundary.solr.models import SolrSelectResponse
from atcoder_search.core.exceptions import SearchEngineError
from atcoder_search.models.problem import ProblemResponse, ProblemSearchParameter
from atcoder_search.models.user import UserResponse, UserSearchParameter

PROBLEM_DOC = {
    "problem_id": "abc300_a",
    "problem_title": "A. N-choice question",
    "problem_url": "https://atcoder.jp/contests/abc300/tasks/abc300_a",
    "contest_id": "abc300",
    "contest_title": "AtCoder Beginner Contest 300",
    "contest_url": "https://atcoder.jp/contests/abc300",
    "difficulty": 23,
    "color": "gray",
    "start_at": "2023-04-29T12:00:00Z",
    "duration": 6000,
    "rate_change": " ~ 1999",
    "category": "ABC",
}

USER_DOC = {
    "user_name": "tourist",
    "rating": 3800,
    "color": "gold",
    "highest_rating": 4229,
    "highest_color": "gold",
    "country": "BY",
    "join_count": 60,
    "rank": 1,
    "wins": 20,
}


def select_response(model, docs, num_found, start, facets=None):
    body = {
        "responseHeader": {"status": 0, "QTime": 3},
        "response": {"numFound": num_found, "start": start, "docs": docs},
    }
    if facets is not None:
        body["facets"] = facets
    return SolrSelectResponse[model].model_validate(body)


@pytest.fixture
def mock_core():
    core = AsyncMock()
    core.name = "problems"
    return core


class TestParseFacets:
    def test_term_and_range_facets(self):
        parsed = parse_facets(
            {
                "count": 45,
                "category": {"buckets": [{"val": "ABC", "count": 40}, {"val": "ARC", "count": 5}]},
                "rating": {
                    "buckets": [{"val": 0, "count": 3}],
                    "before": {"count": 0},
                    "after": {"count": 1},
                    "between": {"count": 3},
                },
            }
        )

        assert parsed["count"] == 45
        assert parsed["category"] == {
            "buckets": [{"val": "ABC", "count": 40}, {"val": "ARC", "count": 5}]
        }
        assert parsed["rating"]["after"] == {"count": 1}
        assert parsed["rating"]["buckets"] == [{"val": 0, "count": 3}]

    def test_no_facets(self):
        assert parse_facets(None) == {}

    def test_bucket_without_count(self):
        with pytest.raises(SearchEngineError) as exc_info:
            parse_facets({"category": {"buckets": [{"val": "ABC"}]}})

        assert exc_info.value.operation == "select"
        assert "category" in exc_info.value.message


class TestSearchService:
    """Test suite for SearchService."""

    @pytest.mark.asyncio
    async def test_problem_stats(self, mock_core):
        mock_core.select.return_value = select_response(
            ProblemResponse, [PROBLEM_DOC] * 20, num_found=45, start=20
        )
        params = ProblemSearchParameter(keyword="dp", limit=20, page=2)

        result = await SearchService(mock_core).search_problems(params)

        assert result.stats.total == 45
        assert result.stats.index == 2
        assert result.stats.pages == 3
        assert result.stats.count == 20
        assert result.stats.params == {"keyword": "dp", "limit": 20, "page": 2}
        assert result.items[0].problem_id == "abc300_a"

    @pytest.mark.asyncio
    async def test_select_receives_query(self, mock_core):
        mock_core.select.return_value = select_response(ProblemResponse, [], 0, 0)

        await SearchService(mock_core).search_problems(ProblemSearchParameter(page=3))

        query = mock_core.select.await_args.args[0]
        assert ("start", "40") in query
        assert mock_core.select.await_args.kwargs["document_model"] is ProblemResponse

    @pytest.mark.asyncio
    async def test_no_hits(self, mock_core):
        mock_core.select.return_value = select_response(ProblemResponse, [], 0, 0)

        result = await SearchService(mock_core).search_problems(ProblemSearchParameter())

        assert result.stats.total == 0
        assert result.stats.pages == 0
        assert result.stats.index == 1
        assert result.items == []

    @pytest.mark.asyncio
    async def test_user_search(self, mock_core):
        mock_core.select.return_value = select_response(
            UserResponse,
            [USER_DOC],
            num_found=1,
            start=0,
            facets={"count": 1, "color": {"buckets": [{"val": "gold", "count": 1}]}},
        )

        result = await SearchService(mock_core).search_users(UserSearchParameter(facet=["color"]))

        assert result.items[0].user_name == "tourist"
        assert result.stats.facet["color"]["buckets"][0]["val"] == "gold"

    @pytest.mark.asyncio
    async def test_engine_error_carries_params(self, mock_core):
        mock_core.select.side_effect = SearchEngineError("unexpected error", operation="select")

        with pytest.raises(SearchEngineError) as exc_info:
            await SearchService(mock_core).search_problems(ProblemSearchParameter(keyword="dp"))

        assert exc_info.value.details["params"] == {"keyword": "dp"}

    @pytest.mark.asyncio
    async def test_undecodable_facets_carry_params(self, mock_core):
        mock_core.select.return_value = select_response(
            ProblemResponse,
            [],
            num_found=0,
            start=0,
            facets={"count": 0, "category": {"buckets": [{"val": "ABC"}]}},
        )
        params = ProblemSearchParameter(facet=["category"])

        with pytest.raises(SearchEngineError) as exc_info:
            await SearchService(mock_core).search_problems(params)

        assert exc_info.value.details["params"] == {"facet": ["category"]}

    @pytest.mark.asyncio
    async def test_query_log(self, mock_core, caplog):
        mock_core.select.return_value = select_response(ProblemResponse, [], 0, 0)

        with caplog.at_level("INFO", logger="querylog"):
            await SearchService(mock_core).search_problems(ProblemSearchParameter(keyword="dp"))

        records = [r for r in caplog.records if r.name == "querylog"]
        assert len(records) == 1
        assert "hits=0" in records[0].getMessage()
        assert '"keyword": "dp"' in records[0].getMessage()
