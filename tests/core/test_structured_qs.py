"""
Tests for structured query string decoding.
"""

import pytest

from atcoder_search.core.exceptions import RequestValidationError
from atcoder_search.core.search.structured_qs import parse_structured_query
from atcoder_search.models.problem import ProblemSearchParameter


class TestParseStructuredQuery:
    """Test suite for parse_structured_query."""

    def test_nested_keys(self):
        parsed = parse_structured_query(
            "keyword=dp&facet=category,difficulty"
            "&filter.category=ABC,ARC&filter.difficulty.from=800&sort=-score"
        )

        assert parsed == {
            "keyword": "dp",
            "facet": "category,difficulty",
            "filter": {"category": "ABC,ARC", "difficulty": {"from": "800"}},
            "sort": "-score",
        }

    def test_percent_decoding(self):
        assert parse_structured_query("keyword=%E4%BA%8C%E5%88%86+%E6%8E%A2%E7%B4%A2") == {
            "keyword": "二分 探索"
        }

    def test_empty(self):
        assert parse_structured_query("") == {}

    def test_blank_values_dropped(self):
        assert parse_structured_query("keyword=&limit=10") == {"limit": "10"}

    def test_last_value_wins(self):
        assert parse_structured_query("page=1&page=2") == {"page": "2"}

    @pytest.mark.parametrize(
        "query_string",
        ["filter=1&filter.category=ABC", "filter.category=ABC&filter=1", "filter..from=1", ".a=1"],
    )
    def test_malformed(self, query_string):
        with pytest.raises(RequestValidationError) as exc_info:
            parse_structured_query(query_string)

        assert exc_info.value.message.startswith("invalid format query string")

    def test_feeds_request_model(self):
        params = ProblemSearchParameter.model_validate(
            parse_structured_query("filter.difficulty.from=800&filter.difficulty.to=1600&limit=50")
        )

        assert params.limit == 50
        assert params.filter.difficulty.from_ == 800
        assert params.filter.difficulty.to == 1600
