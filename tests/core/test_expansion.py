"""
Tests for field expansion of document models.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from atcoder_search.core.indexing.expansion import (
    expand,
    field_suffixes,
    suffix,
    to_solr_datetime,
)
from atcoder_search.models.problem import ProblemDocument


class SampleDocument(BaseModel):
    key: str
    title: str = suffix("text_ja", "text_en")
    tags: list[str] = suffix("text_ja", default_factory=list)
    score: int | None = None


def make_problem(**overrides) -> ProblemDocument:
    values = dict(
        problem_id="abc300_a",
        problem_title="A. N-choice question",
        problem_url="https://atcoder.jp/contests/abc300/tasks/abc300_a",
        contest_id="abc300",
        contest_title="AtCoder Beginner Contest 300",
        contest_url="https://atcoder.jp/contests/abc300",
        difficulty=None,
        color=None,
        start_at=datetime(2023, 4, 29, 12, 0, tzinfo=timezone.utc),
        duration=6000,
        rate_change=" ~ 1999",
        category="ABC",
        statement_ja=["問題文"],
        statement_en=["Statement"],
    )
    values.update(overrides)
    return ProblemDocument(**values)


class TestExpand:
    """Test suite for expand."""

    def test_suffixed_fields_are_duplicated(self):
        document = expand(SampleDocument(key="k", title="t", tags=["a"]))

        assert document["title"] == "t"
        assert document["title__text_ja"] == "t"
        assert document["title__text_en"] == "t"
        assert document["tags__text_ja"] == ["a"]

    def test_declaration_order(self):
        document = expand(SampleDocument(key="k", title="t"))

        assert list(document) == [
            "key",
            "title",
            "title__text_ja",
            "title__text_en",
            "tags",
            "tags__text_ja",
            "score",
        ]

    def test_none_is_kept(self):
        document = expand(SampleDocument(key="k", title="t"))

        assert document["score"] is None

    def test_list_copies_are_independent(self):
        document = expand(SampleDocument(key="k", title="t", tags=["a"]))
        document["tags"].append("b")

        assert document["tags__text_ja"] == ["a"]

    def test_problem_document_fields(self):
        document = expand(make_problem())

        assert document["statement_ja__text_reading"] == ["問題文"]
        assert document["statement_en__text_en"] == ["Statement"]
        assert document["contest_title__text_en"] == "AtCoder Beginner Contest 300"
        assert document["start_at"] == "2023-04-29T12:00:00Z"
        assert "problem_url__text_ja" not in document


class TestFieldSuffixes:
    def test_declared(self):
        assert field_suffixes(SampleDocument, "title") == ["text_ja", "text_en"]

    def test_plain_field(self):
        assert field_suffixes(SampleDocument, "key") == []


class TestToSolrDatetime:
    def test_converts_to_utc(self):
        jst = timezone(timedelta(hours=9))

        assert to_solr_datetime(datetime(2023, 4, 29, 21, 0, tzinfo=jst)) == "2023-04-29T12:00:00Z"

    def test_naive_is_utc(self):
        assert to_solr_datetime(datetime(1970, 1, 1)) == "1970-01-01T00:00:00Z"
