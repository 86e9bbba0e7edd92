"""
Problem domain models.

Indexed problem document, search request parameters and the response
item returned by the problem search API.

Dependencies: pydantic, atcoder_search.core.indexing.expansion
System role: Problem indexing and search contracts
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from atcoder_search.core.indexing.expansion import suffix
from atcoder_search.models.common import (
    RangeFilterParameter,
    SearchParameterBase,
    field_list,
    split_comma_separated,
)

# Values accepted by the `sort` parameter
VALID_SORT_OPTIONS = frozenset({
    "start_at",
    "-start_at",
    "difficulty",
    "-difficulty",
    "-score",
})

# `facet` parameter value => field the counts are computed on
FACET_FIELDS: dict[str, str] = {
    "category": "category",
    "difficulty": "color",
}


class ProblemDocument(BaseModel):
    """Problem as indexed in the problems core."""

    problem_id: str
    problem_title: str = suffix("text_ja", "text_en")
    problem_url: str
    contest_id: str
    contest_title: str = suffix("text_ja", "text_en")
    contest_url: str
    difficulty: int | None = None
    color: str | None = None
    start_at: datetime
    duration: int
    rate_change: str
    category: str
    statement_ja: list[str] = suffix("text_ja", "text_reading", default_factory=list)
    statement_en: list[str] = suffix("text_en", default_factory=list)


class ProblemFilterParameter(BaseModel):
    """Filters of the problem search."""

    model_config = ConfigDict(extra="ignore")

    category: list[str] | None = None
    difficulty: RangeFilterParameter | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _split_category(cls, value: Any) -> Any:
        return split_comma_separated(value)


class ProblemSearchParameter(SearchParameterBase):
    """Validated problem search request."""

    filter: ProblemFilterParameter | None = None

    @field_validator("sort")
    @classmethod
    def _validate_sort(cls, value: str | None) -> str | None:
        if value is not None and value not in VALID_SORT_OPTIONS:
            raise ValueError("invalid sort field")
        return value

    @field_validator("facet")
    @classmethod
    def _validate_facet(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and not all(field in FACET_FIELDS for field in value):
            raise ValueError("invalid facet field")
        return value


class ProblemResponse(BaseModel):
    """Problem item of a search response."""

    problem_id: str
    problem_title: str
    problem_url: str
    contest_id: str
    contest_title: str
    contest_url: str
    difficulty: int | None = None
    color: str | None = None
    start_at: datetime
    duration: int
    rate_change: str
    category: str


PROBLEM_FIELD_LIST = field_list(ProblemResponse)
