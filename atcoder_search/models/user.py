"""
User ranking domain models.

Dependencies: pydantic
System role: User indexing and search contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from atcoder_search.models.common import (
    RangeFilterParameter,
    SearchParameterBase,
    field_list,
    split_comma_separated,
)

RANGE_FIELDS = ("rating", "highest_rating", "birth_year", "join_count", "rank", "wins")
TERM_FIELDS = ("color", "highest_color", "affiliation", "country", "crown")

VALID_SORT_OPTIONS = frozenset(RANGE_FIELDS) | frozenset(f"-{f}" for f in RANGE_FIELDS)
VALID_FACET_FIELDS = frozenset(RANGE_FIELDS) | frozenset(TERM_FIELDS)


class UserDocument(BaseModel):
    """User as indexed in the users core."""

    user_name: str
    rating: int
    color: str
    highest_rating: int
    highest_color: str
    affiliation: str | None = None
    birth_year: int | None = None
    country: str | None = None
    crown: str | None = None
    join_count: int
    rank: int
    wins: int


class UserFilterParameter(BaseModel):
    """Filters of the user search; field order is the clause order."""

    model_config = ConfigDict(extra="ignore")

    rating: RangeFilterParameter | None = None
    color: list[str] | None = None
    highest_rating: RangeFilterParameter | None = None
    highest_color: list[str] | None = None
    affiliation: list[str] | None = None
    birth_year: RangeFilterParameter | None = None
    country: list[str] | None = None
    crown: list[str] | None = None
    join_count: RangeFilterParameter | None = None
    rank: RangeFilterParameter | None = None
    wins: RangeFilterParameter | None = None

    @field_validator(*TERM_FIELDS, mode="before")
    @classmethod
    def _split_terms(cls, value: Any) -> Any:
        return split_comma_separated(value)


class UserSearchParameter(SearchParameterBase):
    """Validated user search request."""

    filter: UserFilterParameter | None = None

    @field_validator("sort")
    @classmethod
    def _validate_sort(cls, value: str | None) -> str | None:
        if value is not None and value not in VALID_SORT_OPTIONS:
            raise ValueError("invalid sort field")
        return value

    @field_validator("facet")
    @classmethod
    def _validate_facet(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and not all(field in VALID_FACET_FIELDS for field in value):
            raise ValueError("invalid facet field")
        return value


class UserResponse(BaseModel):
    """User item of a search response."""

    user_name: str
    rating: int
    color: str
    highest_rating: int
    highest_color: str
    affiliation: str | None = None
    birth_year: int | None = None
    country: str | None = None
    crown: str | None = None
    join_count: int
    rank: int
    wins: int


USER_FIELD_LIST = field_list(UserResponse)
