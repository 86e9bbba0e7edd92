"""
Common search request and response models.

Range filter parameters, comma-separated list decoding and the generic
search result envelope.

Dependencies: pydantic
System role: Shared search API contracts
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

D = TypeVar("D")

MAX_LIMIT = 200
MAX_KEYWORD_LENGTH = 200
DEFAULT_ROWS = 20

RATING_COLORS = (
    (400, "gray"),
    (800, "brown"),
    (1200, "green"),
    (1600, "cyan"),
    (2000, "blue"),
    (2400, "yellow"),
    (2800, "orange"),
    (3200, "red"),
    (3600, "silver"),
)


def field_list(model: type[BaseModel]) -> str:
    """Comma-separated field names of a response model, for the ``fl`` parameter."""
    return ",".join(model.model_fields)


def rate_to_color(rate: int) -> str:
    """
    Colour band of a rating or difficulty.

    Bands are 400 wide from gray below 400 up to gold from 3600.
    """
    for upper, color in RATING_COLORS:
        if rate < upper:
            return color
    return "gold"


def split_comma_separated(value: Any) -> Any:
    """Split ``"a,b"`` into ``["a", "b"]``; lists and None pass through."""
    if isinstance(value, str):
        return [item for item in value.split(",") if item != ""]
    return value


class RangeFilterParameter(BaseModel):
    """Numeric range; ``from`` is inclusive and ``to`` exclusive."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_: int | None = Field(default=None, alias="from")
    to: int | None = None


class SearchParameterBase(BaseModel):
    """
    Keyword, paging, sort and facet axes shared by every search endpoint.

    Unknown keys, such as cache-busting parameters, are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    keyword: str | None = Field(default=None, max_length=MAX_KEYWORD_LENGTH)
    limit: int | None = Field(default=None, ge=1, le=MAX_LIMIT)
    page: int | None = Field(default=None, ge=1)
    sort: str | None = None
    facet: list[str] | None = None

    @field_validator("facet", mode="before")
    @classmethod
    def _split_facet(cls, value: Any) -> Any:
        return split_comma_separated(value)

    @property
    def rows(self) -> int:
        return self.limit or DEFAULT_ROWS

    def echo(self) -> dict[str, Any]:
        """Parameters as echoed in responses: set values only, aliases applied."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SearchResultStats(BaseModel):
    """Paging and timing information of a search response."""

    time: int = 0
    total: int = 0
    index: int = 0
    pages: int = 0
    count: int = 0
    params: dict[str, Any] = Field(default_factory=dict)
    facet: dict[str, Any] = Field(default_factory=dict)


class SearchResultResponse(BaseModel, Generic[D]):
    """Search response envelope."""

    stats: SearchResultStats
    items: list[D] = Field(default_factory=list)
    message: str | None = None

    @classmethod
    def error(cls, params: dict[str, Any], message: str) -> "SearchResultResponse[D]":
        """Empty result carrying the echoed parameters and an error message."""
        return cls(stats=SearchResultStats(params=params), items=[], message=message)
