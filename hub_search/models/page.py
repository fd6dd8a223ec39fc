"""Pydantic models for the search results page payload."""

from typing import Any, Literal

from pydantic import BaseModel, Field

PageState = Literal["empty_query", "results", "empty", "degraded"]


class HighlightSegment(BaseModel):
    """A run of display text, flagged when it matches the query."""

    text: str
    matched: bool = False


class StatsModel(BaseModel):
    """Result counts per category."""

    total: int = Field(default=0, ge=0)
    mentors: int = Field(default=0, ge=0)
    matches: int = Field(default=0, ge=0)
    listings: int = Field(default=0, ge=0)
    events: int = Field(default=0, ge=0)


class TabModel(BaseModel):
    """Category tab with its result count."""

    value: str
    label: str
    count: int = Field(ge=0)
    active: bool = False


class SuggestionModel(BaseModel):
    """Alternative search offered on the empty state."""

    label: str
    query: str


class ResultCard(BaseModel):
    """A single rendered search result."""

    id: str
    type: str
    type_label: str
    title: str
    description: str
    title_segments: list[HighlightSegment]
    description_segments: list[HighlightSegment]
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    relevance: float = Field(ge=0.0)
    route: str | None = Field(default=None, description="Detail page path for click-through")
    is_verified: bool = False
    city: str | None = None
    price: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchPageResponse(BaseModel):
    """Everything the results page needs to render one search."""

    query: str
    active_tab: str = "all"
    state: PageState
    summary: str | None = None
    stats: StatsModel
    tabs: list[TabModel]
    results: list[ResultCard]
    failed_sources: list[str] = Field(
        default_factory=list, description="Categories whose data source was unreachable"
    )
    suggestions: list[SuggestionModel] = Field(default_factory=list)
