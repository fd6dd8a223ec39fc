"""Data models for the community hub search service."""

from hub_search.models.error import ErrorResponse
from hub_search.models.page import (
    HighlightSegment,
    ResultCard,
    SearchPageResponse,
    StatsModel,
    SuggestionModel,
    TabModel,
)
from hub_search.models.search import (
    EmptyQuery,
    ListingMetadata,
    MatchMetadata,
    MentorMetadata,
    PartialFailure,
    ResultMetadata,
    ResultType,
    SearchOk,
    SearchOutcome,
    SearchResult,
    SearchStats,
)

__all__ = [
    # Search domain models
    "ResultType",
    "MentorMetadata",
    "MatchMetadata",
    "ListingMetadata",
    "ResultMetadata",
    "SearchResult",
    "SearchStats",
    "EmptyQuery",
    "SearchOk",
    "PartialFailure",
    "SearchOutcome",
    # Page models
    "HighlightSegment",
    "StatsModel",
    "TabModel",
    "SuggestionModel",
    "ResultCard",
    "SearchPageResponse",
    # Error models
    "ErrorResponse",
]
