"""Rendering helpers for the search results page."""

import re

from hub_search.models.page import HighlightSegment, SuggestionModel, TabModel
from hub_search.models.search import (
    ListingMetadata,
    MatchMetadata,
    MentorMetadata,
    ResultType,
    SearchResult,
    SearchStats,
)

# (value, label) pairs, in display order
TABS: tuple[tuple[str, str], ...] = (
    ("all", "All"),
    (ResultType.MENTOR.value, "Mentors"),
    (ResultType.MATCH.value, "People"),
    (ResultType.LISTING.value, "Market"),
)

EMPTY_STATE_SUGGESTIONS: tuple[SuggestionModel, ...] = (
    SuggestionModel(label="Software Engineer", query="software engineer"),
    SuggestionModel(label="Mentors", query="mentor"),
    SuggestionModel(label="Housing", query="housing"),
)


def highlight(text: str, query: str) -> list[HighlightSegment]:
    """Split text into segments, marking case-insensitive occurrences of query.

    The query is matched literally, so regex metacharacters in user
    input are harmless.
    """
    if not query or not text:
        return [HighlightSegment(text=text)]

    parts = re.split(f"({re.escape(query)})", text, flags=re.IGNORECASE)
    lowered = query.lower()
    return [
        HighlightSegment(text=part, matched=part.lower() == lowered)
        for part in parts
        if part
    ]


def result_route(result: SearchResult) -> str | None:
    """Detail page path a result card links to."""
    match result.metadata:
        case MentorMetadata(user_id=user_id):
            return f"/mentor/{user_id}"
        case MatchMetadata(user_id=user_id):
            return f"/match/profile/{user_id}"
        case ListingMetadata():
            return f"/listing/{result.id}"
    return None


def type_label(result_type: ResultType) -> str:
    """Badge text for a result type."""
    return result_type.value.capitalize()


def is_verified(result: SearchResult) -> bool:
    """Whether the card shows a verified badge (mentors only)."""
    return isinstance(result.metadata, MentorMetadata) and result.metadata.is_verified


def build_tabs(stats: SearchStats, active_tab: str = "all") -> list[TabModel]:
    """Tabs with their counts, marking the active one."""
    return [
        TabModel(value=value, label=label, count=stats.count_for(value), active=value == active_tab)
        for value, label in TABS
    ]


def summary_line(stats: SearchStats, query: str) -> str:
    """Result count line shown under the search box."""
    return f'About {stats.total:,} results for "{query}"'
