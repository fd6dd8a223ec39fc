"""Search components: relevance scoring, entity adapters and aggregation."""

from hub_search.retrieval.adapters import (
    AdapterResult,
    EntityAdapter,
    ListingAdapter,
    MatchProfileAdapter,
    MentorAdapter,
)
from hub_search.retrieval.aggregator import ALL_TAB, SearchAggregator, filter_by_type
from hub_search.retrieval.relevance import build_search_text, matches, score

__all__ = [
    "ALL_TAB",
    "AdapterResult",
    "EntityAdapter",
    "ListingAdapter",
    "MatchProfileAdapter",
    "MentorAdapter",
    "SearchAggregator",
    "build_search_text",
    "filter_by_type",
    "matches",
    "score",
]
