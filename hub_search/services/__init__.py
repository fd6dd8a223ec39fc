"""Service layer for search orchestration."""

from hub_search.services.search_service import SearchService, SearchSession, SearchState

__all__ = [
    "SearchService",
    "SearchSession",
    "SearchState",
]
