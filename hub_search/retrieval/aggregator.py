"""Federated search across mentors, match profiles and listings."""

import asyncio
import logging
from collections.abc import Sequence

from hub_search.config import Settings
from hub_search.models.search import (
    EmptyQuery,
    PartialFailure,
    ResultType,
    SearchOk,
    SearchOutcome,
    SearchResult,
    SearchStats,
)
from hub_search.retrieval.adapters import (
    AdapterResult,
    EntityAdapter,
    ListingAdapter,
    MatchProfileAdapter,
    MentorAdapter,
)
from hub_search.storage.base import DataStore

logger = logging.getLogger(__name__)

ALL_TAB = "all"


class SearchAggregator:
    """Fans a query out to every adapter and merges their results.

    Adapters run concurrently and contain their own failures, so a
    search always settles; a failed source only shows up as zero results
    and an entry in PartialFailure.failed_sources.
    """

    def __init__(self, adapters: Sequence[EntityAdapter]):
        """Initialize aggregator.

        Args:
            adapters: Adapters in concatenation order, at most one per result type
        """
        types = [adapter.result_type for adapter in adapters]
        if len(set(types)) != len(types):
            raise ValueError(f"Duplicate adapter result types: {[t.value for t in types]}")
        self.adapters = list(adapters)

    @classmethod
    def from_store(cls, store: DataStore, settings: Settings | None = None) -> "SearchAggregator":
        """Build the standard mentor, match and listing adapters over one store."""
        if settings is None:
            return cls([MentorAdapter(store), MatchProfileAdapter(store), ListingAdapter(store)])

        return cls(
            [
                MentorAdapter(
                    store,
                    collection=settings.mentors_collection,
                    max_tags=settings.max_tags,
                ),
                MatchProfileAdapter(
                    store,
                    collection=settings.match_profiles_collection,
                    max_tags=settings.max_tags,
                ),
                ListingAdapter(
                    store,
                    collection=settings.listings_collection,
                    max_tags=settings.max_tags,
                ),
            ]
        )

    async def search(self, term: str) -> SearchOutcome:
        """Run a federated search.

        Args:
            term: Raw query text

        Returns:
            EmptyQuery for a blank term (no store call), otherwise SearchOk
            or PartialFailure with results sorted by relevance descending
        """
        if not term.strip():
            return EmptyQuery()

        # Surrounding whitespace is part of the query: "  housing  " is matched literally
        query = term
        logger.info(f"→ Federated search START: {query!r} across {len(self.adapters)} sources")

        adapter_results: list[AdapterResult] = await asyncio.gather(
            *(adapter.search(query) for adapter in self.adapters)
        )

        merged = self._merge(adapter_results)
        # sorted() is stable: ties keep mentor, match, listing order
        ranked = tuple(sorted(merged, key=lambda r: r.relevance, reverse=True))
        stats = self._stats(merged)
        failed = tuple(r.source for r in adapter_results if r.failed)

        logger.info(
            f"✓ Federated search COMPLETE: {stats.total} results "
            f"(mentors={stats.mentors}, matches={stats.matches}, listings={stats.listings})"
            + (f", failed sources: {[s.value for s in failed]}" if failed else "")
        )

        if failed:
            return PartialFailure(query=query, results=ranked, stats=stats, failed_sources=failed)
        return SearchOk(query=query, results=ranked, stats=stats)

    @staticmethod
    def _merge(adapter_results: Sequence[AdapterResult]) -> list[SearchResult]:
        """Concatenate adapter outputs, dropping repeated (type, id) keys."""
        seen: set[tuple[str, str]] = set()
        merged = []
        for adapter_result in adapter_results:
            for result in adapter_result.results:
                if result.key in seen:
                    logger.warning(f"Dropping duplicate search result {result.key}")
                    continue
                seen.add(result.key)
                merged.append(result)
        return merged

    @staticmethod
    def _stats(results: Sequence[SearchResult]) -> SearchStats:
        counts = {result_type: 0 for result_type in ResultType}
        for result in results:
            counts[result.type] += 1
        return SearchStats(
            total=len(results),
            mentors=counts[ResultType.MENTOR],
            matches=counts[ResultType.MATCH],
            listings=counts[ResultType.LISTING],
            events=counts[ResultType.EVENT],
        )


def filter_by_type(results: Sequence[SearchResult], tab: str) -> list[SearchResult]:
    """Client-side tab filter; keeps relative order and never re-queries.

    Args:
        results: Aggregated results
        tab: "all" or a ResultType value

    Returns:
        The results belonging to the selected tab
    """
    if tab == ALL_TAB:
        return list(results)
    result_type = ResultType(tab)
    return [result for result in results if result.type == result_type]
