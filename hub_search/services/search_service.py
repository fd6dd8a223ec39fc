"""Search services: page assembly and sequenced interactive sessions."""

import itertools
from dataclasses import asdict
from enum import Enum

from hub_search.logging_config import get_logger
from hub_search.models.page import ResultCard, SearchPageResponse, StatsModel
from hub_search.models.search import (
    EmptyQuery,
    PartialFailure,
    ResultType,
    SearchOutcome,
    SearchResult,
    SearchStats,
)
from hub_search.presentation import (
    EMPTY_STATE_SUGGESTIONS,
    build_tabs,
    highlight,
    is_verified,
    result_route,
    summary_line,
    type_label,
)
from hub_search.retrieval.aggregator import ALL_TAB, SearchAggregator, filter_by_type

logger = get_logger(__name__)


class SearchState(str, Enum):
    """Lifecycle of an interactive search."""

    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS = "results"
    EMPTY = "empty"
    DEGRADED = "degraded"


def _state_for(outcome: SearchOutcome) -> SearchState:
    if isinstance(outcome, EmptyQuery):
        return SearchState.IDLE
    if isinstance(outcome, PartialFailure):
        return SearchState.DEGRADED
    return SearchState.RESULTS if outcome.results else SearchState.EMPTY


class SearchSession:
    """Interactive search state for one user on the results page.

    Every submission gets a monotonically increasing request id. When a
    slower, older search settles after a newer one was submitted, its
    outcome is discarded instead of overwriting the newer results.
    """

    def __init__(self, aggregator: SearchAggregator):
        self.aggregator = aggregator
        self.state = SearchState.IDLE
        self.query = ""
        self.active_tab = ALL_TAB
        self.results: tuple[SearchResult, ...] = ()
        self.stats = SearchStats()
        self.outcome: SearchOutcome | None = None
        self._request_ids = itertools.count(1)
        self._latest_request = 0

    @property
    def latest_request(self) -> int:
        return self._latest_request

    @property
    def visible_results(self) -> list[SearchResult]:
        """Current results filtered by the active tab."""
        return filter_by_type(self.results, self.active_tab)

    def select_tab(self, tab: str) -> list[SearchResult]:
        """Switch tabs; re-filters the current results without searching."""
        if tab != ALL_TAB:
            ResultType(tab)
        self.active_tab = tab
        return self.visible_results

    def _apply(self, outcome: SearchOutcome) -> None:
        self.outcome = outcome
        self.query = outcome.query
        self.results = outcome.results
        if not isinstance(outcome, EmptyQuery):
            self.stats = outcome.stats
        self.state = _state_for(outcome)

    async def submit(self, term: str) -> SearchOutcome | None:
        """Run a search and apply its outcome unless a newer one superseded it.

        Args:
            term: Raw query text

        Returns:
            The applied outcome, or None when the search was superseded
        """
        request_id = next(self._request_ids)
        self._latest_request = request_id

        if not term.strip():
            # Blank submissions clear the list but keep the previous counts
            self._apply(EmptyQuery())
            return self.outcome

        self.state = SearchState.SEARCHING
        outcome = await self.aggregator.search(term)

        if request_id != self._latest_request:
            logger.debug(
                f"Discarding results of superseded search #{request_id} "
                f"('{term}'); latest is #{self._latest_request}"
            )
            return None

        self._apply(outcome)
        return outcome


class SearchService:
    """Stateless service answering results page requests."""

    def __init__(self, aggregator: SearchAggregator):
        """Initialize search service.

        Args:
            aggregator: Federated search aggregator
        """
        self.aggregator = aggregator

    async def search_page(self, query: str, tab: str = ALL_TAB) -> SearchPageResponse:
        """Search and assemble the results page payload.

        Args:
            query: Raw query text (the page's q parameter)
            tab: Active category tab

        Returns:
            SearchPageResponse ready for rendering
        """
        outcome = await self.aggregator.search(query)
        return self.build_page(outcome, tab)

    def build_page(self, outcome: SearchOutcome, tab: str = ALL_TAB) -> SearchPageResponse:
        """Turn a search outcome into the page payload."""
        stats = outcome.stats
        visible = filter_by_type(outcome.results, tab)
        state = _state_for(outcome)

        if isinstance(outcome, EmptyQuery):
            page_state = "empty_query"
        else:
            page_state = state.value

        failed_sources = (
            [source.value for source in outcome.failed_sources]
            if isinstance(outcome, PartialFailure)
            else []
        )
        suggestions = (
            list(EMPTY_STATE_SUGGESTIONS)
            if outcome.query and not outcome.results
            else []
        )

        return SearchPageResponse(
            query=outcome.query,
            active_tab=tab,
            state=page_state,
            summary=summary_line(stats, outcome.query) if outcome.query else None,
            stats=StatsModel(**asdict(stats)),
            tabs=build_tabs(stats, tab),
            results=[self.build_card(result, outcome.query) for result in visible],
            failed_sources=failed_sources,
            suggestions=suggestions,
        )

    @staticmethod
    def build_card(result: SearchResult, query: str) -> ResultCard:
        """Render one result with highlighting and its click-through route."""
        data = result.to_dict()
        metadata = data["metadata"]
        return ResultCard(
            **data,
            type_label=type_label(result.type),
            title_segments=highlight(result.title, query),
            description_segments=highlight(result.description, query),
            route=result_route(result),
            is_verified=is_verified(result),
            city=metadata.get("city"),
            price=metadata.get("price"),
        )
