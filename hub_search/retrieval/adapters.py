"""Per-entity search adapters over the data store."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from hub_search.models.search import (
    ListingMetadata,
    MatchMetadata,
    MentorMetadata,
    ResultType,
    SearchResult,
)
from hub_search.retrieval.relevance import matches, score
from hub_search.storage.base import DataStore, Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterResult:
    """What one adapter contributed to a search."""

    source: ResultType
    results: list[SearchResult] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def _cents_to_price(cents: Any) -> float | None:
    return cents / 100 if cents else None


def _first(values: Any) -> Any:
    return values[0] if values else None


def _as_list(values: Any) -> list:
    return list(values) if values else []


class EntityAdapter(ABC):
    """Base adapter: fetch a collection, filter it locally, score and map.

    Subclasses declare which fields feed the search text (in relevance
    priority order) and how a matching row becomes a SearchResult.
    """

    result_type: ResultType
    default_collection: str
    default_filters: dict[str, Any]

    def __init__(
        self,
        store: DataStore,
        collection: str | None = None,
        filters: dict[str, Any] | None = None,
        max_tags: int = 3,
    ):
        """Initialize adapter.

        Args:
            store: Data store to read rows from
            collection: Table name (defaults to the adapter's usual table)
            filters: Equality filters selecting searchable rows
            max_tags: Maximum number of tags per result
        """
        self.store = store
        self.collection = collection or self.default_collection
        self.filters = dict(self.default_filters if filters is None else filters)
        self.max_tags = max_tags

    @abstractmethod
    def search_fields(self, row: Row) -> list[Any]:
        """Fields used for both filtering and scoring, title first."""

    @abstractmethod
    def to_result(self, row: Row, relevance: float) -> SearchResult:
        """Map a matching row into a SearchResult."""

    async def search(self, term: str) -> AdapterResult:
        """Return this adapter's matches for a term.

        Never raises: a store failure is logged and reported as an empty
        result list with the error message attached. A malformed row is
        logged and skipped without affecting the other rows.

        Args:
            term: Query text, matched as given

        Returns:
            AdapterResult with matches in store order
        """
        try:
            rows = await self.store.fetch(self.collection, self.filters)
            if not rows:
                return AdapterResult(source=self.result_type)

            results = []
            skipped = 0
            for row in rows:
                try:
                    fields = self.search_fields(row)
                    if not matches(term, fields):
                        continue
                    results.append(self.to_result(row, score(term, fields)))
                except (AttributeError, KeyError, TypeError, ValueError) as e:
                    skipped += 1
                    logger.warning(
                        f"  Skipping malformed {self.result_type.value} row: {type(e).__name__}: {e}"
                    )

            logger.debug(
                f"  {self.result_type.value} search - {len(results)}/{len(rows)} rows matched"
                + (f", {skipped} skipped" if skipped else "")
            )
            return AdapterResult(source=self.result_type, results=results)

        except Exception as e:
            logger.error(f"  {self.result_type.value.capitalize()} search FAILED: {e}")
            return AdapterResult(source=self.result_type, error=str(e) or type(e).__name__)


class MentorAdapter(EntityAdapter):
    """Searches available mentors by name, title, bio and expertise."""

    result_type = ResultType.MENTOR
    default_collection = "mentors"
    default_filters = {"available": True}

    def search_fields(self, row: Row) -> list[Any]:
        return [row.get("name"), row.get("title"), row.get("bio"), *_as_list(row.get("expertise"))]

    def to_result(self, row: Row, relevance: float) -> SearchResult:
        expertise = _as_list(row.get("expertise"))
        return SearchResult(
            id=str(row["id"]),
            type=self.result_type,
            title=row.get("name") or "",
            description=f"{row.get('title') or ''} • {', '.join(expertise[:2])}",
            image=row.get("avatar_url"),
            tags=tuple(expertise[: self.max_tags]),
            relevance=relevance,
            metadata=MentorMetadata(
                user_id=str(row.get("user_id") or ""),
                price=_cents_to_price(row.get("price_cents")),
                city=row.get("city"),
                is_verified=bool(row.get("is_verified")),
                rating=row.get("rating_avg"),
            ),
        )


class MatchProfileAdapter(EntityAdapter):
    """Searches active match profiles by names, bio, seeking and interests."""

    result_type = ResultType.MATCH
    default_collection = "match_profiles"
    default_filters = {"active": True}

    def search_fields(self, row: Row) -> list[Any]:
        return [
            row.get("name"),
            row.get("display_name"),
            row.get("bio"),
            row.get("seeking"),
            *_as_list(row.get("interests")),
        ]

    def to_result(self, row: Row, relevance: float) -> SearchResult:
        interests = _as_list(row.get("interests"))
        return SearchResult(
            id=str(row["id"]),
            type=self.result_type,
            title=row.get("display_name") or row.get("name") or "",
            description=f"{row.get('seeking') or 'Looking to connect'} • {row.get('city') or ''}",
            image=_first(row.get("photos")),
            tags=tuple(interests[: self.max_tags]),
            relevance=relevance,
            metadata=MatchMetadata(
                user_id=str(row.get("user_id") or ""),
                city=row.get("city"),
                seeking=row.get("seeking"),
            ),
        )


class ListingAdapter(EntityAdapter):
    """Searches active marketplace listings by title, description, category and city."""

    result_type = ResultType.LISTING
    default_collection = "listings"
    default_filters = {"status": "active"}

    def search_fields(self, row: Row) -> list[Any]:
        return [row.get("title"), row.get("description"), row.get("category"), row.get("city")]

    def to_result(self, row: Row, relevance: float) -> SearchResult:
        category = row.get("category")
        return SearchResult(
            id=str(row["id"]),
            type=self.result_type,
            title=row.get("title") or "",
            description=row.get("description") or "",
            image=_first(row.get("images")),
            tags=(category,) if category else (),
            relevance=relevance,
            metadata=ListingMetadata(
                price=_cents_to_price(row.get("price_cents")),
                city=row.get("city"),
                category=category,
            ),
        )
