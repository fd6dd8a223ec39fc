"""In-memory data store for tests and local development."""

import asyncio
import copy
import logging
from typing import Any

from hub_search.storage.base import Row, StoreError

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Dict-backed store with equality filtering.

    Rows are deep-copied on the way in and out so callers can never
    mutate stored data. Failures and latency can be injected per
    collection to exercise degraded searches.
    """

    def __init__(self, collections: dict[str, list[Row]] | None = None):
        """Initialize in-memory store.

        Args:
            collections: Mapping of collection name to rows
        """
        self._collections: dict[str, list[Row]] = {
            name: copy.deepcopy(rows) for name, rows in (collections or {}).items()
        }
        self._failures: dict[str, Exception] = {}
        self._delays: dict[str, float] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def add_rows(self, collection: str, rows: list[Row]) -> None:
        """Append rows to a collection, creating it if needed."""
        self._collections.setdefault(collection, []).extend(copy.deepcopy(rows))

    def fail_collection(self, collection: str, error: Exception | None = None) -> None:
        """Make every fetch of a collection raise."""
        self._failures[collection] = error or StoreError(
            f"Injected failure for '{collection}'", collection=collection
        )

    def delay_collection(self, collection: str, seconds: float) -> None:
        """Make every fetch of a collection wait before answering."""
        self._delays[collection] = seconds

    def reset_failures(self) -> None:
        """Remove injected failures and delays."""
        self._failures.clear()
        self._delays.clear()

    async def fetch(self, collection: str, filters: dict[str, Any]) -> list[Row]:
        """Return rows whose columns equal every filter value.

        Raises:
            StoreError: If the collection does not exist or a failure was injected
        """
        self.calls.append((collection, dict(filters)))

        delay = self._delays.get(collection)
        if delay:
            await asyncio.sleep(delay)

        if collection in self._failures:
            raise self._failures[collection]

        if collection not in self._collections:
            raise StoreError(f"Unknown collection '{collection}'", collection=collection)

        rows = [
            row
            for row in self._collections[collection]
            if all(row.get(column) == value for column, value in filters.items())
        ]
        logger.debug(f"InMemoryStore.fetch({collection}, {filters}) -> {len(rows)} rows")
        return copy.deepcopy(rows)
