"""Data store contract consumed by the search adapters."""

from typing import Any, Protocol

Row = dict[str, Any]


class StoreError(Exception):
    """Raised when the data store cannot answer a fetch."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.collection = collection
        self.status_code = status_code


class DataStore(Protocol):
    """Protocol for tabular stores the adapters read from."""

    async def fetch(self, collection: str, filters: dict[str, Any]) -> list[Row]:
        """Return every row of a collection matching all equality filters.

        Raises:
            StoreError: On any transport or store failure
        """
        ...
