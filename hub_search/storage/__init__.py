"""Data store components."""

from hub_search.storage.base import DataStore, Row, StoreError
from hub_search.storage.memory_store import InMemoryStore

__all__ = [
    "DataStore",
    "InMemoryStore",
    "Row",
    "StoreError",
]
