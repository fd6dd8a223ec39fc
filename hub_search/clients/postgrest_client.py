"""Supabase REST (PostgREST) client for reading entity collections."""

import asyncio
import logging
from typing import Any

import httpx

from hub_search.storage.base import Row, StoreError

logger = logging.getLogger(__name__)


class _RetryableStoreError(StoreError):
    """Store failure worth another attempt (transport error or 5xx)."""


class PostgrestClient:
    """Async client for the Supabase REST API with retry logic.

    Implements the DataStore protocol: ``fetch`` returns every row of a
    table matching simple equality filters. Transport errors and 5xx
    responses are retried with exponential backoff; everything else is
    raised as ``StoreError`` straight away.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        max_retries: int = 1,
        backoff_base: float = 1.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize PostgREST client.

        Args:
            base_url: REST endpoint, e.g. https://project.supabase.co/rest/v1
            api_key: Anonymous key sent as apikey and bearer token
            timeout: Request timeout in seconds (default: 10.0)
            max_retries: Total attempts per fetch (default: 1, no retry)
            backoff_base: First retry delay in seconds, doubled per attempt
            http_client: Preconfigured client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self.client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @staticmethod
    def _encode_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        return str(value)

    def build_params(self, filters: dict[str, Any]) -> dict[str, str]:
        """Translate equality filters into PostgREST query parameters."""
        params = {"select": "*"}
        for column, value in filters.items():
            operator = "is" if value is None else "eq"
            params[column] = f"{operator}.{self._encode_value(value)}"
        return params

    async def _fetch_once(self, collection: str, params: dict[str, str]) -> list[Row]:
        url = f"{self.base_url}/{collection}"
        try:
            response = await self.client.get(url, params=params, headers=self._headers)
        except httpx.TransportError as e:
            raise _RetryableStoreError(
                f"Request to '{collection}' failed: {type(e).__name__}: {e}",
                collection=collection,
            ) from e

        if response.status_code >= 500:
            raise _RetryableStoreError(
                f"Store returned {response.status_code} for '{collection}'",
                collection=collection,
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            raise StoreError(
                f"Store rejected query on '{collection}' "
                f"({response.status_code}): {response.text[:200]}",
                collection=collection,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise StoreError(
                f"Malformed JSON from '{collection}'", collection=collection
            ) from e

        if not isinstance(payload, list):
            raise StoreError(
                f"Expected a list of rows from '{collection}', "
                f"got {type(payload).__name__}",
                collection=collection,
            )
        return payload

    async def fetch(self, collection: str, filters: dict[str, Any]) -> list[Row]:
        """Fetch all rows of a collection matching the equality filters.

        Args:
            collection: Table name
            filters: Column to value mapping, combined with AND

        Returns:
            List of row dicts

        Raises:
            StoreError: If the store cannot answer after all attempts
        """
        params = self.build_params(filters)
        last_exception: StoreError | None = None

        for attempt in range(self.max_retries):
            try:
                rows = await self._fetch_once(collection, params)
                logger.debug(f"Fetched {len(rows)} rows from '{collection}'")
                return rows
            except _RetryableStoreError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    delay = self.backoff_base * 2**attempt
                    logger.warning(
                        f"Store call failed (attempt {attempt + 1}/{self.max_retries}): "
                        f"{e}. Retrying in {delay}s..."
                    )
                    await asyncio.sleep(delay)
                else:
                    logger.error(f"Store call failed after {self.max_retries} attempts: {e}")

        raise StoreError(
            str(last_exception),
            collection=collection,
            status_code=last_exception.status_code if last_exception else None,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
