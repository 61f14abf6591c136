"""Shared HTTP plumbing and payload checks for the provider fetchers."""

import logging
import math
from typing import Any

import httpx

from pulse_dashboard.config import Settings
from pulse_dashboard.data.errors import MalformedResponseError, ProviderUnavailableError


logger = logging.getLogger(__name__)


class JsonFetcher:
    """Base for fetchers that GET a JSON document from one provider."""

    name = "provider"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout,
                headers=self._default_headers(),
            )
        return self._client

    def _default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    async def close(self) -> None:
        """Close HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def _get_json(self, url: str, params: dict | None = None) -> Any:
        """
        GET a JSON document.

        Raises:
            ProviderUnavailableError: network failure, timeout or non-2xx status
            MalformedResponseError: body is not valid JSON
        """
        logger.info(f"Requesting {self.name}: {url}")
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderUnavailableError(
                f"{self.name} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderUnavailableError(f"{self.name} request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{self.name} returned invalid JSON") from e


def require_mapping(value: Any, context: str) -> dict:
    if not isinstance(value, dict):
        raise MalformedResponseError(f"{context}: expected an object, got {type(value).__name__}")
    return value


def require_number(payload: dict, key: str, context: str) -> float:
    """Fetch a finite numeric field; bools, numeric strings, NaN and infinities are rejected."""
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"{context}: '{key}' missing or not a number")
    try:
        number = float(value)
    except OverflowError as e:
        raise MalformedResponseError(f"{context}: '{key}' is out of range") from e
    if not math.isfinite(number):
        raise MalformedResponseError(f"{context}: '{key}' is not finite")
    return number


def require_str(payload: dict, key: str, context: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"{context}: '{key}' missing or not a string")
    return value
