"""Shared fixtures and test doubles."""

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from pulse_dashboard.config import Settings
from pulse_dashboard.data.cache import LocationCache, SqliteKeyValueStore
from pulse_dashboard.models import (
    Coordinates,
    PriceQuote,
    Repository,
    RepositorySummary,
    WeatherReading,
)


class RecordingView:
    """PanelView that remembers every call."""

    def __init__(self, events: list | None = None) -> None:
        self.events = events if events is not None else []

    def show_loading(self) -> None:
        self.events.append(("loading",))

    def show_ready(self, data) -> None:
        self.events.append(("ready", data))

    def show_failed(self, error) -> None:
        self.events.append(("failed", error))

    def show_empty(self) -> None:
        self.events.append(("empty",))

    @property
    def kinds(self) -> list[str]:
        return [event[0] for event in self.events]


class RecordingFetch:
    """Fetch callable answering immediately with a fixed result or error."""

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list = []

    async def __call__(self, value):
        self.calls.append(value)
        if self.error is not None:
            raise self.error
        return self.result


class ControlledFetch:
    """Fetch callable whose calls stay pending until the test resolves them."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, asyncio.Future]] = []

    async def __call__(self, value):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((value, future))
        return await future

    def resolve(self, index: int, result) -> None:
        self.calls[index][1].set_result(result)

    def fail(self, index: int, error: Exception) -> None:
        self.calls[index][1].set_exception(error)


async def drain() -> None:
    """Let freshly created tasks run up to their first suspension."""
    for _ in range(3):
        await asyncio.sleep(0)


def make_quote(asset_id: str = "bitcoin", price: float = 64000.0, change: float | None = 1.5):
    return PriceQuote(asset_id=asset_id, price=price, currency="usd", change_24h=change)


def make_reading(coordinates: Coordinates | None = None) -> WeatherReading:
    return WeatherReading(
        temperature=12.3,
        apparent_temperature=10.1,
        relative_humidity=81.0,
        wind_speed=14.2,
        coordinates=coordinates or Coordinates(51.5, -0.12),
        retrieved_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


def make_summary(handle: str = "octocat", count: int = 2) -> RepositorySummary:
    return RepositorySummary(
        handle=handle,
        repositories=tuple(
            Repository(
                name=f"repo-{i}",
                stars=i * 10,
                updated_at=datetime(2024, 5, 1 + i, tzinfo=timezone.utc),
                url=f"https://github.com/{handle}/repo-{i}",
            )
            for i in range(count)
        ),
    )


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        weather_base_url="https://weather.test/v1",
        price_base_url="https://price.test/api/v3",
        github_base_url="https://github.test",
        github_token="",
        geoip_url="https://geo.test/json/",
        display_currency="usd",
        default_coin="bitcoin",
        default_handle="octocat",
        request_timeout=5.0,
        location_timeout=8.0,
        location_max_age=600.0,
        location_high_accuracy=False,
        location_consent=True,
        fixed_latitude=None,
        fixed_longitude=None,
        cache_dir=tmp_path,
    )


@pytest.fixture
def location_cache(tmp_path) -> LocationCache:
    return LocationCache(SqliteKeyValueStore(tmp_path / "kv.db"))
