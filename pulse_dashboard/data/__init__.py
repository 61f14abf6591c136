"""Data fetching and caching."""

from .cache import LocationCache, SqliteKeyValueStore
from .errors import (
    DashboardError,
    LocationUnavailableError,
    MalformedResponseError,
    ProviderUnavailableError,
)
from .github_fetcher import GithubFetcher
from .price_fetcher import PriceFetcher
from .weather_fetcher import WeatherFetcher

__all__ = [
    "DashboardError",
    "GithubFetcher",
    "LocationCache",
    "LocationUnavailableError",
    "MalformedResponseError",
    "PriceFetcher",
    "ProviderUnavailableError",
    "SqliteKeyValueStore",
    "WeatherFetcher",
]
