"""Wire fetchers, panels, cache and controller into a dashboard."""

import logging
from dataclasses import dataclass

from pulse_dashboard.config import Settings
from pulse_dashboard.controller import DashboardController, DashboardInputs, LocationAcquirer
from pulse_dashboard.data import (
    GithubFetcher,
    LocationCache,
    PriceFetcher,
    SqliteKeyValueStore,
    WeatherFetcher,
)
from pulse_dashboard.data.geolocation import PositionProvider, provider_from_settings
from pulse_dashboard.panels import PanelView, PricePanel, RepositoryPanel, WeatherPanel


logger = logging.getLogger(__name__)


@dataclass
class PanelViews:
    """Rendering collaborators, one per panel."""

    weather: PanelView | None = None
    price: PanelView | None = None
    repositories: PanelView | None = None


class Dashboard:
    """Assembled dashboard; closes its HTTP clients on exit."""

    def __init__(
        self,
        settings: Settings,
        controller: DashboardController,
        acquirer: LocationAcquirer,
        resources: list,
    ) -> None:
        self.settings = settings
        self.controller = controller
        self.acquirer = acquirer
        self._resources = resources

    @property
    def location_cache(self) -> LocationCache:
        return self.controller.location_cache

    async def close(self) -> None:
        """Close every resource; a failing close is logged and the rest still run."""
        for resource in self._resources:
            try:
                await resource.close()
            except Exception as e:
                logger.warning(f"Failed to close {type(resource).__name__}: {e}")

    async def __aenter__(self) -> "Dashboard":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()


def build_dashboard(
    settings: Settings | None = None,
    views: PanelViews | None = None,
    inputs: DashboardInputs | None = None,
    position_provider: PositionProvider | None = None,
) -> Dashboard:
    """
    Build a dashboard from settings.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        views: Per-panel rendering collaborators
        inputs: Initial selections (default coin, default handle)
        position_provider: Overrides the provider chosen from settings
    """
    settings = settings or Settings()
    settings.validate()
    views = views or PanelViews()
    inputs = inputs or DashboardInputs(coin_id=settings.default_coin)

    weather_fetcher = WeatherFetcher(settings)
    price_fetcher = PriceFetcher(settings)
    github_fetcher = GithubFetcher(settings)
    provider = position_provider or provider_from_settings(settings)

    weather_panel = WeatherPanel(weather_fetcher.fetch, views.weather)
    price_panel = PricePanel(price_fetcher.fetch, views.price)
    repository_panel = RepositoryPanel(github_fetcher.fetch, views.repositories)

    cache = LocationCache(SqliteKeyValueStore(settings.db_path))
    controller = DashboardController(
        weather_panel,
        price_panel,
        repository_panel,
        cache,
        inputs,
        default_handle=settings.default_handle,
    )
    acquirer = LocationAcquirer(
        provider,
        cache,
        weather_panel,
        timeout=settings.location_timeout,
        maximum_age=settings.location_max_age,
        high_accuracy=settings.location_high_accuracy,
    )

    resources = [weather_fetcher, price_fetcher, github_fetcher]
    if hasattr(provider, "close"):
        resources.append(provider)
    return Dashboard(settings, controller, acquirer, resources)
