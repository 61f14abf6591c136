"""Aggregate refresh across the three panels."""

import asyncio
import logging
from dataclasses import dataclass

from pulse_dashboard.data.cache import LocationCache
from pulse_dashboard.panels import PricePanel, RepositoryPanel, WeatherPanel


logger = logging.getLogger(__name__)


@dataclass
class DashboardInputs:
    """Current user selections read on every refresh."""

    coin_id: str
    user_handle: str = ""


class DashboardController:
    """Fans a refresh out to the panels without ordering them."""

    def __init__(
        self,
        weather_panel: WeatherPanel,
        price_panel: PricePanel,
        repository_panel: RepositoryPanel,
        location_cache: LocationCache,
        inputs: DashboardInputs,
        default_handle: str,
    ) -> None:
        self.weather_panel = weather_panel
        self.price_panel = price_panel
        self.repository_panel = repository_panel
        self.location_cache = location_cache
        self.inputs = inputs
        self.default_handle = default_handle

    @property
    def panels(self) -> tuple:
        return (self.weather_panel, self.price_panel, self.repository_panel)

    def resolve_handle(self) -> str:
        """User handle, or the default one when the input is blank."""
        handle = (self.inputs.user_handle or "").strip()
        return handle or self.default_handle

    def refresh(self) -> list[asyncio.Task]:
        """
        Issue a load on every eligible panel.

        Price and repository panels always load. The weather panel loads
        only when a location is cached; otherwise it is left untouched.
        Calling again while loads are outstanding simply issues new ones.

        Returns:
            The tasks started, which never raise
        """
        tasks = [
            self.price_panel.load(self.inputs.coin_id),
            self.repository_panel.load(self.resolve_handle()),
        ]

        coordinates = self.location_cache.get()
        if coordinates is not None:
            tasks.append(self.weather_panel.load(coordinates))
        else:
            logger.info("No cached location, weather panel not refreshed")

        return tasks

    async def settle(self) -> None:
        """Wait for every in-flight panel load to finish."""
        await asyncio.gather(*(panel.settle() for panel in self.panels))

    async def refresh_and_wait(self) -> None:
        self.refresh()
        await self.settle()
