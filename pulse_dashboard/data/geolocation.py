"""Position providers used for location acquisition."""

import logging
import time
from typing import Callable, Protocol

import httpx

from pulse_dashboard.config import Settings
from pulse_dashboard.data.base import JsonFetcher, require_mapping
from pulse_dashboard.data.errors import DashboardError, LocationUnavailableError
from pulse_dashboard.models import Coordinates


logger = logging.getLogger(__name__)


class PositionProvider(Protocol):
    """One-shot source of the device position."""

    async def current_position(
        self, *, high_accuracy: bool, maximum_age: float
    ) -> Coordinates:
        """
        Return the current position.

        Args:
            high_accuracy: Ask for a precise fix where the source supports it
            maximum_age: Seconds for which a previous fix is still acceptable

        Raises:
            LocationUnavailableError: permission denied or no fix available
        """
        ...


class FixedPositionProvider:
    """Position pinned in configuration."""

    def __init__(self, coordinates: Coordinates) -> None:
        self.coordinates = coordinates

    async def current_position(
        self, *, high_accuracy: bool, maximum_age: float
    ) -> Coordinates:
        return self.coordinates


class IpPositionProvider(JsonFetcher):
    """
    Approximate position from an IP geolocation service.

    IP lookups are inherently low accuracy, so ``high_accuracy`` cannot be
    honoured; the last fix is reused while younger than ``maximum_age``.
    """

    name = "geoip"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(settings, client)
        self.clock = clock
        self._last_fix: tuple[Coordinates, float] | None = None

    async def current_position(
        self, *, high_accuracy: bool, maximum_age: float
    ) -> Coordinates:
        if not self.settings.location_consent:
            raise LocationUnavailableError("Location permission denied")

        if self._last_fix is not None:
            coordinates, taken_at = self._last_fix
            if self.clock() - taken_at <= maximum_age:
                logger.info("Reusing recent position fix")
                return coordinates

        if high_accuracy:
            logger.warning("High accuracy requested; IP geolocation is approximate")

        try:
            payload = await self._get_json(self.settings.geoip_url)
            body = require_mapping(payload, "geoip")
            coordinates = Coordinates(body.get("latitude"), body.get("longitude"))
        except DashboardError as e:
            raise LocationUnavailableError(f"Position lookup failed: {e}") from e
        except ValueError as e:
            raise LocationUnavailableError(f"Position lookup returned no fix: {e}") from e

        self._last_fix = (coordinates, self.clock())
        return coordinates


def provider_from_settings(settings: Settings) -> PositionProvider:
    """Use pinned coordinates when configured, otherwise IP geolocation."""
    if settings.has_fixed_location():
        return FixedPositionProvider(
            Coordinates(settings.fixed_latitude, settings.fixed_longitude)
        )
    return IpPositionProvider(settings)
