"""One-shot location acquisition feeding the weather panel."""

import asyncio
import logging

from pulse_dashboard.data.cache import LocationCache
from pulse_dashboard.data.errors import LocationUnavailableError
from pulse_dashboard.data.geolocation import PositionProvider
from pulse_dashboard.models import Coordinates
from pulse_dashboard.panels import WeatherPanel


logger = logging.getLogger(__name__)


class LocationAcquirer:
    """Requests the device position once and points the weather panel at it."""

    def __init__(
        self,
        provider: PositionProvider | None,
        cache: LocationCache,
        weather_panel: WeatherPanel,
        timeout: float = 8.0,
        maximum_age: float = 600.0,
        high_accuracy: bool = False,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.weather_panel = weather_panel
        self.timeout = timeout
        self.maximum_age = maximum_age
        self.high_accuracy = high_accuracy

    async def acquire_location(self) -> Coordinates:
        """
        Acquire the position, cache it and start a weather load for it.

        The cache is written before the weather load is issued, and the load
        is issued before this returns. On failure neither the cache nor the
        weather panel is touched.

        Raises:
            LocationUnavailableError: no provider, permission denied, no fix
                or no answer within ``timeout`` seconds
        """
        if self.provider is None:
            raise LocationUnavailableError("Positioning is not available")

        try:
            coordinates = await asyncio.wait_for(
                self.provider.current_position(
                    high_accuracy=self.high_accuracy,
                    maximum_age=self.maximum_age,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"No position within {self.timeout:g}s")
            raise LocationUnavailableError(
                f"Position request timed out after {self.timeout:g}s"
            ) from e
        except LocationUnavailableError as e:
            logger.warning(f"Location unavailable: {e}")
            raise

        self.cache.set(coordinates)
        self.weather_panel.load(coordinates)
        return coordinates
