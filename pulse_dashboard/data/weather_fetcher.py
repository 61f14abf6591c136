"""Open-Meteo current conditions fetcher."""

import logging
from datetime import datetime, timezone
from typing import Any

from pulse_dashboard.data.base import JsonFetcher, require_mapping, require_number
from pulse_dashboard.data.errors import MalformedResponseError
from pulse_dashboard.models import Coordinates, WeatherReading


logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "wind_speed_10m",
)


def parse_weather(
    payload: Any, requested: Coordinates, retrieved_at: datetime | None = None
) -> WeatherReading:
    """
    Map an Open-Meteo forecast response to a WeatherReading.

    Args:
        payload: Decoded JSON body
        requested: Coordinates sent with the request, used when the
            provider does not echo the grid point back
        retrieved_at: Retrieval timestamp (defaults to now, UTC)

    Raises:
        MalformedResponseError: if any current field is missing or not numeric
    """
    body = require_mapping(payload, "weather")
    current = require_mapping(body.get("current"), "weather.current")

    coordinates = requested
    if "latitude" in body or "longitude" in body:
        try:
            coordinates = Coordinates(body.get("latitude"), body.get("longitude"))
        except ValueError as e:
            raise MalformedResponseError(f"weather: bad observation coordinates ({e})") from e

    return WeatherReading(
        temperature=require_number(current, "temperature_2m", "weather.current"),
        apparent_temperature=require_number(current, "apparent_temperature", "weather.current"),
        relative_humidity=require_number(current, "relative_humidity_2m", "weather.current"),
        wind_speed=require_number(current, "wind_speed_10m", "weather.current"),
        coordinates=coordinates,
        retrieved_at=retrieved_at or datetime.now(timezone.utc),
    )


class WeatherFetcher(JsonFetcher):
    """Fetches current conditions from Open-Meteo."""

    name = "weather"

    async def fetch(self, coordinates: Coordinates) -> WeatherReading:
        """Fetch current conditions at the given coordinates."""
        payload = await self._get_json(
            f"{self.settings.weather_base_url}/forecast",
            params={
                "latitude": coordinates.latitude,
                "longitude": coordinates.longitude,
                "current": ",".join(CURRENT_FIELDS),
            },
        )
        reading = parse_weather(payload, coordinates)
        logger.info(
            f"  Weather at {reading.coordinates.latitude:.2f},"
            f"{reading.coordinates.longitude:.2f}: {reading.temperature:.1f}C"
        )
        return reading
