"""Panel data models."""

from .dashboard_data import (
    Coordinates,
    ErrorKind,
    PanelState,
    PanelStatus,
    PriceQuote,
    Repository,
    RepositorySummary,
    WeatherReading,
)

__all__ = [
    "Coordinates",
    "ErrorKind",
    "PanelState",
    "PanelStatus",
    "PriceQuote",
    "Repository",
    "RepositorySummary",
    "WeatherReading",
]
