"""The three dashboard panels."""

from pulse_dashboard.models import (
    Coordinates,
    PanelState,
    PriceQuote,
    RepositorySummary,
    WeatherReading,
)
from pulse_dashboard.panels.base import Panel


def _require_text(value: str, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} must be a non-empty string")
    return value.strip()


class WeatherPanel(Panel[Coordinates, WeatherReading]):
    name = "weather"

    def _normalize_input(self, value: Coordinates) -> Coordinates:
        if not isinstance(value, Coordinates):
            raise ValueError(f"weather panel needs Coordinates, got {value!r}")
        return value


class PricePanel(Panel[str, PriceQuote]):
    name = "price"

    def _normalize_input(self, value: str) -> str:
        return _require_text(value, "coin id")


class RepositoryPanel(Panel[str, RepositorySummary]):
    """Repository list; an empty list is drawn as "no results", not as an error."""

    name = "repositories"

    def _normalize_input(self, value: str) -> str:
        return _require_text(value, "user handle")

    def _render(self, state: PanelState[RepositorySummary]) -> None:
        if state.is_ready and state.data.is_empty:
            self.view.show_empty()
        else:
            super()._render(state)
