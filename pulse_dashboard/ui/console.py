"""Terminal front end."""

import asyncio
import logging
import sys
from typing import Any, Callable, TextIO

from pulse_dashboard.app import Dashboard, PanelViews, build_dashboard
from pulse_dashboard.config import COIN_CHOICES, Settings
from pulse_dashboard.controller import DashboardInputs
from pulse_dashboard.data.errors import LocationUnavailableError
from pulse_dashboard.models import ErrorKind, PriceQuote, RepositorySummary, WeatherReading
from pulse_dashboard.ui.formatting import DisplayFormatter


logger = logging.getLogger(__name__)


class ConsolePanelView:
    """Prints panel transitions as lines of text."""

    def __init__(
        self,
        title: str,
        describe: Callable[[Any], list[str]],
        formatter: DisplayFormatter,
        stream: TextIO | None = None,
    ) -> None:
        self.title = title
        self.describe = describe
        self.formatter = formatter
        self.stream = stream or sys.stdout

    def _write(self, text: str) -> None:
        print(f"[{self.title}] {text}", file=self.stream)

    def show_loading(self) -> None:
        self._write("loading...")

    def show_ready(self, data: Any) -> None:
        for line in self.describe(data):
            self._write(line)

    def show_failed(self, error: ErrorKind) -> None:
        self._write(f"error: {self.formatter.error(error)}")

    def show_empty(self) -> None:
        self._write("no repositories found")

    def show_note(self, text: str) -> None:
        self._write(text)


def describe_weather(formatter: DisplayFormatter) -> Callable[[WeatherReading], list[str]]:
    def describe(reading: WeatherReading) -> list[str]:
        return [
            f"{formatter.temperature(reading.temperature)} "
            f"(feels like {formatter.temperature(reading.apparent_temperature)})",
            f"humidity {formatter.humidity(reading.relative_humidity)}, "
            f"wind {formatter.wind(reading.wind_speed)}",
            f"at {reading.coordinates.latitude:.2f}, {reading.coordinates.longitude:.2f}, "
            f"retrieved {reading.retrieved_at:%H:%M:%S}",
        ]

    return describe


def describe_price(formatter: DisplayFormatter) -> Callable[[PriceQuote], list[str]]:
    def describe(quote: PriceQuote) -> list[str]:
        name = COIN_CHOICES.get(quote.asset_id, quote.asset_id)
        return [f"{name}: {formatter.price(quote.price)} ({formatter.change(quote.change_24h)} 24h)"]

    return describe


def describe_repositories(formatter: DisplayFormatter) -> Callable[[RepositorySummary], list[str]]:
    def describe(summary: RepositorySummary) -> list[str]:
        lines = [f"{summary.handle}: {len(summary)} recently updated"]
        for repo in summary:
            lines.append(
                f"  {repo.name:30} {formatter.stars(repo.stars):>6} stars  "
                f"{formatter.timestamp(repo.updated_at):>10}  {repo.url}"
            )
        return lines

    return describe


def console_views(formatter: DisplayFormatter, stream: TextIO | None = None) -> PanelViews:
    return PanelViews(
        weather=ConsolePanelView("weather", describe_weather(formatter), formatter, stream),
        price=ConsolePanelView("price", describe_price(formatter), formatter, stream),
        repositories=ConsolePanelView(
            "repositories", describe_repositories(formatter), formatter, stream
        ),
    )


async def locate(dashboard: Dashboard, view: ConsolePanelView) -> bool:
    """Acquire the position once; report the outcome on the weather panel."""
    try:
        coordinates = await dashboard.acquirer.acquire_location()
    except LocationUnavailableError as e:
        view.show_note(f"could not get your location ({e})")
        return False

    view.show_note(
        f"using your location ({coordinates.latitude:.2f}, {coordinates.longitude:.2f})"
    )
    return True


async def run(settings: Settings, inputs: DashboardInputs, locate_first: bool, interval: float) -> None:
    formatter = DisplayFormatter(settings.display_currency)
    views = console_views(formatter)

    async with build_dashboard(settings, views, inputs) as dashboard:
        if locate_first:
            await locate(dashboard, views.weather)
        elif dashboard.location_cache.get() is None:
            views.weather.show_note("no location set, run with --locate")

        while True:
            await dashboard.controller.refresh_and_wait()
            if interval <= 0:
                break
            await asyncio.sleep(interval)


def main() -> None:
    """CLI entry point."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Weather, crypto price and GitHub dashboard")
    parser.add_argument(
        "--coin",
        type=str,
        help=f"CoinGecko coin id (e.g. {', '.join(COIN_CHOICES)})",
    )
    parser.add_argument(
        "--user",
        type=str,
        default="",
        help="GitHub user whose repositories to list",
    )
    parser.add_argument(
        "--locate",
        action="store_true",
        help="Acquire the current location before refreshing",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=0,
        help="Refresh every N seconds (default: refresh once)",
    )
    args = parser.parse_args()

    try:
        settings = Settings()
        inputs = DashboardInputs(
            coin_id=args.coin or settings.default_coin,
            user_handle=args.user,
        )
        asyncio.run(run(settings, inputs, args.locate, args.interval))
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
