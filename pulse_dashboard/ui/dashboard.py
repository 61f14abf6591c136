"""Streamlit dashboard: weather, crypto price and GitHub repositories.

Run with: streamlit run pulse_dashboard/ui/dashboard.py
"""

import asyncio
from typing import Any, Callable

import pandas as pd
import streamlit as st

from pulse_dashboard.app import Dashboard, PanelViews, build_dashboard
from pulse_dashboard.config import COIN_CHOICES, Settings
from pulse_dashboard.controller import DashboardInputs
from pulse_dashboard.data.errors import LocationUnavailableError
from pulse_dashboard.models import ErrorKind, PriceQuote, RepositorySummary, WeatherReading
from pulse_dashboard.ui.formatting import DisplayFormatter


class StreamlitPanelView:
    """Draws one panel into a Streamlit placeholder."""

    def __init__(
        self,
        container,
        title: str,
        render: Callable[[Any], None],
        formatter: DisplayFormatter,
    ) -> None:
        container.subheader(title)
        self.note = container.empty()
        self.body = container.empty()
        self.render = render
        self.formatter = formatter

    def show_loading(self) -> None:
        self.body.info("Loading...")

    def show_ready(self, data: Any) -> None:
        with self.body.container():
            self.render(data)

    def show_failed(self, error: ErrorKind) -> None:
        self.body.error(self.formatter.error(error))

    def show_empty(self) -> None:
        self.body.info("No repositories found")

    def show_note(self, text: str) -> None:
        self.note.caption(text)


def render_weather(formatter: DisplayFormatter) -> Callable[[WeatherReading], None]:
    def render(reading: WeatherReading) -> None:
        col_temp, col_feels = st.columns(2)
        col_temp.metric("Temperature", formatter.temperature(reading.temperature))
        col_feels.metric("Feels like", formatter.temperature(reading.apparent_temperature))
        col_hum, col_wind = st.columns(2)
        col_hum.metric("Humidity", formatter.humidity(reading.relative_humidity))
        col_wind.metric("Wind", formatter.wind(reading.wind_speed))
        st.caption(
            f"{reading.coordinates.latitude:.2f}, {reading.coordinates.longitude:.2f} | "
            f"Updated {reading.retrieved_at:%H:%M}"
        )

    return render


def render_price(formatter: DisplayFormatter) -> Callable[[PriceQuote], None]:
    def render(quote: PriceQuote) -> None:
        st.metric(
            COIN_CHOICES.get(quote.asset_id, quote.asset_id),
            formatter.price(quote.price),
            delta=formatter.change(quote.change_24h) if quote.change_known else None,
        )
        if not quote.change_known:
            st.caption("24h change unknown")

    return render


def render_repositories(formatter: DisplayFormatter) -> Callable[[RepositorySummary], None]:
    def render(summary: RepositorySummary) -> None:
        df = pd.DataFrame(
            [
                {
                    "Repository": repo.name,
                    "Stars": repo.stars,
                    "Updated": formatter.timestamp(repo.updated_at),
                    "Link": repo.url,
                }
                for repo in summary
            ]
        )
        st.dataframe(
            df,
            hide_index=True,
            use_container_width=True,
            column_config={"Link": st.column_config.LinkColumn("Link")},
        )
        st.caption(f"Most recently updated repositories of {summary.handle}")

    return render


def _start_locating() -> None:
    st.session_state.locating = True


async def acquire_location(dashboard: Dashboard) -> None:
    """Run one acquisition; the outcome is kept for the next rerun."""
    try:
        coordinates = await dashboard.acquirer.acquire_location()
    except LocationUnavailableError as e:
        st.session_state.location_note = None
        st.session_state.location_error = f"Could not get your location: {e}"
        return

    st.session_state.location_error = None
    st.session_state.location_note = (
        f"Using your location ({coordinates.latitude:.2f}, {coordinates.longitude:.2f})"
    )
    await dashboard.controller.weather_panel.settle()


async def refresh(
    settings: Settings, views: PanelViews, inputs: DashboardInputs, locating: bool
) -> None:
    async with build_dashboard(settings, views, inputs) as dashboard:
        if locating:
            await acquire_location(dashboard)
            return

        if dashboard.location_cache.get() is None:
            views.weather.show_note("No location yet. Use the sidebar to share it.")
        elif st.session_state.location_note:
            views.weather.show_note(st.session_state.location_note)
        await dashboard.controller.refresh_and_wait()


def main() -> None:
    """Main dashboard entry point."""
    st.set_page_config(
        page_title="Pulse Dashboard",
        page_icon="",
        layout="wide",
    )

    try:
        settings = Settings()
        settings.validate()
    except ValueError as e:
        st.error(f"Configuration error: {e}")
        return

    formatter = DisplayFormatter(settings.display_currency)
    st.session_state.setdefault("locating", False)
    st.session_state.setdefault("location_note", None)
    st.session_state.setdefault("location_error", None)

    with st.sidebar:
        coins = list(COIN_CHOICES)
        coin = st.selectbox(
            "Coin",
            options=coins,
            index=coins.index(settings.default_coin) if settings.default_coin in coins else 0,
            format_func=lambda coin_id: COIN_CHOICES[coin_id],
        )
        handle = st.text_input("GitHub user", placeholder=settings.default_handle)
        st.button(
            "Use my location",
            on_click=_start_locating,
            disabled=st.session_state.locating,
        )
        st.button("Refresh")
        if st.session_state.location_error:
            st.warning(st.session_state.location_error)

    st.title("Pulse Dashboard")
    col_weather, col_price, col_repos = st.columns(3)
    views = PanelViews(
        weather=StreamlitPanelView(col_weather, "Weather", render_weather(formatter), formatter),
        price=StreamlitPanelView(col_price, "Price", render_price(formatter), formatter),
        repositories=StreamlitPanelView(
            col_repos, "Repositories", render_repositories(formatter), formatter
        ),
    )
    inputs = DashboardInputs(coin_id=coin, user_handle=handle)

    locating = st.session_state.locating
    try:
        asyncio.run(refresh(settings, views, inputs, locating))
    finally:
        st.session_state.locating = False

    if locating:
        st.rerun()


if __name__ == "__main__":
    main()
