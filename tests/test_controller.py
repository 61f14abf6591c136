"""Tests for the aggregate refresh."""

import asyncio

import pytest

from conftest import (
    ControlledFetch,
    RecordingFetch,
    drain,
    make_quote,
    make_reading,
    make_summary,
)
from pulse_dashboard.controller import DashboardController, DashboardInputs
from pulse_dashboard.data.errors import ProviderUnavailableError
from pulse_dashboard.models import Coordinates, ErrorKind, PanelStatus
from pulse_dashboard.panels import PricePanel, RepositoryPanel, WeatherPanel


class Fetches:
    def __init__(self) -> None:
        self.weather = RecordingFetch(make_reading())
        self.price = RecordingFetch(make_quote())
        self.repositories = RecordingFetch(make_summary())


@pytest.fixture
def fetches() -> Fetches:
    return Fetches()


@pytest.fixture
def controller(fetches, location_cache) -> DashboardController:
    return DashboardController(
        WeatherPanel(fetches.weather),
        PricePanel(fetches.price),
        RepositoryPanel(fetches.repositories),
        location_cache,
        DashboardInputs(coin_id="bitcoin", user_handle="torvalds"),
        default_handle="octocat",
    )


class TestRefresh:
    def test_without_cached_location_weather_untouched(self, controller, fetches):
        async def scenario():
            tasks = controller.refresh()
            assert len(tasks) == 2
            await controller.settle()

            assert fetches.weather.calls == []
            assert controller.weather_panel.state.status is PanelStatus.IDLE
            assert controller.weather_panel.calls_issued == 0
            assert fetches.price.calls == ["bitcoin"]
            assert fetches.repositories.calls == ["torvalds"]

        asyncio.run(scenario())

    def test_out_of_range_cached_location_treated_as_absent(self, controller, fetches, location_cache):
        location_cache.store.set(location_cache.key, '{"lat": 1' + "0" * 400 + ', "lon": 2.0}')

        async def scenario():
            tasks = controller.refresh()
            assert len(tasks) == 2
            await controller.settle()

            assert fetches.weather.calls == []
            assert controller.weather_panel.state.status is PanelStatus.IDLE
            assert controller.price_panel.state.is_ready
            assert controller.repository_panel.state.is_ready

        asyncio.run(scenario())

    def test_without_location_prior_weather_result_kept(self, controller, fetches):
        async def scenario():
            await controller.weather_panel.load(Coordinates(10.0, 20.0))
            before = controller.weather_panel.state

            await controller.refresh_and_wait()
            assert controller.weather_panel.state is before
            assert len(fetches.weather.calls) == 1

        asyncio.run(scenario())

    def test_cached_location_issues_one_weather_load(self, controller, fetches, location_cache):
        async def scenario():
            location_cache.set(Coordinates(51.5, -0.12))
            await controller.refresh_and_wait()

            assert fetches.weather.calls == [Coordinates(51.5, -0.12)]
            assert controller.weather_panel.calls_issued == 1
            assert controller.weather_panel.state.is_ready

        asyncio.run(scenario())

    @pytest.mark.parametrize("handle", ["", "   ", "\t\n"])
    def test_blank_handle_uses_default(self, controller, fetches, handle):
        async def scenario():
            controller.inputs.user_handle = handle
            await controller.refresh_and_wait()
            assert fetches.repositories.calls == ["octocat"]

        asyncio.run(scenario())

    def test_inputs_read_at_refresh_time(self, controller, fetches):
        async def scenario():
            await controller.refresh_and_wait()
            controller.inputs.coin_id = "ethereum"
            await controller.refresh_and_wait()
            assert fetches.price.calls == ["bitcoin", "ethereum"]

        asyncio.run(scenario())

    def test_failure_of_one_panel_does_not_block_others(self, controller, fetches, location_cache):
        async def scenario():
            location_cache.set(Coordinates(1.0, 2.0))
            fetches.price.error = ProviderUnavailableError("down")
            await controller.refresh_and_wait()

            assert controller.price_panel.state.error is ErrorKind.UNAVAILABLE
            assert controller.repository_panel.state.is_ready
            assert controller.weather_panel.state.is_ready

        asyncio.run(scenario())

    def test_slow_panel_does_not_delay_others(self, fetches, location_cache):
        async def scenario():
            slow_price = ControlledFetch()
            controller = DashboardController(
                WeatherPanel(fetches.weather),
                PricePanel(slow_price),
                RepositoryPanel(fetches.repositories),
                location_cache,
                DashboardInputs(coin_id="bitcoin"),
                default_handle="octocat",
            )
            controller.refresh()
            await controller.repository_panel.settle()

            assert controller.repository_panel.state.is_ready
            assert controller.price_panel.state.is_loading

            slow_price.resolve(0, make_quote())
            await controller.settle()
            assert controller.price_panel.state.is_ready

        asyncio.run(scenario())

    def test_refresh_is_reentrant(self, controller, fetches):
        async def scenario():
            controller.refresh()
            controller.refresh()
            await drain()
            await controller.settle()

            assert controller.price_panel.calls_issued == 2
            assert controller.repository_panel.calls_issued == 2
            assert len(fetches.price.calls) == 2

        asyncio.run(scenario())
