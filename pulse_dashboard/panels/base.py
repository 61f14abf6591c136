"""Independently loading dashboard panel."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Protocol, TypeVar

from pulse_dashboard.data.errors import DashboardError
from pulse_dashboard.models import ErrorKind, PanelState


logger = logging.getLogger(__name__)

I = TypeVar("I")
T = TypeVar("T")


class PanelView(Protocol):
    """Rendering surface for one panel."""

    def show_loading(self) -> None: ...

    def show_ready(self, data: Any) -> None: ...

    def show_failed(self, error: ErrorKind) -> None: ...

    def show_empty(self) -> None:
        """Successful load with nothing to list (repository panel only)."""
        ...


class CompletionPolicy(Protocol):
    """Decides whether a finished load may overwrite the panel state."""

    def accept(self, call_id: int, latest_call_id: int) -> bool: ...


class LastCompletionWins:
    """
    Every completion overwrites the state.

    With overlapping loads the one that finishes last is shown, even if it
    was issued first and its result is older.
    """

    def accept(self, call_id: int, latest_call_id: int) -> bool:
        return True


class LatestIssueWins:
    """Completions of superseded loads are dropped."""

    def accept(self, call_id: int, latest_call_id: int) -> bool:
        return call_id == latest_call_id


class Panel(Generic[I, T]):
    """
    Holds the latest result or error for one data source.

    ``load`` flips the state to LOADING synchronously and returns the task
    running the fetch. The task never raises: transport failures become
    FAILED(UNAVAILABLE), shape failures FAILED(MALFORMED_RESPONSE).
    """

    name = "panel"

    def __init__(
        self,
        fetch: Callable[[I], Awaitable[T]],
        view: PanelView | None = None,
        policy: CompletionPolicy | None = None,
    ) -> None:
        self._fetch = fetch
        self.view = view
        self.policy = policy or LastCompletionWins()
        self._state: PanelState[T] = PanelState.idle()
        self._issued = 0
        self._in_flight: set[asyncio.Task] = set()

    @property
    def state(self) -> PanelState[T]:
        return self._state

    @property
    def calls_issued(self) -> int:
        return self._issued

    def _normalize_input(self, value: I) -> I:
        """Check the load precondition; raise ValueError if it does not hold."""
        return value

    def load(self, value: I) -> asyncio.Task:
        """
        Start loading the panel for ``value``.

        Must be called from a running event loop. Any previous state,
        terminal or not, is replaced by LOADING before this returns.
        """
        value = self._normalize_input(value)
        loop = asyncio.get_running_loop()

        self._issued += 1
        call_id = self._issued
        self._set_state(PanelState.loading())
        task = loop.create_task(self._run(call_id, value), name=f"{self.name}-load-{call_id}")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def settle(self) -> None:
        """Wait until no load of this panel is in flight."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight)

    async def _run(self, call_id: int, value: I) -> None:
        try:
            data = await self._fetch(value)
        except DashboardError as e:
            logger.warning(f"{self.name} load #{call_id} failed: {e}")
            state = PanelState.failed(e.kind)
        except Exception:
            logger.exception(f"Unexpected error in {self.name} load #{call_id}")
            state = PanelState.failed(ErrorKind.UNAVAILABLE)
        else:
            state = PanelState.ready(data)

        if not self.policy.accept(call_id, self._issued):
            logger.info(f"{self.name} load #{call_id} superseded, result dropped")
            return
        self._set_state(state)

    def _set_state(self, state: PanelState[T]) -> None:
        self._state = state
        if self.view is not None:
            self._render(state)

    def _render(self, state: PanelState[T]) -> None:
        if state.is_loading:
            self.view.show_loading()
        elif state.is_ready:
            self.view.show_ready(state.data)
        elif state.is_failed:
            self.view.show_failed(state.error)
