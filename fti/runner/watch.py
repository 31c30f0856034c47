"""Polling loop that re-renders a view until stopped."""

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import suppress
from enum import Enum

import structlog

from ..core.errors import FtiError

logger = structlog.get_logger(__name__)


class WatchState(str, Enum):
    """Watch loop states."""

    POLLING = "polling"
    STOPPED = "stopped"


class WatchLoop:
    """Render once, then re-render on every tick until the stop event fires.

    Each wait races the tick against the stop event; whichever completes first
    decides the transition. A failed render is reported and polling goes on.
    """

    def __init__(
        self,
        render: Callable[[], Awaitable[None]],
        interval: float,
        stop_event: asyncio.Event | None = None,
        tick: Callable[[], Awaitable[None]] | None = None,
        on_error: Callable[[FtiError], None] | None = None,
    ) -> None:
        """Initialize watch loop.

        Args:
            render: Coroutine function doing one fetch-and-render cycle
            interval: Seconds between renders
            stop_event: Event that stops the loop, created when omitted
            tick: Replacement for the interval timer (fake clocks in tests)
            on_error: Callback for render failures
        """
        self.render = render
        self.interval = interval
        self.stop_event = stop_event or asyncio.Event()
        self.tick = tick or self._sleep
        self.on_error = on_error
        self.state = WatchState.STOPPED
        self.renders = 0
        self.failures = 0

    async def _sleep(self) -> None:
        await asyncio.sleep(self.interval)

    def stop(self) -> None:
        """Request a transition to STOPPED."""
        self.stop_event.set()

    async def _render_once(self) -> None:
        self.renders += 1
        try:
            await self.render()
        except FtiError as e:
            self.failures += 1
            logger.warning("Watch refresh failed", error=str(e), renders=self.renders)
            if self.on_error is not None:
                self.on_error(e)

    async def run(self) -> None:
        """Render once, then poll until the stop event is set."""
        logger.debug("Watch loop started", interval=self.interval)

        stop_task = asyncio.ensure_future(self.stop_event.wait())
        try:
            await self._render_once()
            self.state = WatchState.POLLING
            while not self.stop_event.is_set():
                tick_task = asyncio.ensure_future(self.tick())
                await asyncio.wait(
                    {tick_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
                )
                if self.stop_event.is_set():
                    tick_task.cancel()
                    with suppress(asyncio.CancelledError):
                        await tick_task
                    break
                tick_task.result()
                await self._render_once()
        finally:
            stop_task.cancel()
            with suppress(asyncio.CancelledError):
                await stop_task
            self.state = WatchState.STOPPED
            logger.debug("Watch loop stopped", renders=self.renders)
