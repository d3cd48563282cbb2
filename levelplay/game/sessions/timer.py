from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable

import structlog

logger = structlog.get_logger("levelplay.game.sessions.timer")


class TimeAccountant:
    """Elapsed seconds of the active session plus the running flag.

    ``reset_timer()`` only stops counting; ``set_time_elapsed(0)`` erases the
    value.
    """

    def __init__(self, on_change: Callable[[int], None] | None = None) -> None:
        self._time_elapsed = 0
        self._timer_running = False
        self._on_change = on_change

    @property
    def time_elapsed(self) -> int:
        return self._time_elapsed

    @property
    def timer_running(self) -> bool:
        return self._timer_running

    def set_time_elapsed(self, seconds: int) -> None:
        self._time_elapsed = max(0, int(seconds))
        self._notify()

    def start_timer(self) -> None:
        self._timer_running = True

    def tick(self) -> bool:
        if not self._timer_running:
            return False
        self._time_elapsed += 1
        self._notify()
        return True

    def reset_timer(self) -> None:
        self._timer_running = False

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._time_elapsed)


class TimerTicker:
    """Calls ``on_tick`` on a fixed cadence from a background asyncio task."""

    def __init__(self, on_tick: Callable[[], None], *, interval_seconds: float = 1.0) -> None:
        self._on_tick = on_tick
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._stopping: set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="session-timer-ticker")

    def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            self._stopping.add(task)
            task.add_done_callback(self._stopping.discard)

    async def aclose(self) -> None:
        """Stop ticking and wait until every cancelled tick task has finished."""
        self.stop()
        for task in tuple(self._stopping):
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            self._on_tick()
