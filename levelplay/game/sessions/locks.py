"""Re-entrancy guards for session code running on a single asyncio loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

logger = structlog.get_logger("levelplay.game.sessions.locks")


class TryLock:
    def __init__(self, name: str) -> None:
        self._name = name
        self._held = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def locked(self) -> bool:
        return self._held

    def try_acquire(self) -> bool:
        if self._held:
            return False
        self._held = True
        return True

    def release(self) -> None:
        self._held = False

    @contextmanager
    def held(self) -> Iterator[bool]:
        acquired = self.try_acquire()
        try:
            yield acquired
        finally:
            if acquired:
                self.release()


class OneShotGuard:
    def __init__(self, name: str) -> None:
        self._name = name
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        if self._fired:
            return False
        self._fired = True
        return True

    def reset(self) -> None:
        self._fired = False


class SettleTimer:
    """Named, cancellable delay used as a debounce window.

    ``wait()`` suspends the caller for the delay and reports whether it ran
    to the end; ``schedule()`` runs a callback once the delay elapses. Either
    can be cancelled, e.g. when the owning session is disposed.
    """

    def __init__(self, name: str, delay_seconds: float) -> None:
        self._name = name
        self._delay_seconds = max(0.0, delay_seconds)
        self._handle: asyncio.TimerHandle | None = None
        self._waiter: asyncio.Future[bool] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    @property
    def pending(self) -> bool:
        return self._handle is not None

    async def wait(self) -> bool:
        if self._delay_seconds <= 0:
            return True
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[bool] = loop.create_future()
        self._waiter = waiter
        self._handle = loop.call_later(self._delay_seconds, self._resolve, waiter)
        try:
            return await waiter
        finally:
            if self._waiter is waiter:
                self.cancel()

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()
        if self._delay_seconds <= 0:
            callback()
            return
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay_seconds, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(False)
        self._waiter = None

    @staticmethod
    def _resolve(waiter: asyncio.Future[bool]) -> None:
        if not waiter.done():
            waiter.set_result(True)

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        logger.debug("settle_timer_fired", timer=self._name)
        callback()
