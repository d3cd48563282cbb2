from __future__ import annotations

import asyncio

import pytest

from levelplay.game.sessions.locks import OneShotGuard, SettleTimer, TryLock


def test_try_lock_rejects_second_holder() -> None:
    lock = TryLock("restart")

    assert lock.try_acquire() is True
    assert lock.try_acquire() is False
    lock.release()
    assert lock.try_acquire() is True


def test_try_lock_held_releases_only_what_it_acquired() -> None:
    lock = TryLock("initialization")

    with lock.held() as acquired:
        assert acquired is True
        with lock.held() as nested:
            assert nested is False
        assert lock.locked is True

    assert lock.locked is False


def test_try_lock_held_releases_on_error() -> None:
    lock = TryLock("initialization")

    with pytest.raises(RuntimeError):
        with lock.held():
            raise RuntimeError("boom")

    assert lock.locked is False


def test_one_shot_guard_fires_once_until_reset() -> None:
    guard = OneShotGuard("started")

    assert guard.fire() is True
    assert guard.fire() is False
    guard.reset()
    assert guard.fired is False
    assert guard.fire() is True


@pytest.mark.asyncio
async def test_settle_timer_without_delay_runs_immediately() -> None:
    calls: list[str] = []
    timer = SettleTimer("restart_lock_hold", 0)

    await timer.wait()
    timer.schedule(lambda: calls.append("fired"))

    assert calls == ["fired"]
    assert timer.pending is False


@pytest.mark.asyncio
async def test_settle_timer_schedule_fires_after_delay() -> None:
    calls: list[str] = []
    timer = SettleTimer("restart_lock_hold", 0.02)

    timer.schedule(lambda: calls.append("fired"))
    assert timer.pending is True
    assert calls == []
    await asyncio.sleep(0.05)

    assert calls == ["fired"]
    assert timer.pending is False


@pytest.mark.asyncio
async def test_settle_timer_cancel_drops_callback() -> None:
    calls: list[str] = []
    timer = SettleTimer("restart_lock_hold", 0.02)

    timer.schedule(lambda: calls.append("fired"))
    timer.cancel()
    await asyncio.sleep(0.05)

    assert calls == []


@pytest.mark.asyncio
async def test_settle_timer_cancel_releases_waiter_early() -> None:
    timer = SettleTimer("start_settle", 10)
    waiting = asyncio.create_task(timer.wait())
    await asyncio.sleep(0)

    timer.cancel()

    assert await waiting is False
    assert timer.pending is False


@pytest.mark.asyncio
async def test_settle_timer_wait_reports_completion() -> None:
    timer = SettleTimer("restart_apply_settle", 0.01)

    assert await timer.wait() is True
    assert await SettleTimer("immediate", 0).wait() is True
