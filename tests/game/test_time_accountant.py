from __future__ import annotations

import asyncio

import pytest

from levelplay.game.sessions.timer import TimeAccountant, TimerTicker


def test_tick_only_counts_while_running() -> None:
    seen: list[int] = []
    accountant = TimeAccountant(on_change=seen.append)

    assert accountant.tick() is False
    accountant.start_timer()
    assert accountant.tick() is True
    assert accountant.tick() is True

    assert accountant.time_elapsed == 2
    assert seen == [1, 2]


def test_reset_timer_stops_without_erasing() -> None:
    accountant = TimeAccountant()
    accountant.start_timer()
    accountant.tick()

    accountant.reset_timer()

    assert accountant.timer_running is False
    assert accountant.time_elapsed == 1


@pytest.mark.parametrize("seconds", [0, 7, 125])
def test_reset_then_set_reads_back_value(seconds: int) -> None:
    accountant = TimeAccountant()
    accountant.start_timer()
    accountant.tick()

    accountant.reset_timer()
    accountant.set_time_elapsed(seconds)

    assert accountant.time_elapsed == seconds


def test_set_time_elapsed_clamps_negative_values() -> None:
    accountant = TimeAccountant()

    accountant.set_time_elapsed(-4)

    assert accountant.time_elapsed == 0


@pytest.mark.asyncio
async def test_ticker_calls_back_until_stopped() -> None:
    ticks: list[int] = []
    ticker = TimerTicker(lambda: ticks.append(1), interval_seconds=0.01)

    ticker.start()
    ticker.start()
    await asyncio.sleep(0.055)
    ticker.stop()
    counted = len(ticks)
    await asyncio.sleep(0.03)

    assert counted >= 2
    assert len(ticks) == counted
    assert ticker.running is False


@pytest.mark.asyncio
async def test_ticker_aclose_awaits_cancellation() -> None:
    ticker = TimerTicker(lambda: None, interval_seconds=10)
    ticker.start()
    assert ticker.running is True

    await ticker.aclose()

    assert ticker.running is False
    await ticker.aclose()


@pytest.mark.asyncio
async def test_ticker_aclose_after_stop_collects_cancelled_task() -> None:
    ticker = TimerTicker(lambda: None, interval_seconds=10)
    ticker.start()
    task = ticker._task
    await asyncio.sleep(0)

    ticker.stop()
    await ticker.aclose()

    assert task is not None
    assert task.done()
    assert task.cancelled()
