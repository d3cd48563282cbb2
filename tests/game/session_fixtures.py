from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

from levelplay.game.progress.types import Attempt, EnhancedGameModeProgress, LevelProgressRecord
from levelplay.game.sessions.controller import SessionController
from levelplay.game.sessions.types import SessionState, SessionTimings
from levelplay.ports import DebitResult

UTC = timezone.utc
BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)

FAST_TIMINGS = SessionTimings(
    start_settle_seconds=0,
    restart_apply_settle_seconds=0,
    restart_lock_hold_seconds=0,
    tick_interval_seconds=0.01,
)

LEVEL_CONTENT: dict[str, dict[str, list[dict[str, object]]]] = {
    "multipleChoice": {
        "easy": [
            {"id": 1, "title": "Greetings", "level": "Level 1"},
            {"id": 2, "title": "Numbers", "level": "Level 2"},
        ],
        "medium": [{"id": 3, "title": "Past tense", "level": "Level 3"}],
        "hard": [{"id": 4, "title": "Idioms", "level": "Level 4"}],
    },
    "identification": {
        "easy": [{"id": 5, "title": "Colors", "level": "Level 1"}],
        "medium": [],
        "hard": [{"questionId": 6, "title": "Proverbs"}],
    },
    "fillBlanks": {
        "easy": [{"id": 7, "title": "Articles"}],
        "medium": [{"id": 8, "title": "Prepositions"}],
        "hard": [],
    },
}


def attempt(
    quiz_id: int | str,
    *,
    is_correct: bool,
    time_spent: int,
    minutes_ago: int = 0,
    attempt_number: int = 1,
) -> Attempt:
    return Attempt(
        quiz_id=quiz_id,
        attempt_date=BASE_TIME - timedelta(minutes=minutes_ago),
        is_correct=is_correct,
        time_spent=time_spent,
        attempt_number=attempt_number,
    )


class FakeProgressStore:
    def __init__(
        self,
        records: dict[int, object] | None = None,
        *,
        fetch_error: Exception | None = None,
        update_error: Exception | None = None,
    ) -> None:
        self.records: dict[int, object] = dict(records or {})
        self.fetch_error = fetch_error
        self.update_error = update_error
        self.fetch_calls: list[tuple[int, bool]] = []
        self.updates: list[tuple[int, Attempt]] = []
        self.gate: asyncio.Event | None = None

    async def fetch_progress(self, level_id: int, *, force: bool = False) -> object:
        self.fetch_calls.append((level_id, force))
        if self.gate is not None:
            await self.gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.records.get(level_id)

    async def update_progress(self, level_id: int, attempt: Attempt) -> None:
        if self.update_error is not None:
            raise self.update_error
        self.updates.append((level_id, attempt))


class FakeCoinLedger:
    def __init__(self, balance: int = 0) -> None:
        self.balance = balance
        self.debits: list[int] = []
        self.credits: list[int] = []

    async def get_balance(self) -> int:
        return self.balance

    async def debit(self, amount: int) -> DebitResult:
        if amount > self.balance:
            return DebitResult.INSUFFICIENT_FUNDS
        self.balance -= amount
        self.debits.append(amount)
        return DebitResult.SUCCESS

    async def credit(self, amount: int) -> None:
        self.balance += amount
        self.credits.append(amount)


class RecordingListener:
    def __init__(self) -> None:
        self.states: list[SessionState] = []
        self.times: list[int] = []
        self.progress: list[EnhancedGameModeProgress] = []

    def on_session_state_change(self, state: SessionState) -> None:
        self.states.append(state)

    def on_time_elapsed_change(self, seconds: int) -> None:
        self.times.append(seconds)

    def on_progress_computed(self, progress: EnhancedGameModeProgress) -> None:
        self.progress.append(progress)


def progress_record(quiz_id: int, *, total_time_spent: int, completed: bool = False) -> LevelProgressRecord:
    return LevelProgressRecord(
        quiz_id=f"n-{quiz_id}",
        completed=completed,
        total_time_spent=total_time_spent,
    )


LEVEL_DATA: dict[str, object] = {
    "id": 5,
    "title": "Colors",
    "question": "Which word names the color of the sky?",
    "answer": "blue",
}


def make_controller(
    store: FakeProgressStore | None = None,
    *,
    ledger: FakeCoinLedger | None = None,
    listener: RecordingListener | None = None,
    timings: SessionTimings = FAST_TIMINGS,
) -> SessionController:
    return SessionController(
        progress_store=store or FakeProgressStore(),
        coin_ledger=ledger,
        listener=listener,
        timings=timings,
        auto_tick=False,
        clock=lambda: BASE_TIME,
    )
