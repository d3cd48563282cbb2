"""Contracts of the collaborators the game core talks to.

Storage, network transport and rendering live outside this package; they
only have to satisfy these protocols.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from levelplay.game.progress.types import Attempt, EnhancedGameModeProgress, LevelProgressRecord
from levelplay.game.sessions.types import SessionState


class DebitResult(str, Enum):
    SUCCESS = "success"
    INSUFFICIENT_FUNDS = "insufficient_funds"


class ProgressStore(Protocol):
    async def fetch_progress(
        self, level_id: int, *, force: bool = False
    ) -> LevelProgressRecord | Sequence[LevelProgressRecord] | None: ...

    async def update_progress(self, level_id: int, attempt: Attempt) -> None: ...


class AttemptHistorySource(Protocol):
    async def list_attempts(self) -> Sequence[Attempt]: ...


class CoinLedger(Protocol):
    async def get_balance(self) -> int: ...

    async def debit(self, amount: int) -> DebitResult: ...

    async def credit(self, amount: int) -> None: ...


class KeyValueStore(Protocol):
    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...


class SessionListener(Protocol):
    def on_session_state_change(self, state: SessionState) -> None: ...

    def on_time_elapsed_change(self, seconds: int) -> None: ...

    def on_progress_computed(self, progress: EnhancedGameModeProgress) -> None: ...


class NullSessionListener:
    def on_session_state_change(self, state: SessionState) -> None:
        del state

    def on_time_elapsed_change(self, seconds: int) -> None:
        del seconds

    def on_progress_computed(self, progress: EnhancedGameModeProgress) -> None:
        del progress
