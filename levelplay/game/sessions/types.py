from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from levelplay.economy.rewards.types import RewardResult
from levelplay.game.modes.catalog import Difficulty
from levelplay.game.progress.types import Attempt


class SessionStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    COMPLETED = "completed"


class AppLifecycleState(str, Enum):
    ACTIVE = "active"
    BACKGROUND = "background"
    INACTIVE = "inactive"


@dataclass(slots=True)
class SessionState:
    status: SessionStatus = SessionStatus.IDLE
    level_id: int | None = None
    game_mode: str | None = None
    difficulty: Difficulty | None = None
    time_elapsed: int = 0
    timer_running: bool = False
    level_data: dict[str, Any] = field(default_factory=dict)
    background_completion: bool = False


@dataclass(frozen=True, slots=True)
class SessionTimings:
    start_settle_seconds: float = 0.05
    restart_apply_settle_seconds: float = 0.05
    restart_lock_hold_seconds: float = 1.2
    tick_interval_seconds: float = 1.0

    @classmethod
    def from_settings(cls, settings) -> SessionTimings:  # noqa: ANN001
        return cls(
            start_settle_seconds=settings.session_start_settle_ms / 1000,
            restart_apply_settle_seconds=settings.restart_apply_settle_ms / 1000,
            restart_lock_hold_seconds=settings.restart_lock_hold_ms / 1000,
            tick_interval_seconds=settings.timer_tick_interval_seconds,
        )


@dataclass(frozen=True, slots=True)
class AttemptOutcome:
    attempt: Attempt
    reward: RewardResult
    session_completed: bool
