from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from levelplay.game.modes.catalog import Difficulty


@dataclass(frozen=True, slots=True)
class Attempt:
    quiz_id: int | str
    attempt_date: datetime
    is_correct: bool
    time_spent: int
    attempt_number: int = 1


@dataclass(frozen=True, slots=True)
class LevelProgressRecord:
    """One level's progress as the external progress store returns it."""

    quiz_id: int | str
    completed: bool = False
    total_time_spent: int = 0
    attempts: tuple[Attempt, ...] = ()
    last_attempt_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class NoProgress:
    pass


@dataclass(frozen=True, slots=True)
class SingleLevelProgress:
    record: LevelProgressRecord

    @property
    def total_time_spent(self) -> int:
        return max(0, self.record.total_time_spent)


ProgressLookup = NoProgress | SingleLevelProgress


@dataclass(slots=True)
class CategorizedAttempts:
    by_mode: dict[str, list[Attempt]]
    unclassified: list[Attempt] = field(default_factory=list)

    @property
    def unclassified_count(self) -> int:
        return len(self.unclassified)


@dataclass(frozen=True, slots=True)
class LevelProgress:
    level_id: int
    title: str
    is_completed: bool
    total_attempts: int
    correct_attempts: int
    total_time_spent: int
    last_attempt_date: datetime | None
    recent_attempts: tuple[Attempt, ...]

    @property
    def score(self) -> float | None:
        if self.total_attempts == 0:
            return None
        return self.correct_attempts / self.total_attempts * 100


@dataclass(frozen=True, slots=True)
class DifficultyProgress:
    difficulty: Difficulty
    total_levels: int
    completed_levels: int
    total_attempts: int
    correct_attempts: int
    total_time_spent: int
    completion_rate: float
    average_score: float
    best_time: int | None
    worst_time: int | None
    levels: tuple[LevelProgress, ...]


@dataclass(frozen=True, slots=True)
class EnhancedGameModeProgress:
    game_mode: str
    total_levels: int
    completed_levels: int
    total_attempts: int
    correct_attempts: int
    total_time_spent: int
    completion_rate: float
    average_score: float
    best_time: int | None
    worst_time: int | None
    difficulty_breakdown: tuple[DifficultyProgress, ...]
    recent_attempts: tuple[Attempt, ...]
    unclassified_count: int = 0

    def breakdown_for(self, difficulty: Difficulty) -> DifficultyProgress | None:
        for item in self.difficulty_breakdown:
            if item.difficulty == difficulty:
                return item
        return None
