from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from levelplay.game.progress.constants import (
    SIGNIFICANT_MODE_PROGRESS_PERCENT,
    SIGNIFICANT_OVERALL_PROGRESS_PERCENT,
)
from levelplay.game.progress.types import EnhancedGameModeProgress


class ProgressStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class OverallProgressStats:
    total_completed_count: int
    total_quiz_count: int
    overall_progress_percentage: int
    completion_status: ProgressStatus
    completion_status_text: str


@dataclass(frozen=True, slots=True)
class GameModeStats:
    game_mode: str
    completed: int
    total: int
    completion_percentage: int
    remaining_count: int
    is_complete: bool
    progress_status: ProgressStatus


@dataclass(frozen=True, slots=True)
class GameModeSummaryStats:
    stats: GameModeStats
    total_attempts: int
    correct_attempts: int
    success_rate: int
    total_time_spent: int
    average_score: float
    formatted_total_time: str


@dataclass(frozen=True, slots=True)
class AllGameModesStats:
    overall: OverallProgressStats
    game_modes: dict[str, GameModeStats]
    best_performing_mode: str | None
    worst_performing_mode: str | None
    total_game_modes: int
    completed_game_modes: int


def _round_percent(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    # rounds half up
    return int(numerator / denominator * 100 + 0.5)


def _progress_status(completed: int, total: int) -> ProgressStatus:
    if completed <= 0:
        return ProgressStatus.NOT_STARTED
    if total > 0 and completed >= total:
        return ProgressStatus.COMPLETED
    return ProgressStatus.IN_PROGRESS


def completion_status_text(status: ProgressStatus, *, remaining: int) -> str:
    if status == ProgressStatus.NOT_STARTED:
        return "Ready to start your learning journey!"
    if status == ProgressStatus.IN_PROGRESS:
        return f"Great progress! {remaining} more to go"
    return "Amazing! You've completed all levels!"


def overall_progress_stats(total_completed_count: int, total_quiz_count: int) -> OverallProgressStats:
    completed = min(max(0, total_completed_count), max(0, total_quiz_count))
    status = _progress_status(completed, total_quiz_count)
    return OverallProgressStats(
        total_completed_count=completed,
        total_quiz_count=total_quiz_count,
        overall_progress_percentage=_round_percent(completed, total_quiz_count),
        completion_status=status,
        completion_status_text=completion_status_text(status, remaining=total_quiz_count - completed),
    )


def game_mode_stats(game_mode: str, *, completed: int, total: int) -> GameModeStats:
    completed = min(max(0, completed), max(0, total))
    return GameModeStats(
        game_mode=game_mode,
        completed=completed,
        total=total,
        completion_percentage=_round_percent(completed, total),
        remaining_count=total - completed,
        is_complete=total > 0 and completed == total,
        progress_status=_progress_status(completed, total),
    )


def game_mode_stats_from_progress(progress: EnhancedGameModeProgress) -> GameModeStats:
    return game_mode_stats(
        progress.game_mode,
        completed=progress.completed_levels,
        total=progress.total_levels,
    )


def format_total_time(seconds: float) -> str:
    if seconds < 60:
        return f"{round(seconds)}s"
    if seconds < 3600:
        return f"{round(seconds / 60)}m"
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"


def game_mode_summary_stats(
    stats: GameModeStats,
    enhanced: EnhancedGameModeProgress | None = None,
) -> GameModeSummaryStats:
    total_attempts = enhanced.total_attempts if enhanced is not None else 0
    correct_attempts = enhanced.correct_attempts if enhanced is not None else 0
    total_time_spent = enhanced.total_time_spent if enhanced is not None else 0
    return GameModeSummaryStats(
        stats=stats,
        total_attempts=total_attempts,
        correct_attempts=correct_attempts,
        success_rate=_round_percent(correct_attempts, total_attempts),
        total_time_spent=total_time_spent,
        average_score=enhanced.average_score if enhanced is not None else 0.0,
        formatted_total_time=format_total_time(total_time_spent),
    )


def all_game_modes_stats(mode_stats: Sequence[GameModeStats]) -> AllGameModesStats:
    overall = overall_progress_stats(
        sum(stats.completed for stats in mode_stats),
        sum(stats.total for stats in mode_stats),
    )
    ranked = sorted(mode_stats, key=lambda stats: stats.completion_percentage, reverse=True)
    return AllGameModesStats(
        overall=overall,
        game_modes={stats.game_mode: stats for stats in mode_stats},
        best_performing_mode=ranked[0].game_mode if ranked else None,
        worst_performing_mode=ranked[-1].game_mode if ranked else None,
        total_game_modes=len(mode_stats),
        completed_game_modes=sum(1 for stats in mode_stats if stats.is_complete),
    )


def has_significant_progress(percentage: int, *, overall: bool = False) -> bool:
    threshold = SIGNIFICANT_OVERALL_PROGRESS_PERCENT if overall else SIGNIFICANT_MODE_PROGRESS_PERCENT
    return percentage >= threshold


def motivation_message(percentage: int) -> str:
    if percentage <= 0:
        return "Ready to start your learning journey? Let's go!"
    if percentage < 25:
        return "Great start! Keep building momentum!"
    if percentage < 50:
        return "You're making solid progress! Keep it up!"
    if percentage < 75:
        return "Excellent work! You're more than halfway there!"
    if percentage < 100:
        return "Amazing progress! You're almost at the finish line!"
    return "Outstanding! You've mastered this completely!"
