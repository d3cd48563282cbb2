from __future__ import annotations

from collections.abc import Iterable, Sequence
from statistics import fmean

import structlog

from levelplay.game.modes.catalog import DIFFICULTY_ORDER, Difficulty
from levelplay.game.progress.constants import DEFAULT_RECENT_ATTEMPTS_WINDOW
from levelplay.game.progress.types import (
    Attempt,
    CategorizedAttempts,
    DifficultyProgress,
    EnhancedGameModeProgress,
    LevelProgress,
)
from levelplay.game.questions.catalog import QuizCatalogIndex, level_display_title, normalize_quiz_id

logger = structlog.get_logger("levelplay.game.progress.aggregator")


def _rate(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator * 100


def _newest_first(attempts: Iterable[Attempt], *, window: int) -> tuple[Attempt, ...]:
    ordered = sorted(attempts, key=lambda attempt: attempt.attempt_date, reverse=True)
    return tuple(ordered[: max(0, window)])


def _average_score(levels: Iterable[LevelProgress]) -> float:
    scores = [level.score for level in levels if level.score is not None]
    if not scores:
        return 0.0
    return fmean(scores)


def _completed_times(levels: Iterable[LevelProgress]) -> list[int]:
    return [level.total_time_spent for level in levels if level.is_completed]


def categorize(attempts: Iterable[Attempt], index: QuizCatalogIndex) -> CategorizedAttempts:
    result = CategorizedAttempts(by_mode={game_mode: [] for game_mode in index.modes})
    for attempt in attempts:
        game_mode = index.lookup(attempt.quiz_id)
        if game_mode is None:
            logger.warning("progress_attempt_unclassified", quiz_id=attempt.quiz_id)
            result.unclassified.append(attempt)
            continue
        result.by_mode.setdefault(game_mode, []).append(attempt)
    return result


def build_level_progress(
    level_id: int,
    attempts: Sequence[Attempt],
    *,
    title: str = "",
    window: int = DEFAULT_RECENT_ATTEMPTS_WINDOW,
) -> LevelProgress:
    return LevelProgress(
        level_id=level_id,
        title=title or f"Level {level_id}",
        is_completed=any(attempt.is_correct for attempt in attempts),
        total_attempts=len(attempts),
        correct_attempts=sum(1 for attempt in attempts if attempt.is_correct),
        total_time_spent=sum(max(0, attempt.time_spent) for attempt in attempts),
        last_attempt_date=max((attempt.attempt_date for attempt in attempts), default=None),
        recent_attempts=_newest_first(attempts, window=window),
    )


def build_difficulty_progress(
    difficulty: Difficulty,
    levels: Sequence[LevelProgress],
) -> DifficultyProgress:
    total_levels = len(levels)
    completed_levels = sum(1 for level in levels if level.is_completed)
    completed_times = _completed_times(levels)
    return DifficultyProgress(
        difficulty=difficulty,
        total_levels=total_levels,
        completed_levels=completed_levels,
        total_attempts=sum(level.total_attempts for level in levels),
        correct_attempts=sum(level.correct_attempts for level in levels),
        total_time_spent=sum(level.total_time_spent for level in levels),
        completion_rate=_rate(completed_levels, total_levels),
        average_score=_average_score(levels),
        best_time=min(completed_times, default=None),
        worst_time=max(completed_times, default=None),
        levels=tuple(levels),
    )


def build_mode_progress(
    game_mode: str,
    difficulties: Sequence[DifficultyProgress],
    *,
    unclassified_count: int = 0,
    window: int = DEFAULT_RECENT_ATTEMPTS_WINDOW,
) -> EnhancedGameModeProgress:
    all_levels = [level for difficulty in difficulties for level in difficulty.levels]
    total_levels = sum(difficulty.total_levels for difficulty in difficulties)
    completed_levels = sum(difficulty.completed_levels for difficulty in difficulties)
    completed_times = _completed_times(all_levels)
    return EnhancedGameModeProgress(
        game_mode=game_mode,
        total_levels=total_levels,
        completed_levels=completed_levels,
        total_attempts=sum(difficulty.total_attempts for difficulty in difficulties),
        correct_attempts=sum(difficulty.correct_attempts for difficulty in difficulties),
        total_time_spent=sum(difficulty.total_time_spent for difficulty in difficulties),
        completion_rate=_rate(completed_levels, total_levels),
        average_score=_average_score(all_levels),
        best_time=min(completed_times, default=None),
        worst_time=max(completed_times, default=None),
        difficulty_breakdown=tuple(difficulties),
        recent_attempts=_newest_first(
            (attempt for level in all_levels for attempt in level.recent_attempts),
            window=window,
        ),
        unclassified_count=unclassified_count,
    )


def build_enhanced_mode_progress(
    game_mode: str,
    attempts: Iterable[Attempt],
    index: QuizCatalogIndex,
    *,
    unclassified_count: int = 0,
    window: int = DEFAULT_RECENT_ATTEMPTS_WINDOW,
) -> EnhancedGameModeProgress:
    attempts_by_level: dict[int, list[Attempt]] = {}
    for attempt in attempts:
        level_id = normalize_quiz_id(attempt.quiz_id)
        if level_id is None:
            continue
        attempts_by_level.setdefault(level_id, []).append(attempt)

    difficulties = [
        build_difficulty_progress(
            difficulty,
            [
                build_level_progress(
                    entry.quiz_id,
                    attempts_by_level.get(entry.quiz_id, []),
                    title=level_display_title(entry),
                    window=window,
                )
                for entry in index.entries_for(game_mode, difficulty)
            ],
        )
        for difficulty in DIFFICULTY_ORDER
    ]
    return build_mode_progress(
        game_mode,
        difficulties,
        unclassified_count=unclassified_count,
        window=window,
    )
