from __future__ import annotations

import structlog

from levelplay.game.progress.aggregator import build_enhanced_mode_progress, categorize
from levelplay.game.progress.constants import DEFAULT_RECENT_ATTEMPTS_WINDOW
from levelplay.game.progress.stats import (
    AllGameModesStats,
    all_game_modes_stats,
    game_mode_stats_from_progress,
)
from levelplay.game.progress.types import EnhancedGameModeProgress
from levelplay.game.questions.catalog import QuizCatalogIndex
from levelplay.ports import AttemptHistorySource, NullSessionListener, SessionListener

logger = structlog.get_logger("levelplay.game.progress.dashboard")


class ProgressDashboard:
    def __init__(
        self,
        *,
        index: QuizCatalogIndex,
        history: AttemptHistorySource,
        listener: SessionListener | None = None,
        recent_attempts_window: int = DEFAULT_RECENT_ATTEMPTS_WINDOW,
    ) -> None:
        self._index = index
        self._history = history
        self._listener = listener or NullSessionListener()
        self._window = recent_attempts_window

    async def compute(self) -> dict[str, EnhancedGameModeProgress]:
        attempts = await self._history.list_attempts()
        categorized = categorize(attempts, self._index)
        if categorized.unclassified_count:
            logger.warning(
                "progress_unclassified_attempts",
                unclassified_count=categorized.unclassified_count,
                total_attempts=len(attempts),
            )

        results: dict[str, EnhancedGameModeProgress] = {}
        for game_mode, mode_attempts in categorized.by_mode.items():
            progress = build_enhanced_mode_progress(
                game_mode,
                mode_attempts,
                self._index,
                unclassified_count=categorized.unclassified_count,
                window=self._window,
            )
            results[game_mode] = progress
            self._listener.on_progress_computed(progress)
        return results

    async def summary(self) -> AllGameModesStats:
        progress_by_mode = await self.compute()
        return all_game_modes_stats(
            [game_mode_stats_from_progress(progress) for progress in progress_by_mode.values()]
        )
