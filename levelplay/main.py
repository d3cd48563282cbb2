from __future__ import annotations

from levelplay.core.config import Settings, get_settings
from levelplay.core.logging import configure_logging
from levelplay.game.progress.dashboard import ProgressDashboard
from levelplay.game.progress.store import CachedProgressStore
from levelplay.game.questions.catalog import QuizCatalogIndex
from levelplay.game.questions.content import build_catalog_index
from levelplay.game.questions.errors import LevelContentError
from levelplay.game.sessions.controller import SessionController
from levelplay.game.sessions.types import SessionTimings
from levelplay.ports import AttemptHistorySource, CoinLedger, ProgressStore, SessionListener


def create_session_controller(
    progress_store: ProgressStore,
    *,
    coin_ledger: CoinLedger | None = None,
    listener: SessionListener | None = None,
    settings: Settings | None = None,
) -> SessionController:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    cached_store = CachedProgressStore(progress_store, ttl_seconds=settings.progress_cache_ttl_seconds)
    return SessionController(
        progress_store=cached_store,
        coin_ledger=coin_ledger,
        listener=listener,
        timings=SessionTimings.from_settings(settings),
    )


def load_catalog_index(settings: Settings | None = None) -> QuizCatalogIndex:
    settings = settings or get_settings()
    if not settings.level_content_path:
        raise LevelContentError("LEVEL_CONTENT_PATH is not configured")
    return build_catalog_index(settings.level_content_path)


def create_progress_dashboard(
    history: AttemptHistorySource,
    *,
    index: QuizCatalogIndex | None = None,
    listener: SessionListener | None = None,
    settings: Settings | None = None,
) -> ProgressDashboard:
    settings = settings or get_settings()
    return ProgressDashboard(
        index=index or load_catalog_index(settings),
        history=history,
        listener=listener,
        recent_attempts_window=settings.recent_attempts_window,
    )
