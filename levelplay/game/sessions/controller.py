from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

import structlog

from levelplay.core.logging import bind_session_context, clear_session_context
from levelplay.economy.rewards.rules import calculate_reward
from levelplay.game.modes.catalog import Difficulty
from levelplay.game.modes.rules import normalize_difficulty
from levelplay.game.progress.store import resolve_progress
from levelplay.game.progress.types import Attempt, SingleLevelProgress
from levelplay.game.questions.catalog import format_quiz_id
from levelplay.game.sessions.errors import (
    InvalidLevelDataError,
    SessionDisposedError,
    SessionNotInitializedError,
)
from levelplay.game.sessions.locks import OneShotGuard, SettleTimer, TryLock
from levelplay.game.sessions.timer import TimeAccountant, TimerTicker
from levelplay.game.sessions.types import (
    AppLifecycleState,
    AttemptOutcome,
    SessionState,
    SessionStatus,
    SessionTimings,
)
from levelplay.ports import CoinLedger, NullSessionListener, ProgressStore, SessionListener

logger = structlog.get_logger("levelplay.game.sessions.controller")

_AWAY_STATES = frozenset({AppLifecycleState.BACKGROUND, AppLifecycleState.INACTIVE})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionController:
    """State machine for one active level: ``idle -> playing -> completed``.

    Owns the session state and its ``TimeAccountant``; nothing else mutates
    them. Lifecycle is ``create -> use -> dispose`` (or ``async with``).
    """

    def __init__(
        self,
        *,
        progress_store: ProgressStore,
        coin_ledger: CoinLedger | None = None,
        listener: SessionListener | None = None,
        timings: SessionTimings | None = None,
        auto_tick: bool = True,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._progress_store = progress_store
        self._coin_ledger = coin_ledger
        self._listener = listener or NullSessionListener()
        self._timings = timings or SessionTimings()
        self._auto_tick = auto_tick
        self._clock = clock

        self._state = SessionState()
        self._time = TimeAccountant(on_change=self._listener.on_time_elapsed_change)
        self._ticker = TimerTicker(self.tick, interval_seconds=self._timings.tick_interval_seconds)

        self._initialization_lock = TryLock("initialization")
        self._restart_lock = TryLock("restart")
        self._initialized = OneShotGuard("initialized")
        self._started = OneShotGuard("started")

        self._start_settle = SettleTimer("start_settle", self._timings.start_settle_seconds)
        self._restart_apply_settle = SettleTimer(
            "restart_apply_settle", self._timings.restart_apply_settle_seconds
        )
        self._restart_release = SettleTimer("restart_lock_hold", self._timings.restart_lock_hold_seconds)

        self._app_state = AppLifecycleState.ACTIVE
        self._background_handled = False
        self._attempt_count = 0
        self._level_generation = 0
        self._disposed = False

    async def __aenter__(self) -> SessionController:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    @property
    def state(self) -> SessionState:
        return self.snapshot()

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def time_elapsed(self) -> int:
        return self._time.time_elapsed

    @property
    def timer_running(self) -> bool:
        return self._time.timer_running

    @property
    def is_initialized(self) -> bool:
        return self._initialized.fired

    @property
    def is_started(self) -> bool:
        return self._started.fired

    @property
    def restart_in_progress(self) -> bool:
        return self._restart_lock.locked

    @property
    def disposed(self) -> bool:
        return self._disposed

    def snapshot(self) -> SessionState:
        return replace(
            self._state,
            time_elapsed=self._time.time_elapsed,
            timer_running=self._time.timer_running,
            level_data=dict(self._state.level_data),
        )

    def initialize(
        self,
        level_data: Mapping[str, Any] | None,
        level_id: int,
        game_mode: str,
        difficulty: str | Difficulty,
    ) -> bool:
        self._ensure_active()
        if not level_data:
            logger.debug("session_initialize_skipped", reason="no_level_data", level_id=level_id)
            return False
        if self._state.status != SessionStatus.IDLE or self._initialized.fired:
            logger.debug(
                "session_initialize_skipped",
                reason="already_initialized",
                level_id=level_id,
                status=self._state.status.value,
            )
            return False

        normalized_difficulty = normalize_difficulty(difficulty)
        if normalized_difficulty is None:
            raise InvalidLevelDataError(f"unknown difficulty: {difficulty!r}")

        with self._initialization_lock.held() as acquired:
            if not acquired:
                logger.debug("session_initialize_skipped", reason="initialization_locked", level_id=level_id)
                return False
            self._state = SessionState(
                status=SessionStatus.IDLE,
                level_id=level_id,
                game_mode=game_mode,
                difficulty=normalized_difficulty,
                level_data=dict(level_data),
            )
            self._initialized.fire()

        bind_session_context(level_id=level_id, game_mode=game_mode)
        logger.info("session_initialized", difficulty=normalized_difficulty.value)
        self._emit_state()
        return True

    def start(self) -> bool:
        self._ensure_active()
        if self._restart_lock.locked:
            logger.debug("session_start_dropped", reason="restart_in_progress")
            return False
        if (
            self._state.status != SessionStatus.IDLE
            or not self._initialized.fired
            or self._started.fired
        ):
            logger.debug(
                "session_start_skipped",
                status=self._state.status.value,
                initialized=self._initialized.fired,
                started=self._started.fired,
            )
            return False
        self._begin_playing()
        logger.info("session_started", time_elapsed=self._time.time_elapsed)
        return True

    async def initialize_and_start(
        self,
        level_data: Mapping[str, Any] | None,
        level_id: int,
        game_mode: str,
        difficulty: str | Difficulty,
    ) -> bool:
        self.initialize(level_data, level_id, game_mode, difficulty)
        if not self._initialized.fired or self._started.fired:
            return False
        settled = await self._start_settle.wait()
        if not settled or self._disposed or self._state.level_id != level_id:
            return False
        return self.start()

    async def restart(self) -> bool:
        self._ensure_active()
        level_id = self._state.level_id
        if level_id is None or not self._initialized.fired:
            logger.info("session_restart_skipped", reason="not_initialized")
            return False
        if not self._restart_lock.try_acquire():
            logger.info("session_restart_dropped", reason="restart_in_progress", level_id=level_id)
            return False

        generation = self._level_generation
        logger.info("session_restart_begin", level_id=level_id)
        try:
            self._start_settle.cancel()
            self._stop_timer()
            self._state.status = SessionStatus.IDLE
            self._state.background_completion = False
            self._time.set_time_elapsed(0)
            self._emit_state()

            progress_time = await self._fetch_saved_time(level_id)
            if self._disposed or self._state.level_id != level_id:
                logger.info("session_restart_abandoned", reason="level_changed", level_id=level_id)
                return False

            self._time.set_time_elapsed(progress_time)
            if not await self._restart_apply_settle.wait() or self._disposed:
                logger.info("session_restart_abandoned", reason="cancelled", level_id=level_id)
                return False

            self._started.reset()
            self._begin_playing()
            logger.info("session_restart_completed", level_id=level_id, time_elapsed=progress_time)
            return True
        finally:
            # a level switch already released the lock
            if generation == self._level_generation:
                self._hold_restart_lock()

    def complete(self) -> bool:
        self._ensure_active()
        if self._state.status != SessionStatus.PLAYING:
            logger.debug("session_complete_rejected", status=self._state.status.value)
            return False
        self._stop_timer()
        self._state.status = SessionStatus.COMPLETED
        logger.info("session_completed", time_elapsed=self._time.time_elapsed)
        self._emit_state()
        return True

    def reset_for_new_level(self, level_id: int, game_mode: str) -> bool:
        self._ensure_active()
        if self._state.level_id == level_id and self._state.game_mode == game_mode:
            return False

        self._start_settle.cancel()
        self._restart_apply_settle.cancel()
        self._restart_release.cancel()
        self._restart_lock.release()
        self._level_generation += 1
        self._stop_timer()
        self._initialized.reset()
        self._started.reset()
        self._initialization_lock.release()
        self._state = SessionState(level_id=level_id, game_mode=game_mode)
        self._background_handled = False
        self._attempt_count = 0
        self._time.set_time_elapsed(0)

        bind_session_context(level_id=level_id, game_mode=game_mode)
        logger.info("session_reset_for_new_level")
        self._emit_state()
        return True

    def tick(self) -> None:
        if self._disposed or self._state.status != SessionStatus.PLAYING:
            return
        self._time.tick()

    async def record_attempt(self, is_correct: bool, *, completed: bool | None = None) -> AttemptOutcome:
        self._ensure_active()
        level_id = self._require_level()
        attempt = self._build_attempt(is_correct=is_correct, time_spent=self._time.time_elapsed)
        await self._progress_store.update_progress(level_id, attempt)

        reward = calculate_reward(self._state.difficulty, attempt.time_spent, is_correct=is_correct)
        if reward.coins > 0 and self._coin_ledger is not None:
            await self._coin_ledger.credit(reward.coins)

        finishes_level = is_correct if completed is None else completed
        session_completed = self.complete() if finishes_level else False
        logger.info(
            "session_attempt_recorded",
            is_correct=is_correct,
            time_spent=attempt.time_spent,
            attempt_number=attempt.attempt_number,
            reward_coins=reward.coins,
        )
        return AttemptOutcome(attempt=attempt, reward=reward, session_completed=session_completed)

    async def handle_app_state_change(self, next_state: AppLifecycleState) -> bool:
        """Stop and record the session when the app leaves the foreground.

        Returns True only when a background exit was recorded.
        """
        self._ensure_active()
        previous, self._app_state = self._app_state, next_state

        if next_state == AppLifecycleState.ACTIVE:
            if previous != AppLifecycleState.ACTIVE:
                self._background_handled = False
            return False

        if (
            previous != AppLifecycleState.ACTIVE
            or next_state not in _AWAY_STATES
            or self._background_handled
            or self._state.status != SessionStatus.PLAYING
            or not self._time.timer_running
        ):
            return False

        self._background_handled = True
        level_id = self._require_level()
        final_time = self._time.time_elapsed
        self._stop_timer()
        self._state.background_completion = True
        self._state.status = SessionStatus.COMPLETED
        self._emit_state()

        attempt = self._build_attempt(is_correct=False, time_spent=final_time)
        try:
            await self._progress_store.update_progress(level_id, attempt)
        except Exception as exc:
            logger.warning("session_background_exit_record_failed", time_elapsed=final_time, exc_info=exc)
            return False

        logger.info("session_background_exit_recorded", time_elapsed=final_time, app_state=next_state.value)
        return True

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._ticker.stop()
        self._time.reset_timer()
        for timer in (self._start_settle, self._restart_apply_settle, self._restart_release):
            timer.cancel()
        self._initialization_lock.release()
        self._restart_lock.release()
        clear_session_context()
        logger.info("session_disposed")

    async def aclose(self) -> None:
        self.dispose()
        await self._ticker.aclose()

    async def _fetch_saved_time(self, level_id: int) -> int:
        try:
            raw = await self._progress_store.fetch_progress(level_id, force=True)
        except Exception as exc:
            logger.warning("session_restart_fetch_failed", level_id=level_id, exc_info=exc)
            return 0
        lookup = resolve_progress(raw)
        if isinstance(lookup, SingleLevelProgress):
            return lookup.total_time_spent
        return 0

    def _begin_playing(self) -> None:
        self._state.status = SessionStatus.PLAYING
        self._state.background_completion = False
        self._time.start_timer()
        self._started.fire()
        if self._auto_tick:
            self._ticker.start()
        self._emit_state()

    def _stop_timer(self) -> None:
        self._ticker.stop()
        self._time.reset_timer()

    def _hold_restart_lock(self) -> None:
        if self._disposed:
            self._restart_lock.release()
            return
        self._restart_release.schedule(self._release_restart_lock)

    def _release_restart_lock(self) -> None:
        self._restart_lock.release()
        logger.debug("session_restart_lock_released")

    def _build_attempt(self, *, is_correct: bool, time_spent: int) -> Attempt:
        self._attempt_count += 1
        return Attempt(
            quiz_id=format_quiz_id(self._require_level()),
            attempt_date=self._clock(),
            is_correct=is_correct,
            time_spent=time_spent,
            attempt_number=self._attempt_count,
        )

    def _require_level(self) -> int:
        if self._state.level_id is None or not self._initialized.fired:
            raise SessionNotInitializedError("no level has been initialized for this session")
        return self._state.level_id

    def _emit_state(self) -> None:
        self._listener.on_session_state_change(self.snapshot())

    def _ensure_active(self) -> None:
        if self._disposed:
            raise SessionDisposedError("session controller has been disposed")
