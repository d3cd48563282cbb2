from __future__ import annotations

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from levelplay import main as levelplay_main
from levelplay.core.config import Settings, get_settings
from levelplay.game.sessions.types import SessionTimings
from tests.game.session_fixtures import FakeProgressStore


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SESSION_START_SETTLE_MS",
        "RESTART_APPLY_SETTLE_MS",
        "RESTART_LOCK_HOLD_MS",
        "PROGRESS_CACHE_TTL_SECONDS",
        "RECENT_ATTEMPTS_WINDOW",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.session_start_settle_ms == 50
    assert settings.restart_apply_settle_ms == 50
    assert settings.restart_lock_hold_ms == 1200
    assert settings.progress_cache_ttl_seconds == 300
    assert settings.recent_attempts_window == 5


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTART_LOCK_HOLD_MS", "500")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    try:
        settings = get_settings()
    finally:
        get_settings.cache_clear()

    assert settings.restart_lock_hold_ms == 500
    assert settings.log_level == "DEBUG"


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Settings(RECENT_ATTEMPTS_WINDOW=0)
    with pytest.raises(ValidationError):
        Settings(TIMER_TICK_INTERVAL_SECONDS=0)


def test_session_timings_convert_milliseconds() -> None:
    timings = SessionTimings.from_settings(
        Settings(
            SESSION_START_SETTLE_MS=50,
            RESTART_APPLY_SETTLE_MS=20,
            RESTART_LOCK_HOLD_MS=1200,
            TIMER_TICK_INTERVAL_SECONDS=0.5,
        )
    )

    assert timings.start_settle_seconds == pytest.approx(0.05)
    assert timings.restart_apply_settle_seconds == pytest.approx(0.02)
    assert timings.restart_lock_hold_seconds == pytest.approx(1.2)
    assert timings.tick_interval_seconds == 0.5


def test_factory_uses_global_settings_when_none_given(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_settings = SimpleNamespace(
        log_level="INFO",
        progress_cache_ttl_seconds=10,
        session_start_settle_ms=0,
        restart_apply_settle_ms=0,
        restart_lock_hold_ms=0,
        timer_tick_interval_seconds=2.0,
    )
    monkeypatch.setattr(levelplay_main, "get_settings", lambda: fake_settings)

    controller = levelplay_main.create_session_controller(FakeProgressStore())

    assert controller._timings.tick_interval_seconds == 2.0
    assert controller._timings.restart_lock_hold_seconds == 0
