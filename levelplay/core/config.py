from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    session_start_settle_ms: int = Field(default=50, ge=0, alias="SESSION_START_SETTLE_MS")
    restart_apply_settle_ms: int = Field(default=50, ge=0, alias="RESTART_APPLY_SETTLE_MS")
    restart_lock_hold_ms: int = Field(default=1200, ge=0, alias="RESTART_LOCK_HOLD_MS")
    timer_tick_interval_seconds: float = Field(default=1.0, gt=0, alias="TIMER_TICK_INTERVAL_SECONDS")

    progress_cache_ttl_seconds: int = Field(default=300, ge=0, alias="PROGRESS_CACHE_TTL_SECONDS")
    recent_attempts_window: int = Field(default=5, ge=1, alias="RECENT_ATTEMPTS_WINDOW")
    level_content_path: str | None = Field(default=None, alias="LEVEL_CONTENT_PATH")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
