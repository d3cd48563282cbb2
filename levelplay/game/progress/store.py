from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic

import structlog

from levelplay.game.progress.constants import DEFAULT_PROGRESS_CACHE_TTL_SECONDS
from levelplay.game.progress.types import (
    Attempt,
    LevelProgressRecord,
    NoProgress,
    ProgressLookup,
    SingleLevelProgress,
)
from levelplay.ports import ProgressStore

logger = structlog.get_logger("levelplay.game.progress.store")


def resolve_progress(raw: object) -> ProgressLookup:
    """Collapse whatever the store returned into ``NoProgress`` or one level's record."""
    if isinstance(raw, LevelProgressRecord):
        return SingleLevelProgress(record=raw)
    if raw is not None and not isinstance(raw, (list, tuple)):
        logger.warning("progress_unexpected_payload", payload_type=type(raw).__name__)
    return NoProgress()


@dataclass(slots=True)
class _CacheEntry:
    loaded_at_mono: float
    payload: object


class CachedProgressStore:
    """Per-level read-through cache in front of a ``ProgressStore``.

    ``force=True`` always goes to the backing store and refreshes the entry.
    Writes invalidate the level they touch.
    """

    def __init__(
        self,
        backend: ProgressStore,
        *,
        ttl_seconds: float = DEFAULT_PROGRESS_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self._backend = backend
        self._ttl_seconds = max(0.0, ttl_seconds)
        self._clock = clock
        self._entries: dict[int, _CacheEntry] = {}
        self._lock = asyncio.Lock()

    def _fresh_entry(self, level_id: int) -> _CacheEntry | None:
        entry = self._entries.get(level_id)
        if entry is None:
            return None
        if self._clock() - entry.loaded_at_mono > self._ttl_seconds:
            return None
        return entry

    async def fetch_progress(self, level_id: int, *, force: bool = False) -> object:
        if not force:
            cached = self._fresh_entry(level_id)
            if cached is not None:
                return cached.payload

        async with self._lock:
            if not force:
                cached = self._fresh_entry(level_id)
                if cached is not None:
                    return cached.payload
            payload = await self._backend.fetch_progress(level_id, force=force)
            self._entries[level_id] = _CacheEntry(loaded_at_mono=self._clock(), payload=payload)
            return payload

    async def fetch_lookup(self, level_id: int, *, force: bool = False) -> ProgressLookup:
        return resolve_progress(await self.fetch_progress(level_id, force=force))

    async def update_progress(self, level_id: int, attempt: Attempt) -> None:
        try:
            await self._backend.update_progress(level_id, attempt)
        finally:
            self.invalidate(level_id)

    def invalidate(self, level_id: int | None = None) -> None:
        if level_id is None:
            self._entries.clear()
            return
        self._entries.pop(level_id, None)
