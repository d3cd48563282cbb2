from __future__ import annotations

import structlog

from levelplay.ports import KeyValueStore

logger = structlog.get_logger("levelplay.core.preferences")

SOUND_ENABLED_KEY = "sound_enabled"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class PreferencesService:
    def __init__(self, store: KeyValueStore, *, default_sound_enabled: bool = True) -> None:
        self._store = store
        self._default_sound_enabled = default_sound_enabled

    async def is_sound_enabled(self) -> bool:
        raw = await self._store.get_item(SOUND_ENABLED_KEY)
        if raw is None:
            return self._default_sound_enabled
        normalized = raw.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        logger.warning("preference_value_unparseable", key=SOUND_ENABLED_KEY, value=raw)
        return self._default_sound_enabled

    async def set_sound_enabled(self, enabled: bool) -> None:
        await self._store.set_item(SOUND_ENABLED_KEY, "true" if enabled else "false")

    async def toggle_sound(self) -> bool:
        enabled = not await self.is_sound_enabled()
        await self.set_sound_enabled(enabled)
        return enabled
