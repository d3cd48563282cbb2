from __future__ import annotations

import pytest

from levelplay.core.preferences import SOUND_ENABLED_KEY, PreferencesService


class _MemoryStore:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items = dict(items or {})

    async def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


@pytest.mark.asyncio
async def test_sound_defaults_to_enabled() -> None:
    service = PreferencesService(_MemoryStore())

    assert await service.is_sound_enabled() is True


@pytest.mark.asyncio
@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("False", False), (" 0 ", False), ("on", True)])
async def test_sound_reads_stored_value(raw: str, expected: bool) -> None:
    service = PreferencesService(_MemoryStore({SOUND_ENABLED_KEY: raw}))

    assert await service.is_sound_enabled() is expected


@pytest.mark.asyncio
async def test_unparseable_value_falls_back_to_default() -> None:
    service = PreferencesService(_MemoryStore({SOUND_ENABLED_KEY: "maybe"}), default_sound_enabled=False)

    assert await service.is_sound_enabled() is False


@pytest.mark.asyncio
async def test_toggle_sound_persists_new_value() -> None:
    store = _MemoryStore()
    service = PreferencesService(store)

    assert await service.toggle_sound() is False
    assert store.items[SOUND_ENABLED_KEY] == "false"
    assert await service.toggle_sound() is True
    assert store.items[SOUND_ENABLED_KEY] == "true"
