from __future__ import annotations

from levelplay.game.modes.catalog import DIFFICULTY_ORDER, Difficulty


def normalize_difficulty(value: str | Difficulty | None) -> Difficulty | None:
    if value is None:
        return None
    if isinstance(value, Difficulty):
        return value
    normalized = value.strip().lower()
    for difficulty in DIFFICULTY_ORDER:
        if difficulty.value == normalized:
            return difficulty
    return None
