from levelplay.game.modes.catalog import (
    DIFFICULTY_ORDER,
    GAME_MODE_CODES,
    MODE_FILL_BLANKS,
    MODE_IDENTIFICATION,
    MODE_MULTIPLE_CHOICE,
    Difficulty,
)
from levelplay.game.modes.rules import normalize_difficulty

__all__ = [
    "DIFFICULTY_ORDER",
    "GAME_MODE_CODES",
    "MODE_FILL_BLANKS",
    "MODE_IDENTIFICATION",
    "MODE_MULTIPLE_CHOICE",
    "Difficulty",
    "normalize_difficulty",
]
