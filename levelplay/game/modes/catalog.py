from __future__ import annotations

from enum import Enum


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


MODE_MULTIPLE_CHOICE = "multipleChoice"
MODE_IDENTIFICATION = "identification"
MODE_FILL_BLANKS = "fillBlanks"

GAME_MODE_CODES: tuple[str, ...] = (
    MODE_MULTIPLE_CHOICE,
    MODE_IDENTIFICATION,
    MODE_FILL_BLANKS,
)

DIFFICULTY_ORDER: tuple[Difficulty, ...] = (
    Difficulty.EASY,
    Difficulty.MEDIUM,
    Difficulty.HARD,
)
