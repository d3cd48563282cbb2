from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from levelplay.game.modes.catalog import Difficulty

# mode -> difficulty -> list of {"id", "title", ...}
LevelContent = Mapping[str, Mapping[str, Sequence[Mapping[str, Any]]]]


class LevelStatus(str, Enum):
    LOCKED = "locked"
    CURRENT = "current"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    quiz_id: int
    game_mode: str
    difficulty: Difficulty
    title: str
    level_label: str | None = None
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Level:
    level_id: int
    title: str
    difficulty: Difficulty
    game_mode: str
    status: LevelStatus
    level_label: str
