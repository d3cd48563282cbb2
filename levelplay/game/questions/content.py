from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from levelplay.game.questions.catalog import QuizCatalogIndex
from levelplay.game.questions.errors import LevelContentError
from levelplay.game.questions.types import LevelContent


def _validate_content(raw: Any, *, source: str) -> LevelContent:
    if not isinstance(raw, dict):
        raise LevelContentError(f"{source}: expected an object keyed by game mode")
    for game_mode, difficulties in raw.items():
        if not isinstance(difficulties, dict):
            raise LevelContentError(f"{source}: mode '{game_mode}' must map difficulties to level lists")
        for difficulty, items in difficulties.items():
            if not isinstance(items, list):
                raise LevelContentError(f"{source}: {game_mode}.{difficulty} must be a list")
            for item in items:
                if not isinstance(item, dict):
                    raise LevelContentError(f"{source}: {game_mode}.{difficulty} contains a non-object level")
    return raw


def load_level_content(path: str | Path) -> LevelContent:
    content_path = Path(path)
    try:
        raw = json.loads(content_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise LevelContentError(f"could not read level content from {content_path}: {exc}") from exc
    return _validate_content(raw, source=content_path.name)


def build_catalog_index(path: str | Path) -> QuizCatalogIndex:
    return QuizCatalogIndex(load_level_content(path))
