from levelplay.game.questions.catalog import (
    QuizCatalogIndex,
    format_quiz_id,
    level_display_title,
    normalize_quiz_id,
)
from levelplay.game.questions.content import build_catalog_index, load_level_content
from levelplay.game.questions.errors import LevelContentError
from levelplay.game.questions.types import CatalogEntry, Level, LevelStatus

__all__ = [
    "CatalogEntry",
    "Level",
    "LevelContentError",
    "LevelStatus",
    "QuizCatalogIndex",
    "build_catalog_index",
    "format_quiz_id",
    "level_display_title",
    "load_level_content",
    "normalize_quiz_id",
]
