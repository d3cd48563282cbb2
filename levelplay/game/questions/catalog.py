from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import Any

import structlog

from levelplay.game.modes.catalog import DIFFICULTY_ORDER, Difficulty
from levelplay.game.modes.rules import normalize_difficulty
from levelplay.game.questions.types import CatalogEntry, Level, LevelContent, LevelStatus

logger = structlog.get_logger("levelplay.game.questions.catalog")

QUIZ_ID_PREFIX = "n-"
_QUIZ_ID_PREFIX_RE = re.compile(rf"^{re.escape(QUIZ_ID_PREFIX)}")


def normalize_quiz_id(quiz_id: int | str | None) -> int | None:
    """Return the numeric form of a quiz id, accepting ``12`` and ``"n-12"``.

    Anything that does not parse to a non-negative integer yields ``None``.
    """
    if quiz_id is None or isinstance(quiz_id, bool):
        return None
    if isinstance(quiz_id, int):
        return quiz_id if quiz_id >= 0 else None
    cleaned = _QUIZ_ID_PREFIX_RE.sub("", str(quiz_id).strip())
    if not (cleaned.isascii() and cleaned.isdigit()):
        return None
    return int(cleaned)


def format_quiz_id(quiz_id: int | str) -> str:
    normalized = normalize_quiz_id(quiz_id)
    if normalized is None:
        raise ValueError(f"invalid quiz id: {quiz_id!r}")
    return f"{QUIZ_ID_PREFIX}{normalized}"


def _entry_id(item: Mapping[str, Any]) -> Any:
    quiz_id = item.get("id")
    return quiz_id if quiz_id is not None else item.get("questionId")


def level_display_title(entry: CatalogEntry) -> str:
    label = entry.level_label or f"Level {entry.quiz_id}"
    return f"{label}: {entry.title or 'Untitled'}"


class QuizCatalogIndex:
    """Read-only map from quiz id to the game mode and difficulty that own it.

    Built once from static level content and never mutated afterwards, so
    concurrent readers need no coordination.
    """

    def __init__(self, content: LevelContent) -> None:
        self._entries: dict[int, CatalogEntry] = {}
        self._by_bucket: dict[tuple[str, Difficulty], tuple[CatalogEntry, ...]] = {}
        self._modes: tuple[str, ...] = tuple(content.keys())
        self._build(content)

    def _build(self, content: LevelContent) -> None:
        buckets: dict[tuple[str, Difficulty], list[CatalogEntry]] = {}
        for game_mode, difficulties in content.items():
            for difficulty_key, items in difficulties.items():
                difficulty = normalize_difficulty(difficulty_key)
                if difficulty is None:
                    logger.warning(
                        "catalog_unknown_difficulty_skipped",
                        game_mode=game_mode,
                        difficulty=difficulty_key,
                    )
                    continue
                bucket = buckets.setdefault((game_mode, difficulty), [])
                for item in items:
                    quiz_id = normalize_quiz_id(_entry_id(item))
                    if quiz_id is None:
                        logger.warning(
                            "catalog_entry_without_id_skipped",
                            game_mode=game_mode,
                            difficulty=difficulty.value,
                        )
                        continue
                    if quiz_id in self._entries:
                        logger.warning(
                            "catalog_duplicate_quiz_id_skipped",
                            quiz_id=quiz_id,
                            game_mode=game_mode,
                            owner_mode=self._entries[quiz_id].game_mode,
                        )
                        continue
                    entry = CatalogEntry(
                        quiz_id=quiz_id,
                        game_mode=game_mode,
                        difficulty=difficulty,
                        title=str(item.get("title") or ""),
                        level_label=item.get("level"),
                        payload=dict(item),
                    )
                    self._entries[quiz_id] = entry
                    bucket.append(entry)

        self._by_bucket = {
            key: tuple(sorted(entries, key=lambda entry: entry.quiz_id))
            for key, entries in buckets.items()
        }

    @property
    def modes(self) -> tuple[str, ...]:
        return self._modes

    def lookup(self, quiz_id: int | str | None) -> str | None:
        entry = self.lookup_entry(quiz_id)
        return entry.game_mode if entry is not None else None

    def lookup_entry(self, quiz_id: int | str | None) -> CatalogEntry | None:
        normalized = normalize_quiz_id(quiz_id)
        if normalized is None:
            return None
        return self._entries.get(normalized)

    def entries_for(self, game_mode: str, difficulty: Difficulty) -> tuple[CatalogEntry, ...]:
        return self._by_bucket.get((game_mode, difficulty), ())

    def quiz_count(self, game_mode: str | None = None) -> int:
        if game_mode is None:
            return len(self._entries)
        return sum(len(self.entries_for(game_mode, difficulty)) for difficulty in DIFFICULTY_ORDER)

    def levels_for_mode(self, game_mode: str, completed_ids: Collection[int] = ()) -> list[Level]:
        entries = [
            entry
            for difficulty in DIFFICULTY_ORDER
            for entry in self.entries_for(game_mode, difficulty)
        ]
        entries.sort(key=lambda entry: entry.quiz_id)
        return [
            Level(
                level_id=entry.quiz_id,
                title=entry.title or f"Level {entry.quiz_id}",
                difficulty=entry.difficulty,
                game_mode=entry.game_mode,
                status=LevelStatus.COMPLETED if entry.quiz_id in completed_ids else LevelStatus.CURRENT,
                level_label=entry.level_label or f"Level {entry.quiz_id}",
            )
            for entry in entries
        ]

    def next_level_title(self, game_mode: str, current_level_id: int, difficulty: Difficulty) -> str:
        next_level_id = current_level_id + 1
        entry = self._entries.get(next_level_id)
        if entry is None or entry.game_mode != game_mode or entry.difficulty != difficulty:
            return f"Level {next_level_id}"
        if entry.level_label and entry.title:
            return f"{entry.level_label} - {entry.title}"
        if entry.level_label:
            return entry.level_label
        if entry.title:
            return f"Level {next_level_id} - {entry.title}"
        return f"Level {next_level_id}"
