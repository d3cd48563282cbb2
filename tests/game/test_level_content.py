from __future__ import annotations

import json
from pathlib import Path

import pytest

from levelplay.core.config import Settings
from levelplay.game.questions.content import build_catalog_index, load_level_content
from levelplay.game.questions.errors import LevelContentError
from levelplay.main import load_catalog_index
from tests.game.session_fixtures import LEVEL_CONTENT


def _write_content(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "levels.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_level_content_reads_json(tmp_path: Path) -> None:
    path = _write_content(tmp_path, LEVEL_CONTENT)

    content = load_level_content(path)

    assert set(content) == {"multipleChoice", "identification", "fillBlanks"}
    assert content["multipleChoice"]["easy"][0]["title"] == "Greetings"


def test_build_catalog_index_from_file(tmp_path: Path) -> None:
    path = _write_content(tmp_path, LEVEL_CONTENT)

    index = build_catalog_index(path)

    assert index.lookup("n-4") == "multipleChoice"
    assert index.quiz_count() == 8


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"multipleChoice": []},
        {"multipleChoice": {"easy": {"id": 1}}},
        {"multipleChoice": {"easy": ["not-an-object"]}},
    ],
)
def test_load_level_content_rejects_bad_shapes(tmp_path: Path, payload: object) -> None:
    path = _write_content(tmp_path, payload)

    with pytest.raises(LevelContentError):
        load_level_content(path)


def test_load_level_content_wraps_read_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(LevelContentError):
        load_level_content(broken)
    with pytest.raises(LevelContentError):
        load_level_content(tmp_path / "missing.json")


def test_load_catalog_index_requires_configured_path(tmp_path: Path) -> None:
    with pytest.raises(LevelContentError):
        load_catalog_index(Settings(LEVEL_CONTENT_PATH=None))

    path = _write_content(tmp_path, LEVEL_CONTENT)
    index = load_catalog_index(Settings(LEVEL_CONTENT_PATH=str(path)))
    assert index.lookup(5) == "identification"
