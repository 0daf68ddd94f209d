"""
Tests for the lesson catalogue loader.
"""

import json

import pytest

from activity_booking_api.app.core.db import Database
from activity_booking_api.app.stores.lesson_store import LessonStore
from activity_booking_api.seed import DEFAULT_CATALOGUE, load_lessons, main


def _count(db_path):
    db = Database(str(db_path))
    db.open()
    try:
        return len(LessonStore(db).list_lessons(1, 1000))
    finally:
        db.close()


def test_default_catalogue_is_valid():
    lessons = load_lessons(DEFAULT_CATALOGUE)
    assert len(lessons) == 10
    assert all(lesson["spaces"] == 5 for lesson in lessons)
    assert lessons[0]["icon"] == "fa-palette"


def test_load_lessons_rejects_invalid_entries(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"subject": "Art", "location": "Hendon", "price": 10, "spaces": -1}]))
    with pytest.raises(ValueError):
        load_lessons(path)

    path.write_text(json.dumps({"subject": "Art"}))
    with pytest.raises(ValueError):
        load_lessons(path)


def test_main_loads_and_resets(tmp_path, capsys):
    db_path = tmp_path / "seed.db"
    assert main(["--db", str(db_path)]) == 0
    assert main(["--db", str(db_path)]) == 0
    assert _count(db_path) == 20

    assert main(["--db", str(db_path), "--reset"]) == 0
    assert _count(db_path) == 10
    assert "Removed 20 existing lessons" in capsys.readouterr().out


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json"), "--db", str(tmp_path / "seed.db")]) == 1
    assert "[!]" in capsys.readouterr().err
