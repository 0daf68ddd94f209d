#!/usr/bin/env python3
"""
Load the lesson catalogue into the SQLite store.

Reads a JSON array of lessons (``subject``, ``location``, ``price``,
``spaces`` and any extra fields such as ``image``), validates every
entry and inserts them.  Without a file argument the sample catalogue
shipped in ``activity_booking_api/data/lessons.json`` is loaded.

Usage:
    python -m activity_booking_api.seed lessons.json --db ./after_school_activities.db --reset
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from activity_booking_api.app.core.config import settings
from activity_booking_api.app.core.db import Database, resolve_database_path
from activity_booking_api.app.schemas.lesson import LessonCreate
from activity_booking_api.app.stores.lesson_store import LessonStore


DEFAULT_CATALOGUE = Path(__file__).resolve().parent / "data" / "lessons.json"


def load_lessons(path: Path) -> List[Dict[str, Any]]:
    """Read and validate the lessons in ``path``.

    Raises ``ValueError`` if the file is not a JSON array of valid
    lessons.
    """
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of lessons")
    lessons = []
    for position, entry in enumerate(raw, start=1):
        try:
            lessons.append(LessonCreate.model_validate(entry).model_dump())
        except ValidationError as exc:
            raise ValueError(f"Lesson #{position} is invalid: {exc}") from exc
    return lessons


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Load lessons into the School Activities store.")
    ap.add_argument("file", nargs="?", default=str(DEFAULT_CATALOGUE), help="JSON file with an array of lessons")
    ap.add_argument("--db", default=settings.database_url, help="Path to the SQLite DB file")
    ap.add_argument("--reset", action="store_true", help="Delete existing lessons first")
    args = ap.parse_args(argv)

    try:
        lessons = load_lessons(Path(args.file))
    except (OSError, ValueError) as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    database = Database(resolve_database_path(args.db), timeout=settings.db_timeout)
    database.open()
    try:
        store = LessonStore(database)
        if args.reset:
            removed = store.delete_all()
            print(f"[+] Removed {removed} existing lessons")
        ids = store.insert_many(lessons)
        print(f"[+] Loaded {len(ids)} lessons into {database.path}")
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
