"""
Lesson store accessor.

``LessonStore`` wraps the ``lessons`` table and returns lessons as
plain documents (dicts).  The fixed columns ``subject``, ``location``,
``price`` and ``spaces`` are stored as columns; any other field an
administrator sets is kept in the JSON ``attributes`` bag and merged
back into the document on read.

All methods are blocking and are meant to be called through
``call_with_retry``.  No business validation happens here.
"""

import json
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from activity_booking_api.app.core.db import Database, new_object_id, parse_object_id
from activity_booking_api.app.core.errors import InvalidIdentifierFormat


LESSON_COLUMNS = ("subject", "location", "price", "spaces")
IMMUTABLE_FIELDS = ("id", "_id")

_SELECT = "SELECT lessons.id, lessons.subject, lessons.location, lessons.price, lessons.spaces, lessons.attributes FROM lessons"


@dataclass(frozen=True)
class StoreFilter:
    """A ``WHERE`` clause over the ``lessons`` table.

    When ``text_search`` is set the clause refers to the ``lessons_fts``
    index, which is joined in and used to rank the results.
    """

    where: str
    params: Tuple[Any, ...] = field(default_factory=tuple)
    text_search: bool = False


def row_to_lesson(row: sqlite3.Row) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"id": row["id"]}
    doc.update(json.loads(row["attributes"] or "{}"))
    for column in LESSON_COLUMNS:
        doc[column] = row[column]
    return doc


class LessonStore:
    """Accessor for lesson documents."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def list_lessons(self, page: int, limit: int) -> List[Dict[str, Any]]:
        offset = (page - 1) * limit
        with self.database.cursor() as cursor:
            rows = cursor.execute(
                f"{_SELECT} ORDER BY lessons.seq LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [row_to_lesson(row) for row in rows]

    def get(self, lesson_id: str) -> Optional[Dict[str, Any]]:
        with self.database.cursor() as cursor:
            row = cursor.execute(f"{_SELECT} WHERE lessons.id = ?", (lesson_id,)).fetchone()
        return row_to_lesson(row) if row else None

    def find_by_ids(self, lesson_ids: Iterable[str]) -> List[Dict[str, Any]]:
        ids = list(dict.fromkeys(lesson_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self.database.cursor() as cursor:
            rows = cursor.execute(
                f"{_SELECT} WHERE lessons.id IN ({placeholders}) ORDER BY lessons.seq",
                tuple(ids),
            ).fetchall()
        return [row_to_lesson(row) for row in rows]

    def find(self, store_filter: StoreFilter) -> List[Dict[str, Any]]:
        if store_filter.text_search:
            sql = (
                f"{_SELECT} JOIN lessons_fts ON lessons_fts.rowid = lessons.seq "
                f"WHERE {store_filter.where} ORDER BY bm25(lessons_fts)"
            )
        else:
            sql = f"{_SELECT} WHERE {store_filter.where} ORDER BY lessons.seq"
        with self.database.cursor() as cursor:
            rows = cursor.execute(sql, store_filter.params).fetchall()
        return [row_to_lesson(row) for row in rows]

    def update_lesson(self, lesson_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Overwrite ``fields`` on a lesson and return the updated document.

        Returns ``None`` if no lesson has ``lesson_id``.  Identifier
        fields in ``fields`` are ignored.
        """
        updates = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        with self.database.transaction() as cursor:
            row = cursor.execute(
                "SELECT attributes FROM lessons WHERE id = ?", (lesson_id,)
            ).fetchone()
            if row is None:
                return None
            attributes = json.loads(row["attributes"] or "{}")
            assignments: List[str] = []
            values: List[Any] = []
            for key, value in updates.items():
                if key in LESSON_COLUMNS:
                    assignments.append(f"{key} = ?")
                    values.append(value)
                else:
                    attributes[key] = value
            assignments.append("attributes = ?")
            values.append(json.dumps(attributes, default=str))
            values.append(lesson_id)
            cursor.execute(
                f"UPDATE lessons SET {', '.join(assignments)} WHERE id = ?",
                tuple(values),
            )
            updated = cursor.execute(f"{_SELECT} WHERE lessons.id = ?", (lesson_id,)).fetchone()
        return row_to_lesson(updated)

    def decrement_spaces(self, lesson_id: str, quantity: int) -> bool:
        """Take ``quantity`` seats if at least that many remain.

        The check and the decrement are one statement, so concurrent
        callers can never push ``spaces`` below zero.  Returns ``False``
        when the lesson is missing or has too few seats.
        """
        with self.database.cursor() as cursor:
            cursor.execute(
                "UPDATE lessons SET spaces = spaces - ? WHERE id = ? AND spaces >= ?",
                (quantity, lesson_id, quantity),
            )
            return cursor.rowcount == 1

    def increment_spaces(self, lesson_id: str, quantity: int) -> bool:
        with self.database.cursor() as cursor:
            cursor.execute(
                "UPDATE lessons SET spaces = spaces + ? WHERE id = ?",
                (quantity, lesson_id),
            )
            return cursor.rowcount == 1

    def insert_many(self, lessons: Iterable[Dict[str, Any]]) -> List[str]:
        """Insert lesson documents and return their identifiers.

        A document keeps its own ``id`` when it is a valid identifier;
        otherwise a new one is generated.
        """
        inserted: List[str] = []
        with self.database.transaction() as cursor:
            for lesson in lessons:
                try:
                    lesson_id = parse_object_id(lesson.get("id", lesson.get("_id")))
                except InvalidIdentifierFormat:
                    lesson_id = new_object_id()
                attributes = {
                    k: v
                    for k, v in lesson.items()
                    if k not in LESSON_COLUMNS and k not in IMMUTABLE_FIELDS
                }
                cursor.execute(
                    "INSERT INTO lessons (id, subject, location, price, spaces, attributes) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        lesson_id,
                        lesson.get("subject", ""),
                        lesson.get("location", ""),
                        lesson.get("price", 0),
                        lesson.get("spaces", 0),
                        json.dumps(attributes, default=str),
                    ),
                )
                inserted.append(lesson_id)
        return inserted

    def delete_all(self) -> int:
        with self.database.transaction() as cursor:
            cursor.execute("DELETE FROM lessons")
            return cursor.rowcount
