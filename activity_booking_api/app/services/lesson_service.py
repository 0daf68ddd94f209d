"""
Business logic for lessons.

``LessonService`` lists, searches and updates lessons.  Input checks
(identifier format, the ``spaces`` value, the search query) run before
the store is touched, and every store call goes through
``call_with_retry``.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from activity_booking_api.app.core.db import SQLITE_MAX_INTEGER, parse_object_id
from activity_booking_api.app.core.errors import InvalidInput, NotFound
from activity_booking_api.app.core.retry import call_with_retry
from activity_booking_api.app.services.search_service import build_search_filter
from activity_booking_api.app.stores.lesson_store import LESSON_COLUMNS, LessonStore


logger = logging.getLogger(__name__)


def validate_spaces(value: Any) -> int:
    """Return ``value`` as a seat count or raise ``InvalidInput``.

    Accepts non-negative integers, including floats with no
    fractional part.  Booleans are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput("spaces must be a non-negative number")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput("spaces must be a whole number")
        value = int(value)
    if value < 0:
        raise InvalidInput("spaces must be a non-negative number")
    if value > SQLITE_MAX_INTEGER:
        raise InvalidInput("spaces is too large")
    return value


def validate_column_value(field: str, value: Any) -> Any:
    """Check a value written to one of the fixed lesson columns.

    Lists and objects have no column representation, integers must fit
    an SQLite INTEGER and floats must be finite.
    """
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        if abs(value) > SQLITE_MAX_INTEGER:
            raise InvalidInput(f"{field} is out of range")
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInput(f"{field} must be a finite number")
        return value
    raise InvalidInput(f"{field} must be a text or number value")


class LessonService:
    """Service for reading and updating lessons."""

    def __init__(
        self,
        store: LessonStore,
        retry_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ) -> None:
        self.store = store
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    async def _call(self, operation, *args):
        return await call_with_retry(
            operation, *args, attempts=self.retry_attempts, delay=self.retry_delay
        )

    async def list_lessons(self, page: int = 1, limit: int = 10) -> List[Dict[str, Any]]:
        return await self._call(self.store.list_lessons, page, limit)

    async def search(self, query: Any) -> List[Dict[str, Any]]:
        store_filter = build_search_filter(query)
        return await self._call(self.store.find, store_filter)

    async def update_lesson(self, raw_id: Any, updates: Any) -> Dict[str, Any]:
        """Overwrite fields of an existing lesson.

        Raises ``InvalidIdentifierFormat`` for a malformed id,
        ``InvalidInput`` if the body is not an object or carries a value
        a lesson column cannot hold, and ``NotFound`` if no lesson has
        the id.  Returns the updated lesson.
        """
        lesson_id = parse_object_id(raw_id)
        if not isinstance(updates, dict):
            raise InvalidInput("Request body must be a JSON object")
        fields = dict(updates)
        if "spaces" in fields:
            fields["spaces"] = validate_spaces(fields["spaces"])
        for column in LESSON_COLUMNS:
            if column in fields and column != "spaces":
                fields[column] = validate_column_value(column, fields[column])

        lesson = await self._call(self.store.update_lesson, lesson_id, fields)
        if lesson is None:
            raise NotFound(f"Lesson {lesson_id} not found")
        logger.info("Lesson %s updated: %s", lesson_id, ", ".join(sorted(fields)) or "no fields")
        return lesson
