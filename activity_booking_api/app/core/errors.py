"""
Domain errors raised by the services and store layer.

Every error carries the HTTP status it maps to and a ``detail``
message that is safe to show to clients.  Endpoints translate these
into ``HTTPException``; server-side failures use a generic message so
no store internals leak to callers.
"""

from typing import Optional


class BookingError(Exception):
    """Base class for all expected failures of the booking API."""

    status_code: int = 400
    default_detail: str = "Bad request"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(BookingError):
    default_detail = "Invalid input"


class InvalidName(BookingError):
    default_detail = "Invalid name: use at least 2 letters, spaces, hyphens or apostrophes"


class InvalidPhone(BookingError):
    default_detail = "Invalid phone: at least 8 digits are required"


class NoLessonsSelected(BookingError):
    default_detail = "No lessons selected"


class InvalidIdentifierFormat(BookingError):
    default_detail = "Invalid identifier format"


class InvalidQuery(BookingError):
    default_detail = "Query parameter is required"


class LessonNotFound(BookingError):
    def __init__(self, lesson_id: str) -> None:
        self.lesson_id = lesson_id
        super().__init__(f"Lesson {lesson_id} not found")


class InsufficientSpaces(BookingError):
    def __init__(self, lesson_id: str) -> None:
        self.lesson_id = lesson_id
        super().__init__(f"Not enough spaces available for lesson {lesson_id}")


class NotFound(BookingError):
    status_code = 404
    default_detail = "Not found"


class StoreUnavailable(BookingError):
    status_code = 500
    default_detail = "Internal server error"


class Unexpected(BookingError):
    status_code = 500
    default_detail = "Internal server error"
