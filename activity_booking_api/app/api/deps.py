"""
FastAPI dependencies shared by the endpoints.

The store handle and the settings live on ``app.state``; services are
built per request around them, so nothing in the request path reaches
for module-level state.
"""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, Query, Request

from activity_booking_api.app.core.config import Settings
from activity_booking_api.app.core.db import SQLITE_MAX_INTEGER, Database
from activity_booking_api.app.services.lesson_service import LessonService
from activity_booking_api.app.services.order_service import OrderService
from activity_booking_api.app.stores.lesson_store import LessonStore
from activity_booking_api.app.stores.order_store import OrderStore


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class Pagination:
    page: int
    limit: int


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def parse_positive_int(raw: Any, default: int) -> int:
    """Parse a query value as an integer >= 1, falling back to ``default``."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def get_pagination(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Items per page"),
    app_settings: Settings = Depends(get_settings),
) -> Pagination:
    """Read ``page`` and ``limit``; absent or non-numeric values use defaults.

    ``limit`` is capped at ``max_page_size``.  ``page`` is capped so that
    the row offset still fits an SQLite INTEGER; pages that far out are
    empty anyway.
    """
    page_size = max(1, min(parse_positive_int(limit, DEFAULT_LIMIT), app_settings.max_page_size))
    page_number = min(parse_positive_int(page, DEFAULT_PAGE), SQLITE_MAX_INTEGER // page_size)
    return Pagination(page=page_number, limit=page_size)


def get_lesson_service(
    database: Database = Depends(get_database),
    app_settings: Settings = Depends(get_settings),
) -> LessonService:
    return LessonService(
        LessonStore(database),
        retry_attempts=app_settings.retry_attempts,
        retry_delay=app_settings.retry_delay,
    )


def get_order_service(
    database: Database = Depends(get_database),
    app_settings: Settings = Depends(get_settings),
) -> OrderService:
    return OrderService(
        LessonStore(database),
        OrderStore(database),
        retry_attempts=app_settings.retry_attempts,
        retry_delay=app_settings.retry_delay,
    )
