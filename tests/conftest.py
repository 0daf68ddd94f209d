"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path``.  Retry delays
are zero so that failure paths run instantly.
"""

import pytest
from fastapi.testclient import TestClient

from activity_booking_api.app.core.config import Settings
from activity_booking_api.app.core.db import Database
from activity_booking_api.app.main import create_app
from activity_booking_api.app.stores.lesson_store import LessonStore
from activity_booking_api.app.stores.order_store import OrderStore


LESSONS = [
    {"subject": "Art", "location": "Hendon", "price": 100, "spaces": 5, "icon": "fa-palette"},
    {"subject": "Math", "location": "Colindale", "price": 80, "spaces": 5},
    {"subject": "Music", "location": "Golders Green", "price": 5, "spaces": 3},
    {"subject": "Science", "location": "Hendon", "price": 110, "spaces": 1},
    {"subject": "Drama", "location": "Mill Hill", "price": 75, "spaces": 0},
    {"subject": "Arts and Crafts", "location": "Barnet", "price": 60, "spaces": 8},
    {"subject": "Coding", "location": "Room 15", "price": 120, "spaces": 2},
]


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "store.db"), timeout=5)
    db.open()
    yield db
    db.close()


@pytest.fixture
def lesson_store(database):
    return LessonStore(database)


@pytest.fixture
def order_store(database):
    return OrderStore(database)


@pytest.fixture
def lesson_ids(lesson_store):
    """Insert ``LESSONS`` and map each subject to its id."""
    ids = lesson_store.insert_many(LESSONS)
    return {lesson["subject"]: lesson_id for lesson, lesson_id in zip(LESSONS, ids)}


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "api.db"),
        retry_attempts=2,
        retry_delay_ms=0,
        max_page_size=50,
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_lesson_ids(client):
    store = LessonStore(client.app.state.database)
    ids = store.insert_many(LESSONS)
    return {lesson["subject"]: lesson_id for lesson, lesson_id in zip(LESSONS, ids)}
