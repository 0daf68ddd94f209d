"""
HTTP-level tests for the lesson, search and order endpoints.
"""

import pytest

from activity_booking_api.app.api.deps import parse_positive_int
from activity_booking_api.app.core.db import SQLITE_MAX_INTEGER, new_object_id
from activity_booking_api.app.core.errors import InvalidInput
from activity_booking_api.app.services.lesson_service import validate_column_value, validate_spaces
from activity_booking_api.app.stores.lesson_store import LessonStore


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "School Activities API is running"}


def test_unknown_endpoint(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"detail": "Endpoint not found"}


def test_list_lessons_defaults(client, api_lesson_ids):
    response = client.get("/lessons")
    assert response.status_code == 200
    lessons = response.json()
    assert [lesson["subject"] for lesson in lessons][:2] == ["Art", "Math"]
    assert lessons[0]["id"] == api_lesson_ids["Art"]
    assert lessons[0]["icon"] == "fa-palette"


def test_list_lessons_is_also_served_under_api_v1(client, api_lesson_ids):
    assert client.get("/api/v1/lessons").json() == client.get("/lessons").json()


def test_list_lessons_pagination(client, api_lesson_ids):
    response = client.get("/lessons", params={"page": 2, "limit": 5})
    assert [lesson["subject"] for lesson in response.json()] == ["Arts and Crafts", "Coding"]


def test_list_lessons_bad_paging_values_fall_back_to_defaults(client, api_lesson_ids):
    response = client.get("/lessons", params={"page": "abc", "limit": "-3"})
    assert response.status_code == 200
    assert len(response.json()) == 7


def test_list_lessons_limit_is_capped(client, api_lesson_ids, test_settings):
    extra = [{"subject": f"Extra {n}", "location": "Hall", "price": 1, "spaces": 1} for n in range(60)]
    LessonStore(client.app.state.database).insert_many(extra)
    response = client.get("/lessons", params={"limit": 1000})
    assert len(response.json()) == test_settings.max_page_size


def test_parse_positive_int():
    assert parse_positive_int("3", 1) == 3
    assert parse_positive_int(None, 10) == 10
    assert parse_positive_int("abc", 10) == 10
    assert parse_positive_int("0", 1) == 1


def test_update_lesson(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    response = client.put(f"/lessons/{art}", json={"spaces": 2, "image": "art.png", "_id": "ignored"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == art
    assert body["spaces"] == 2
    assert body["image"] == "art.png"


def test_update_lesson_rejects_invalid_spaces(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    for bad in (-1, "five", True, 1.5):
        response = client.put(f"/lessons/{art}", json={"spaces": bad})
        assert response.status_code == 400, bad
    assert client.get("/lessons").json()[0]["spaces"] == 5


def test_update_lesson_rejects_non_object_body(client, api_lesson_ids):
    response = client.put(f"/lessons/{api_lesson_ids['Art']}", json=["spaces", 1])
    assert response.status_code == 400


def test_update_lesson_bad_id(client):
    response = client.put("/lessons/123", json={"spaces": 1})
    assert response.status_code == 400
    assert "Invalid identifier format" in response.json()["detail"]


def test_update_lesson_not_found(client, api_lesson_ids):
    missing = new_object_id()
    response = client.put(f"/lessons/{missing}", json={"spaces": 1})
    assert response.status_code == 404
    assert response.json() == {"detail": f"Lesson {missing} not found"}


def test_search(client, api_lesson_ids):
    response = client.get("/search", params={"q": "art"})
    assert response.status_code == 200
    assert {lesson["subject"] for lesson in response.json()} == {"Art", "Arts and Crafts"}


def test_search_requires_query(client):
    assert client.get("/search").status_code == 400
    response = client.get("/search", params={"q": ""})
    assert response.status_code == 400
    assert response.json() == {"detail": "Query parameter is required"}


def test_place_order_and_list_orders(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    response = client.post(
        "/orders",
        json={"name": "Jo", "phone": "(555) 123-4567", "lessons": [{"lessonId": art, "quantity": 2}]},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Order created successfully"
    order_id = body["orderId"]

    orders = client.get("/orders").json()
    assert len(orders) == 1
    assert orders[0]["id"] == order_id
    assert orders[0]["phone"] == "5551234567"
    assert orders[0]["status"] == "confirmed"
    assert orders[0]["lessons"] == [{"lessonId": art, "quantity": 2}]
    assert client.get("/lessons").json()[0]["spaces"] == 3


def test_place_order_insufficient_spaces(client, api_lesson_ids):
    drama = api_lesson_ids["Drama"]
    response = client.post(
        "/orders", json={"name": "Jo", "phone": "12345678", "lessons": [{"lessonId": drama, "quantity": 1}]}
    )
    assert response.status_code == 400
    assert drama in response.json()["detail"]
    assert client.get("/orders").json() == []


def test_place_order_validation_errors(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    line = [{"lessonId": art, "quantity": 1}]
    cases = [
        ({"name": "John123", "phone": "12345678", "lessons": line}, "Invalid name"),
        ({"name": "Jo", "phone": "1234", "lessons": line}, "Invalid phone"),
        ({"name": "Jo", "phone": "12345678"}, "No lessons selected"),
        ({"name": "Jo", "phone": "12345678", "lessons": [{"lessonId": "bad", "quantity": 1}]}, "Invalid identifier"),
        ({"name": "Jo", "phone": "12345678", "lessons": [{"lessonId": new_object_id(), "quantity": 1}]}, "not found"),
    ]
    for payload, message in cases:
        response = client.post("/orders", json=payload)
        assert response.status_code == 400, payload
        assert message in response.json()["detail"]


def test_place_order_rejects_non_object_body(client):
    response = client.post("/orders", json=["Jo"])
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid input"}


@pytest.mark.parametrize("page", ["99999999999999999999", str(SQLITE_MAX_INTEGER)])
def test_far_away_pages_are_empty(client, api_lesson_ids, page):
    for path in ("/lessons", "/orders"):
        response = client.get(path, params={"page": page, "limit": 5})
        assert response.status_code == 200, path
        assert response.json() == []


def test_oversized_quantity_is_reported_as_insufficient_spaces(client, api_lesson_ids):
    art, math = api_lesson_ids["Art"], api_lesson_ids["Math"]
    response = client.post(
        "/orders",
        json={
            "name": "Jo",
            "phone": "12345678",
            "lessons": [{"lessonId": art, "quantity": 1}, {"lessonId": math, "quantity": 10**20}],
        },
    )
    assert response.status_code == 400
    assert response.json() == {"detail": f"Not enough spaces available for lesson {math}"}
    spaces = {lesson["subject"]: lesson["spaces"] for lesson in client.get("/lessons").json()}
    assert spaces["Art"] == 5
    assert spaces["Math"] == 5


def test_update_lesson_rejects_out_of_range_spaces(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    for bad in (10**20, 1e300, SQLITE_MAX_INTEGER + 1):
        response = client.put(f"/lessons/{art}", json={"spaces": bad})
        assert response.status_code == 400, bad
    assert client.put(f"/lessons/{art}", json={"spaces": SQLITE_MAX_INTEGER}).status_code == 200


def test_update_lesson_rejects_values_a_column_cannot_hold(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    for body in ({"subject": ["Art", "Craft"]}, {"location": {"room": 4}}, {"price": 10**20}):
        response = client.put(f"/lessons/{art}", json=body)
        assert response.status_code == 400, body
    lesson = client.get("/lessons").json()[0]
    assert (lesson["subject"], lesson["location"], lesson["price"]) == ("Art", "Hendon", 100)


def test_update_lesson_keeps_structured_values_outside_the_columns(client, api_lesson_ids):
    art = api_lesson_ids["Art"]
    response = client.put(f"/lessons/{art}", json={"subject": "Art and Design", "tags": ["paint", "clay"]})
    assert response.status_code == 200
    body = response.json()
    assert body["subject"] == "Art and Design"
    assert body["tags"] == ["paint", "clay"]


def test_validate_spaces_bounds():
    assert validate_spaces(0) == 0
    assert validate_spaces(4.0) == 4
    assert validate_spaces(SQLITE_MAX_INTEGER) == SQLITE_MAX_INTEGER
    for bad in (SQLITE_MAX_INTEGER + 1, 1e300, float("inf"), float("nan")):
        with pytest.raises(InvalidInput):
            validate_spaces(bad)


def test_validate_column_value():
    assert validate_column_value("subject", "Chess") == "Chess"
    assert validate_column_value("price", 12.5) == 12.5
    assert validate_column_value("location", None) is None
    for bad in ([1], {"a": 1}, 2**63, -(2**63) - 1, float("inf")):
        with pytest.raises(InvalidInput):
            validate_column_value("price", bad)
