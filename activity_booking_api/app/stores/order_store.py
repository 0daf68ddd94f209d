"""
Order store accessor.

Orders are written once and never changed.  The ordered lesson lines
are stored as JSON text.  Validation is entirely the responsibility of
the order service.
"""

import json
from datetime import datetime
from typing import Any, Dict, List

from activity_booking_api.app.core.db import Database, new_object_id


class OrderStore:
    """Accessor for order documents."""

    def __init__(self, database: Database) -> None:
        self.database = database

    def insert_order(self, order: Dict[str, Any]) -> str:
        """Persist ``order`` and return its generated identifier."""
        order_id = new_object_id()
        date = order["date"]
        if isinstance(date, datetime):
            date = date.isoformat()
        with self.database.cursor() as cursor:
            cursor.execute(
                "INSERT INTO orders (id, name, phone, lessons, date, status) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    order_id,
                    order["name"],
                    order["phone"],
                    json.dumps(order["lessons"]),
                    date,
                    order.get("status", "confirmed"),
                ),
            )
        return order_id

    def list_orders(self, page: int, limit: int) -> List[Dict[str, Any]]:
        offset = (page - 1) * limit
        with self.database.cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, name, phone, lessons, date, status FROM orders ORDER BY seq LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [
            {
                "id": row["id"],
                "name": row["name"],
                "phone": row["phone"],
                "lessons": json.loads(row["lessons"]),
                "date": row["date"],
                "status": row["status"],
            }
            for row in rows
        ]
