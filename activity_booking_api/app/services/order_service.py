"""
Business logic for placing and listing orders.

Placing an order validates the customer details and the requested
lessons, takes the seats of every line with a conditional decrement
and finally records the order.  Seats are decremented at order time
only; there is no earlier hold.

A line that cannot be served stops the request.  Seats already taken
by earlier lines of the same request are given back, and the same
happens if the order cannot be recorded after its seats were taken,
so a failed request leaves every lesson as it found it.  Giving seats
back is best effort: a failure there is logged and the original error
is raised.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from activity_booking_api.app.core.db import SQLITE_MAX_INTEGER, parse_object_id
from activity_booking_api.app.core.errors import (
    InsufficientSpaces,
    InvalidInput,
    InvalidName,
    InvalidPhone,
    LessonNotFound,
    NoLessonsSelected,
)
from activity_booking_api.app.core.retry import call_with_retry
from activity_booking_api.app.schemas.order import OrderLine
from activity_booking_api.app.stores.lesson_store import LessonStore
from activity_booking_api.app.stores.order_store import OrderStore


logger = logging.getLogger(__name__)

NAME_RE = re.compile(r"^[A-Za-z\s'-]{2,}$")
MIN_PHONE_DIGITS = 8
ORDER_STATUS = "confirmed"


def validate_name(name: Any) -> str:
    """Return the trimmed customer name or raise ``InvalidName``."""
    if not isinstance(name, str):
        raise InvalidName()
    trimmed = name.strip()
    if not NAME_RE.match(trimmed):
        raise InvalidName()
    return trimmed


def normalize_phone(phone: Any) -> str:
    """Strip everything but digits; raise ``InvalidPhone`` if too short."""
    if isinstance(phone, bool) or not isinstance(phone, (str, int)):
        raise InvalidPhone()
    digits = re.sub(r"\D", "", str(phone))
    if len(digits) < MIN_PHONE_DIGITS:
        raise InvalidPhone()
    return digits


def parse_order_lines(lessons: Any) -> List[OrderLine]:
    """Validate the ``lessons`` list of an order request.

    Raises ``NoLessonsSelected`` if it is missing, not a list or empty,
    ``InvalidInput`` for a malformed entry and
    ``InvalidIdentifierFormat`` for a malformed lesson id.
    """
    if not isinstance(lessons, list) or not lessons:
        raise NoLessonsSelected()
    lines: List[OrderLine] = []
    for position, entry in enumerate(lessons, start=1):
        try:
            line = OrderLine.model_validate(entry)
        except ValidationError as exc:
            raise InvalidInput(
                f"Invalid lesson entry #{position}: lessonId and a quantity of at least 1 are required"
            ) from exc
        line.lesson_id = parse_object_id(line.lesson_id)
        lines.append(line)
    return lines


class OrderService:
    """Service for placing and listing orders."""

    def __init__(
        self,
        lesson_store: LessonStore,
        order_store: OrderStore,
        retry_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ) -> None:
        self.lesson_store = lesson_store
        self.order_store = order_store
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    async def _call(self, operation, *args):
        return await call_with_retry(
            operation, *args, attempts=self.retry_attempts, delay=self.retry_delay
        )

    async def place_order(self, name: Any, phone: Any, lessons: Any) -> str:
        """Place an order and return its identifier.

        Validation order: name, phone, lesson list, existence of every
        lesson, then seats line by line.  The first failure aborts the
        request.
        """
        customer_name = validate_name(name)
        customer_phone = normalize_phone(phone)
        lines = parse_order_lines(lessons)

        requested_ids = list(dict.fromkeys(line.lesson_id for line in lines))
        found = await self._call(self.lesson_store.find_by_ids, requested_ids)
        found_ids = {lesson["id"] for lesson in found}
        for lesson_id in requested_ids:
            if lesson_id not in found_ids:
                logger.warning("Order rejected: lesson %s not found", lesson_id)
                raise LessonNotFound(lesson_id)

        taken: List[OrderLine] = []
        try:
            for line in lines:
                # No lesson can hold more seats than an INTEGER column allows.
                ok = line.quantity <= SQLITE_MAX_INTEGER and await self._call(
                    self.lesson_store.decrement_spaces, line.lesson_id, line.quantity
                )
                if not ok:
                    logger.warning(
                        "Order rejected: not enough spaces on lesson %s for %d seat(s)",
                        line.lesson_id,
                        line.quantity,
                    )
                    raise InsufficientSpaces(line.lesson_id)
                taken.append(line)

            order: Dict[str, Any] = {
                "name": customer_name,
                "phone": customer_phone,
                "lessons": [line.model_dump(by_alias=True) for line in lines],
                "date": datetime.now(timezone.utc),
                "status": ORDER_STATUS,
            }
            order_id = await self._call(self.order_store.insert_order, order)
        except Exception:
            await self._give_back(taken)
            raise

        logger.info("Order %s placed for %d lesson line(s)", order_id, len(lines))
        return order_id

    async def _give_back(self, lines: List[OrderLine]) -> None:
        for line in reversed(lines):
            try:
                await self._call(self.lesson_store.increment_spaces, line.lesson_id, line.quantity)
            except Exception:
                logger.exception(
                    "Could not give back %d seat(s) on lesson %s", line.quantity, line.lesson_id
                )

    async def list_orders(self, page: int = 1, limit: int = 10) -> List[Dict[str, Any]]:
        return await self._call(self.order_store.list_orders, page, limit)
