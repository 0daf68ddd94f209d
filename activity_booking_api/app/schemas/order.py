"""
Pydantic models for orders.

``OrderCreate`` accepts the raw request body without type coercion;
the order service performs the validation so that each failure maps
to its own error (invalid name, invalid phone, no lessons selected and
so on) instead of a generic schema error.  ``OrderLine`` is the
validated form of a single entry of the ``lessons`` list.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, Field


class OrderLine(BaseModel):
    lesson_id: str = Field(..., alias="lessonId", examples=["65f1c0ffee0ddba11c0ffee0"])
    quantity: int = Field(1, ge=1, strict=True, examples=[1])

    model_config = {
        "populate_by_name": True,
    }


class OrderCreate(BaseModel):
    """Schema for placing an order."""

    name: Any = Field(None, examples=["Jo Smith"])
    phone: Any = Field(None, examples=["(555) 123-4567"])
    lessons: Any = Field(None, examples=[[{"lessonId": "65f1c0ffee0ddba11c0ffee0", "quantity": 1}]])


class OrderCreated(BaseModel):
    message: str = "Order created successfully"
    order_id: str = Field(..., alias="orderId")

    model_config = {
        "populate_by_name": True,
    }


class OrderRead(BaseModel):
    id: str
    name: str
    phone: str
    lessons: List[OrderLine]
    date: datetime
    status: str
