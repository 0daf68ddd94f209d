"""
Order endpoints for API v1.

Placing an order takes seats from every requested lesson and records
the order; see ``OrderService.place_order`` for the rules.  Orders can
be listed page by page.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from activity_booking_api.app.api.deps import Pagination, get_order_service, get_pagination
from activity_booking_api.app.schemas.order import OrderCreate, OrderCreated, OrderRead
from activity_booking_api.app.services.order_service import OrderService


router = APIRouter()


@router.post("/orders", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> OrderCreated:
    """Place an order.

    Answers 400 naming the problem when the name, phone or lesson list
    is invalid, a lesson does not exist or has too few spaces left.
    """
    order_id = await service.place_order(order.name, order.phone, order.lessons)
    return OrderCreated(orderId=order_id)


@router.get("/orders", response_model=List[OrderRead])
async def list_orders(
    paging: Pagination = Depends(get_pagination),
    service: OrderService = Depends(get_order_service),
) -> List[OrderRead]:
    """List orders in the order they were placed."""
    return await service.list_orders(paging.page, paging.limit)
