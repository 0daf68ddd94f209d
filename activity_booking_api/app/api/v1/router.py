"""
Top-level router for version 1 of the API.

This router aggregates the lesson, search and order routers.  Each
endpoint module declares its own full path, so no prefixes are added
here.
"""

from fastapi import APIRouter

from .endpoints import lessons, orders, search

router = APIRouter()

router.include_router(lessons.router, tags=["lessons"])
router.include_router(search.router, tags=["search"])
router.include_router(orders.router, tags=["orders"])
