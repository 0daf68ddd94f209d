"""
Lesson endpoints for API v1.

Listing is public and paginated.  Updating overwrites the given fields
of a lesson; only ``spaces`` is validated and the identifier can never
be changed.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path

from activity_booking_api.app.api.deps import Pagination, get_lesson_service, get_pagination
from activity_booking_api.app.services.lesson_service import LessonService


router = APIRouter()


@router.get("/lessons")
async def list_lessons(
    paging: Pagination = Depends(get_pagination),
    service: LessonService = Depends(get_lesson_service),
) -> List[Dict[str, Any]]:
    """List lessons in catalogue order.

    - **page**: 1-based page number (default 1).
    - **limit**: lessons per page (default 10).
    """
    return await service.list_lessons(paging.page, paging.limit)


@router.put("/lessons/{lesson_id}")
async def update_lesson(
    lesson_id: str = Path(..., description="ID of the lesson"),
    updates: Any = Body(..., examples=[{"spaces": 4}]),
    service: LessonService = Depends(get_lesson_service),
) -> Dict[str, Any]:
    """Overwrite fields of a lesson and return the updated lesson.

    Answers 400 for a malformed id or an invalid ``spaces`` value and
    404 if the lesson does not exist.
    """
    return await service.update_lesson(lesson_id, updates)
