"""
Lesson search endpoint for API v1.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from activity_booking_api.app.api.deps import get_lesson_service
from activity_booking_api.app.services.lesson_service import LessonService


router = APIRouter()


@router.get("/search")
async def search_lessons(
    q: Optional[str] = Query(None, description="Search text"),
    service: LessonService = Depends(get_lesson_service),
) -> List[Dict[str, Any]]:
    """Search lessons by subject, location, price or spaces.

    A number matches price or spaces exactly as well as text containing
    it; a single character matches by substring; longer text uses the
    full-text index.  Answers 400 when ``q`` is missing or empty.
    """
    return await service.search(q)
