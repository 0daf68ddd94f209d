"""
Pydantic models for lesson data.

Lessons are returned to clients as plain documents so that fields set
by administrators appear alongside the fixed ones.  ``LessonCreate``
is used when loading the initial lesson catalogue.
"""

from pydantic import BaseModel, Field


class LessonCreate(BaseModel):
    """Schema for a lesson in the initial data load."""

    subject: str = Field(..., examples=["Art"])
    location: str = Field(..., examples=["London"])
    price: float = Field(..., ge=0, examples=[100])
    spaces: int = Field(..., ge=0, examples=[5])

    # Extra keys such as ``image`` or ``icon`` are kept on the document.
    model_config = {
        "extra": "allow",
    }
