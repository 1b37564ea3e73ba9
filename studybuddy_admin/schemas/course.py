"""
Pydantic schemas for course and group moderation.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CourseUpdateRequest(BaseModel):
    """Fields left as None are not changed."""
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    reason: str = Field(min_length=1, max_length=1000)


class CourseResponse(BaseModel):
    id: int
    code: str
    name: str
    description: str | None
    is_archived: bool
    archived_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
