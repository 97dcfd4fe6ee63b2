"""Exam form (questionnaire number) schemas."""

from datetime import datetime

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema


class ExamFormCreate(BaseSchema):
    """Schema for creating an exam form under a subject."""

    subject_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=50)


class ExamFormRead(ExamFormCreate):
    """Schema for reading exam form data."""

    id: str
    created_at: datetime | None = None
