"""Subject schemas."""

from datetime import datetime

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema


class SubjectCreate(BaseSchema):
    """Schema for creating a subject."""

    name: str = Field(..., min_length=1, max_length=255)


class SubjectRead(SubjectCreate):
    """Schema for reading subject data."""

    id: str
    created_at: datetime | None = None
