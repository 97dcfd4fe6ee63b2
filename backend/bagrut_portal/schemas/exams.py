"""Exam schemas."""

from enum import Enum as PyEnum

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class Season(str, PyEnum):
    """Exam sitting."""

    WINTER = "winter"
    SUMMER = "summer"


class ExamBase(BaseSchema):
    """Base exam schema."""

    subject: str = Field(..., min_length=1, description="Subject id")
    form: str | None = Field(None, description="Exam form id")
    year: int = Field(..., ge=1900, le=2100)
    season: Season | None = None
    exam_file_url: str = ""
    solution_file_url: str = ""
    solution_video_url: str = ""


class ExamCreate(ExamBase):
    """Schema for creating an exam."""


class ExamRead(ExamBase, IDMixin, CreatedAtMixin):
    """Schema for reading exam data."""


class ExamUpdate(BaseSchema):
    """Schema for updating an exam. All fields optional; null clears form/season."""

    subject: str | None = Field(None, min_length=1)
    form: str | None = None
    year: int | None = Field(None, ge=1900, le=2100)
    season: Season | None = None
    exam_file_url: str | None = None
    solution_file_url: str | None = None
    solution_video_url: str | None = None
