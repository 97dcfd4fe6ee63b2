"""Per-question solution schemas."""

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class QuestionSolutionCreate(BaseSchema):
    """Schema for adding a solution to one exam question."""

    question_number: int = Field(..., ge=1)
    solution_video_url: str | None = None
    solution_text: str | None = None


class QuestionSolutionRead(QuestionSolutionCreate, IDMixin, CreatedAtMixin):
    """Schema for reading a question solution."""

    exam_id: str


class QuestionSolutionUpdate(BaseSchema):
    """Schema for updating a question solution. All fields optional."""

    question_number: int | None = Field(None, ge=1)
    solution_video_url: str | None = None
    solution_text: str | None = None
