"""Forum comment schemas."""

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema, CreatedAtMixin, IDMixin
from bagrut_portal.schemas.user import UserRole


class CommentCreate(BaseSchema):
    """Schema for posting a comment on an exam."""

    content: str = Field(..., min_length=1, max_length=5000)
    image_url: str | None = None


class CommentRead(CommentCreate, IDMixin, CreatedAtMixin):
    """Schema for reading a comment, with the author denormalized."""

    exam_id: str
    user_id: str
    user_name: str
    user_role: UserRole
