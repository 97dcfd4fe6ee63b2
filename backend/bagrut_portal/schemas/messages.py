"""Message schemas."""

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema, CreatedAtMixin, IDMixin


class MessageCreate(BaseSchema):
    """Schema for sending a message."""

    recipient_id: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    attachment_url: str | None = None
    attachment_name: str | None = Field(None, max_length=255)


class MessageRead(MessageCreate, IDMixin, CreatedAtMixin):
    """Schema for reading a message, with both parties denormalized."""

    sender_id: str
    sender_name: str
    recipient_name: str
    is_read: bool = False


class UnreadCount(BaseSchema):
    """Unread message counter for the navbar badge."""

    unread: int
