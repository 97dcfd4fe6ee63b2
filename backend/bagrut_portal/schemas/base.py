"""Base schema configuration."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class CreatedAtMixin(BaseModel):
    """Mixin for the created_at timestamp every stored record carries."""

    created_at: datetime


class IDMixin(BaseModel):
    """Mixin for the timestamp-based string id."""

    id: str
