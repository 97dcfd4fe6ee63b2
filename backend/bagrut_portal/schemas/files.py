"""Pydantic schemas for file blob operations."""

from pydantic import BaseModel


class FileUploadResponse(BaseModel):
    """Locator of a freshly stored file."""

    url: str
    filename: str | None = None
    content_type: str
    size_bytes: int
