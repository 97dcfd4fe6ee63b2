"""
SQLAlchemy 2.0 Models for the Bagrut portal.

The whole persistence layer is one key-value table standing in for
browser-local storage: every entity collection is a JSON array under a
fixed key, and every uploaded file is a base64 data URL under its own key.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bagrut_portal.db.base import Base


class StorageItem(Base):
    """A single key/value entry of the local storage medium."""

    __tablename__ = "storage_items"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<StorageItem {self.key} ({len(self.value)} chars)>"
