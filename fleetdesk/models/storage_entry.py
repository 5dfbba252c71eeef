"""StorageEntry model: one serialized collection per storage key."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from fleetdesk.models.base import Base


class StorageEntry(Base):
    """A key/value row. ``value`` holds the JSON text of a whole collection
    (or of the single session record), rewritten on every save.
    """

    __tablename__ = "storage_entries"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
