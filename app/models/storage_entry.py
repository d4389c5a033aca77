"""ORM model for one persisted key-value document (SQL storage backend)."""

from sqlalchemy import Column, DateTime, String, Text, func

from app.models.base import Base


class StorageEntry(Base):
    """
    One JSON document stored under a well-known key.

    Mirrors browser local storage: the whole collection is rewritten on every change.
    """

    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
