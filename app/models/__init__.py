"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.storage_entry import StorageEntry

__all__ = ["Base", "StorageEntry"]
