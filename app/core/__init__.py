"""Core app configuration, storage and security."""

from app.core.config import get_settings, settings
from app.core.storage import KeyValueStorage, build_storage

__all__ = ["get_settings", "settings", "KeyValueStorage", "build_storage"]
