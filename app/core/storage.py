"""Key-value storage port and its backends (memory, JSON files, SQL table)."""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from sqlalchemy.orm import Session, sessionmaker

from app.models import StorageEntry

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Durable string storage keyed by name, shaped like browser local storage."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Process-local storage; contents are lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """One `<key>.json` file per key inside a directory."""

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a crash never leaves a half-written document.
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class SqlStorage:
    """Documents stored as rows of the `storage_entries` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        with self._session_factory() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def remove_item(self, key: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StorageEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()


def build_storage(settings: "Settings") -> KeyValueStorage:
    """Create the storage backend selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "memory":
        logger.info("Using in-memory storage; data is lost on restart.")
        return InMemoryStorage()
    if settings.STORAGE_BACKEND == "sql":
        from app.core.database import SessionLocal, engine
        from app.models import Base

        Base.metadata.create_all(bind=engine, tables=[StorageEntry.__table__])
        return SqlStorage(SessionLocal)
    return JsonFileStorage(settings.STORAGE_DIR)
