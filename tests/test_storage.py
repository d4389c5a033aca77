"""Unit tests for app.core.storage backends: memory, JSON files, SQL table."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.storage import (
    InMemoryStorage,
    JsonFileStorage,
    SqlStorage,
    build_storage,
)
from app.models import Base


class StorageContract:
    """Behaviour every backend shares; mixed into a TestCase that sets self.storage."""

    storage = None

    def test_missing_key_is_none(self) -> None:
        self.assertIsNone(self.storage.get_item("cittafutura_users"))

    def test_set_then_get(self) -> None:
        self.storage.set_item("cittafutura_users", "[1]")
        self.assertEqual(self.storage.get_item("cittafutura_users"), "[1]")

    def test_overwrite_replaces_whole_value(self) -> None:
        self.storage.set_item("cittafutura_houses", "[1, 2]")
        self.storage.set_item("cittafutura_houses", "[]")
        self.assertEqual(self.storage.get_item("cittafutura_houses"), "[]")

    def test_remove(self) -> None:
        self.storage.set_item("cittafutura_houses", "[]")
        self.storage.remove_item("cittafutura_houses")
        self.assertIsNone(self.storage.get_item("cittafutura_houses"))
        # Removing again is a no-op.
        self.storage.remove_item("cittafutura_houses")


class TestInMemoryStorage(StorageContract, unittest.TestCase):
    def setUp(self) -> None:
        self.storage = InMemoryStorage()

    def test_initial_items(self) -> None:
        storage = InMemoryStorage({"k": "v"})
        self.assertEqual(storage.get_item("k"), "v")


class TestJsonFileStorage(StorageContract, unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.directory = Path(tmp.name) / "nested"
        self.storage = JsonFileStorage(self.directory)

    def test_one_file_per_key(self) -> None:
        self.storage.set_item("cittafutura_users", "[]")
        self.assertEqual(
            (self.directory / "cittafutura_users.json").read_text(encoding="utf-8"),
            "[]",
        )
        self.assertEqual(list(self.directory.glob("*.tmp")), [])

    def test_rejects_path_like_keys(self) -> None:
        for key in ("../escape", "a/b", ".hidden", ""):
            with self.assertRaises(ValueError):
                self.storage.get_item(key)


class TestSqlStorage(StorageContract, unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(bind=engine)
        self.addCleanup(engine.dispose)
        self.storage = SqlStorage(sessionmaker(bind=engine, autoflush=False))


class TestBuildStorage(unittest.TestCase):
    def test_memory_backend(self) -> None:
        settings = MagicMock()
        settings.STORAGE_BACKEND = "memory"
        self.assertIsInstance(build_storage(settings), InMemoryStorage)

    def test_file_backend(self) -> None:
        settings = MagicMock()
        settings.STORAGE_BACKEND = "file"
        settings.STORAGE_DIR = "/tmp/cittafutura-test"
        storage = build_storage(settings)
        self.assertIsInstance(storage, JsonFileStorage)
        self.assertEqual(storage.directory, Path("/tmp/cittafutura-test"))


if __name__ == "__main__":
    unittest.main()
