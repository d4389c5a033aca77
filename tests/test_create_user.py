"""Tests for the create_user script: argument validation and store writes."""

import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from app.core.storage import InMemoryStorage
from app.scripts import create_user
from app.services.seed import StaticSeedSource


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = InMemoryStorage()
        for target, value in (
            ("app.scripts.create_user.build_storage", self.storage),
            ("app.scripts.create_user.build_seed_source", StaticSeedSource()),
        ):
            patcher = patch(target, return_value=value)
            patcher.start()
            self.addCleanup(patcher.stop)
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("Admin", "admin@example.com", "secret", "admin")
        self.assertEqual(code, 0)
        self.assertIn("role 'admin'", out)
        stored = json.loads(self.storage.get_item("cittafutura_users"))
        self.assertEqual(stored[0]["email"], "admin@example.com")
        self.assertTrue(stored[0]["passwordHash"].startswith("$2"))

    def test_duplicate_email_fails(self) -> None:
        self._run("Admin", "admin@example.com", "secret")
        code, _, err = self._run("Other", "ADMIN@example.com", "secret")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_rejects_invalid_input(self) -> None:
        self.assertEqual(self._run("  ", "a@example.com", "pw")[0], 1)
        self.assertEqual(self._run("Anna", "not-an-email", "pw")[0], 1)
        self.assertEqual(self._run("Anna", "a@example.com", "x" * 129)[0], 1)
        self.assertIsNone(self.storage.get_item("cittafutura_users"))


if __name__ == "__main__":
    unittest.main()
