"""Tests for the create_user CLI."""

import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest.mock import patch

from app.scripts import create_user
from tests.support import memory_sessionmaker


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = memory_sessionmaker()
        patcher = patch("app.core.database.SessionLocal", self.SessionLocal)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("root", "Root@X.com", "rootpw1", "admin")
        self.assertEqual(code, 0)
        self.assertIn("root@x.com", out)
        self.assertIn("'admin'", out)

    def test_duplicate_email_fails(self) -> None:
        self._run("root", "root@x.com", "rootpw1")
        code, _, err = self._run("root2", "ROOT@x.com", "rootpw1")
        self.assertEqual(code, 1)
        self.assertIn("Email is already registered.", err)

    def test_invalid_password_fails(self) -> None:
        code, _, err = self._run("root", "root@x.com", "123")
        self.assertEqual(code, 1)
        self.assertIn("Password", err)


if __name__ == "__main__":
    unittest.main()
