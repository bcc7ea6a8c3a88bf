import os
import unittest
from unittest.mock import patch

from sqlalchemy import text
from sqlalchemy.exc import ArgumentError

from question_service.lib import db


class BuildDbUrlTests(unittest.TestCase):
    """Store URL resolution from the environment."""

    DB_VARS = ("DATABASE_URL", "DB_HOST", "DB_NAME", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_SSLMODE", "DEBUG")

    def _env(self, **values):
        # patch.dict restores the full environment on cleanup
        env = patch.dict(os.environ)
        env.start()
        self.addCleanup(env.stop)
        for key in self.DB_VARS:
            os.environ.pop(key, None)
        os.environ.update(values)

    def test_database_url_wins(self):
        self._env(DATABASE_URL=" postgresql://u:p@db:5432/questions ", DB_HOST="ignored", DB_NAME="ignored")
        self.assertEqual(db._build_db_url(), "postgresql://u:p@db:5432/questions")

    def test_db_parts_are_assembled(self):
        self._env(
            DB_HOST="db",
            DB_PORT="5433",
            DB_USER="svc",
            DB_PASSWORD="p@ss word",
            DB_NAME="questions",
            DB_SSLMODE="require",
        )
        self.assertEqual(
            db._build_db_url(),
            "postgresql://svc:p%40ss%20word@db:5433/questions?sslmode=require",
        )

    def test_tests_default_to_in_memory_sqlite(self):
        self._env()
        with patch.object(db, "TESTING", True):
            self.assertEqual(db._build_db_url(), "sqlite://")

    def test_debug_defaults_to_sqlite_file(self):
        self._env(DEBUG="True")
        with patch.object(db, "TESTING", False):
            self.assertEqual(db._build_db_url(), "sqlite:///questions.sqlite3")

    def test_production_requires_configuration(self):
        self._env(DEBUG="False")
        with patch.object(db, "TESTING", False):
            with self.assertRaises(RuntimeError):
                db._build_db_url()


class EngineTests(unittest.TestCase):
    def test_sqlite_engine_enforces_foreign_keys(self):
        engine = db.create_engine_from_url("sqlite://")
        self.addCleanup(engine.dispose)
        with engine.connect() as conn:
            self.assertEqual(conn.execute(text("PRAGMA foreign_keys")).scalar(), 1)

    def test_invalid_url_is_rejected(self):
        with self.assertRaises(ArgumentError):
            db.create_engine_from_url("not a url")

    def test_postgres_scheme_is_rewritten(self):
        with patch.object(db, "create_engine") as mock_create, patch.object(db, "_check_dbapi_driver"):
            db.create_engine_from_url("postgres://u:p@db/questions")
        url = mock_create.call_args[0][0]
        self.assertEqual(url.drivername, "postgresql")
        self.assertTrue(mock_create.call_args[1]["pool_pre_ping"])

    def test_ping_database_without_engine(self):
        with patch.object(db, "_engine", None):
            self.assertFalse(db.ping_database())


if __name__ == "__main__":
    unittest.main()
