"""Tests for the SQLite connection manager and migrations."""

from __future__ import annotations

import sqlite3

import pytest

from habo_data.adapters.sqlite.connection import MIGRATIONS, DatabaseConnection, get_connection
from habo_data.adapters.sqlite.migrations import Migration, MigrationRunner, run_migrations


@pytest.fixture(autouse=True)
def reset_connection():
    DatabaseConnection.close_connection()
    yield
    DatabaseConnection.close_connection()


def _tables(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row[0] for row in rows}


# ---------------------------------------------------------------------------
# DatabaseConnection
# ---------------------------------------------------------------------------


class TestDatabaseConnection:
    def test_creates_file_and_schema(self, tmp_path):
        db_path = tmp_path / "nested" / "habo.db"
        conn = get_connection(db_path)
        assert db_path.exists()
        assert {"habits", "events", "categories", "habit_categories", "rules", "logs"} <= _tables(
            conn
        )

    def test_reuses_connection_for_same_path(self, tmp_path):
        db_path = tmp_path / "habo.db"
        assert get_connection(db_path) is get_connection(db_path)
        assert DatabaseConnection.get_db_path() == db_path

    def test_new_path_opens_new_connection(self, tmp_path):
        first = get_connection(tmp_path / "a.db")
        second = get_connection(tmp_path / "b.db")
        assert first is not second

    def test_default_path_uses_user_data_dir(self, tmp_path, mocker):
        mocker.patch(
            "habo_data.adapters.sqlite.connection.user_data_dir", return_value=str(tmp_path)
        )
        get_connection()
        assert DatabaseConnection.get_db_path() == tmp_path / "habo.db"

    def test_foreign_keys_enabled(self, tmp_path):
        conn = get_connection(tmp_path / "habo.db")
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


# ---------------------------------------------------------------------------
# Migrations
# ---------------------------------------------------------------------------


class TestMigrations:
    def test_all_migrations_applied_once(self):
        conn = sqlite3.connect(":memory:")
        assert run_migrations(conn, MIGRATIONS) == 3
        assert run_migrations(conn, MIGRATIONS) == 0
        assert MigrationRunner(conn).get_current_version() == 3

    def test_partial_database_is_upgraded(self):
        conn = sqlite3.connect(":memory:")
        run_migrations(conn, MIGRATIONS[:1])
        assert "rules" not in _tables(conn)
        assert run_migrations(conn, MIGRATIONS) == 2
        assert "rules" in _tables(conn)

    def test_failed_migration_rolls_back(self):
        class Broken(Migration):
            version = 1
            description = "broken"

            def up(self, connection):
                connection.execute("CREATE TABLE ok_table (id INTEGER)")
                connection.execute("NOT SQL")

        conn = sqlite3.connect(":memory:")
        with pytest.raises(RuntimeError, match="Migration 1 failed"):
            MigrationRunner(conn).apply(Broken())
        assert MigrationRunner(conn).get_current_version() == 0

    def test_old_migration_rejected(self):
        conn = sqlite3.connect(":memory:")
        run_migrations(conn, MIGRATIONS)
        with pytest.raises(ValueError):
            MigrationRunner(conn).apply(MIGRATIONS[0])
