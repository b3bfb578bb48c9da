"""Database connection management for the local habit database.

One connection per process, with foreign keys enforced and pending
migrations applied on open.
"""

from __future__ import annotations

import atexit
import logging
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from habo_data.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from habo_data.adapters.sqlite.migrations.m002_categories import categories_migration
from habo_data.adapters.sqlite.migrations.m003_rules_logs import rules_logs_migration
from habo_data.adapters.sqlite.migrations.runner import MigrationRunner

logger = logging.getLogger(__name__)

MIGRATIONS = [initial_migration, categories_migration, rules_logs_migration]


def default_db_path() -> Path:
    """Platform default location of the habit database."""
    return Path(user_data_dir("habo_data")) / "habo.db"


class DatabaseConnection:
    """Singleton connection manager for the local database."""

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection with row access by column name
        """
        instance = cls()
        db_path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Path changed
        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Opening database %s", db_path)

        connection = sqlite3.connect(str(db_path), check_same_thread=False, timeout=30.0)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute("PRAGMA journal_mode = WAL")

        applied = MigrationRunner(connection).run_migrations(MIGRATIONS)
        if applied:
            logger.info("Database %s migrated (%d migrations)", db_path, applied)

        instance._connection = connection
        instance._db_path = db_path
        atexit.register(cls.close_connection)
        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection."""
        instance = cls()
        if instance._connection is None:
            return
        try:
            instance._connection.commit()
            instance._connection.close()
        except sqlite3.Error as e:
            logger.debug("Error closing database: %s", e)
        finally:
            instance._connection = None
            instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        return cls()._db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
