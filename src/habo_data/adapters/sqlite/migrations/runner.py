"""Forward-only, version-numbered schema migrations.

Applied versions are recorded in ``schema_version``; on every connection the
runner applies whatever is newer than the recorded maximum.
"""

from __future__ import annotations

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime

logger = logging.getLogger(__name__)


class Migration(ABC):
    """Base class for database migrations."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Migration version number (sequential)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the migration."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Execute forward migration."""


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT NOT NULL,
                applied_at DATETIME NOT NULL
            )
        """)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] if row[0] is not None else 0

    def apply(self, migration: Migration) -> None:
        """Apply one migration and record it.

        Raises:
            ValueError: If the migration is not newer than the current version
            RuntimeError: If the migration fails; its changes are rolled back
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than version {current}"
            )

        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e
        logger.info("Applied migration %d: %s", migration.version, migration.description)

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Apply every pending migration in version order.

        Returns:
            Number of migrations applied
        """
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return len(pending)


def run_migrations(connection: sqlite3.Connection, migrations: list[Migration]) -> int:
    """Apply pending migrations to a connection.

    Returns:
        Number of migrations applied
    """
    return MigrationRunner(connection).run_migrations(migrations)
