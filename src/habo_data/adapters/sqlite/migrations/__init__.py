"""Database migration system for the local habit database."""

from .runner import Migration, MigrationRunner, run_migrations

__all__ = [
    "Migration",
    "MigrationRunner",
    "run_migrations",
]
