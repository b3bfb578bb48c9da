"""SQLite implementation of LogRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from habo_data.adapters.sqlite.connection import get_connection
from habo_data.adapters.sqlite.utils import now_iso, row_to_dict
from habo_data.models import LOG_UPDATABLE_FIELDS, Log
from habo_data.repositories import LogRepository
from habo_data.repositories.exceptions import IdentityUnresolvedError, NotFoundError


def _row_to_log(row: sqlite3.Row) -> Log:
    data = row_to_dict(row)
    data["reported"] = bool(data["reported"])
    data.pop("created_at", None)
    return Log(**data)


class SqliteLogRepository(LogRepository):
    """SQLite implementation of log repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self, habit_name: str | None = None) -> list[Log]:
        if habit_name is None:
            cursor = self.connection.execute("SELECT * FROM logs ORDER BY id")
        else:
            cursor = self.connection.execute(
                "SELECT * FROM logs WHERE habit_name = ? ORDER BY id", (habit_name,)
            )
        return [_row_to_log(row) for row in cursor.fetchall()]

    async def find_by_id(self, log_id: int) -> Log | None:
        row = self.connection.execute(
            "SELECT * FROM logs WHERE id = ?", (log_id,)
        ).fetchone()
        return _row_to_log(row) if row is not None else None

    async def create(self, log: Log) -> int:
        cursor = self.connection.execute(
            "INSERT INTO logs (habit_name, state, reported, created_at) VALUES (?, ?, ?, ?)",
            (log.habit_name, log.state, int(log.reported), now_iso()),
        )
        self.connection.commit()
        if cursor.lastrowid is None:
            raise IdentityUnresolvedError(f"No row id for created log of {log.habit_name!r}")
        return cursor.lastrowid

    async def update(self, log_id: int, field: str, value: Any) -> None:
        if field not in LOG_UPDATABLE_FIELDS:
            raise ValueError(
                f"Cannot update log field '{field}'. "
                f"Valid fields: {', '.join(LOG_UPDATABLE_FIELDS)}"
            )
        if field == "reported":
            value = int(bool(value))
        # field is whitelisted above
        cursor = self.connection.execute(
            f"UPDATE logs SET {field} = ? WHERE id = ?", (value, log_id)
        )
        self.connection.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(f"Log not found: {log_id}")

    async def delete(self, log_id: int) -> None:
        self.connection.execute("DELETE FROM logs WHERE id = ?", (log_id,))
        self.connection.commit()
