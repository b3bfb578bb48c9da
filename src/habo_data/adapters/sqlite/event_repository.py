"""SQLite implementation of EventRepository."""

from __future__ import annotations

import sqlite3
from datetime import date
from typing import Any

from habo_data.adapters.sqlite.connection import get_connection
from habo_data.adapters.sqlite.utils import (
    day_from_db,
    day_to_db,
    payload_from_db,
    payload_to_db,
)
from habo_data.models import Event, normalize_event_batch
from habo_data.repositories import EventBatch, EventRepository

UPSERT_EVENT = """
INSERT INTO events (habit_id, day, payload) VALUES (?, ?, ?)
ON CONFLICT(habit_id, day) DO UPDATE SET payload = excluded.payload
"""


class SqliteEventRepository(EventRepository):
    """SQLite implementation of event repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _rows(self, habit_id: int) -> list[sqlite3.Row]:
        return self.connection.execute(
            "SELECT day, payload FROM events WHERE habit_id = ? ORDER BY day",
            (habit_id,),
        ).fetchall()

    async def list_for_habit(self, habit_id: int) -> list[Event]:
        return [
            Event(
                habit_id=habit_id,
                day=day_from_db(row["day"]),
                payload=payload_from_db(row["payload"]),
            )
            for row in self._rows(habit_id)
        ]

    async def map_for_habit(self, habit_id: int) -> dict[date, list[Any]]:
        return {
            day_from_db(row["day"]): payload_from_db(row["payload"])
            for row in self._rows(habit_id)
        }

    async def find_event(self, habit_id: int, day: date) -> Event | None:
        row = self.connection.execute(
            "SELECT day, payload FROM events WHERE habit_id = ? AND day = ?",
            (habit_id, day_to_db(day)),
        ).fetchone()
        if row is None:
            return None
        return Event(
            habit_id=habit_id,
            day=day_from_db(row["day"]),
            payload=payload_from_db(row["payload"]),
        )

    async def insert_event(self, habit_id: int, day: date, payload: list[Any]) -> None:
        self.connection.execute(
            UPSERT_EVENT, (habit_id, day_to_db(day), payload_to_db(payload))
        )
        self.connection.commit()

    async def delete_event(self, habit_id: int, day: date) -> None:
        self.connection.execute(
            "DELETE FROM events WHERE habit_id = ? AND day = ?",
            (habit_id, day_to_db(day)),
        )
        self.connection.commit()

    async def insert_many_for_habit(self, habit_id: int, events: EventBatch) -> None:
        normalized = normalize_event_batch(events)
        self.connection.executemany(
            UPSERT_EVENT,
            [
                (habit_id, day_to_db(day), payload_to_db(payload))
                for day, payload in normalized.items()
            ],
        )
        self.connection.commit()

    async def delete_all_for_habit(self, habit_id: int) -> None:
        self.connection.execute("DELETE FROM events WHERE habit_id = ?", (habit_id,))
        self.connection.commit()

    async def delete_all(self) -> None:
        self.connection.execute("DELETE FROM events")
        self.connection.commit()
