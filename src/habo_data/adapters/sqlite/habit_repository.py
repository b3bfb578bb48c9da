"""SQLite implementation of HabitRepository."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from habo_data.adapters.sqlite.connection import get_connection
from habo_data.adapters.sqlite.utils import (
    day_from_db,
    day_to_db,
    payload_from_db,
    payload_to_db,
    row_to_dict,
    time_from_db,
    time_to_db,
)
from habo_data.models import Category, Habit
from habo_data.repositories import HabitRepository
from habo_data.repositories.exceptions import IdentityUnresolvedError, NotFoundError

logger = logging.getLogger(__name__)

# Columns written from Habit fields, in insert order.
HABIT_COLUMNS = (
    "title",
    "position",
    "habit_type",
    "target_value",
    "partial_value",
    "unit",
    "archived",
    "notification",
    "notification_time",
    "two_day_rule",
    "cue",
    "routine",
    "reward",
    "show_reward",
    "advanced",
    "sanction",
    "show_sanction",
    "accountant",
)

_BOOL_COLUMNS = (
    "archived",
    "notification",
    "two_day_rule",
    "show_reward",
    "advanced",
    "show_sanction",
)


def _habit_values(habit: Habit) -> list[Any]:
    data = habit.model_dump(include=set(HABIT_COLUMNS))
    data["habit_type"] = habit.habit_type.value
    data["notification_time"] = time_to_db(habit.notification_time)
    for column in _BOOL_COLUMNS:
        data[column] = int(data[column])
    return [data[column] for column in HABIT_COLUMNS]


class SqliteHabitRepository(HabitRepository):
    """SQLite implementation of habit repository."""

    def __init__(self, db_path: str | None = None):
        """Initialize SQLite habit repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _row_to_habit(self, row: sqlite3.Row) -> Habit:
        data = row_to_dict(row)
        data["notification_time"] = time_from_db(data["notification_time"])
        for column in _BOOL_COLUMNS:
            data[column] = bool(data[column])

        categories = self.connection.execute(
            """SELECT c.id, c.name FROM categories c
               JOIN habit_categories hc ON hc.category_id = c.id
               WHERE hc.habit_id = ? ORDER BY c.name""",
            (data["id"],),
        ).fetchall()
        data["categories"] = [Category(**row_to_dict(c)) for c in categories]

        events = self.connection.execute(
            "SELECT day, payload FROM events WHERE habit_id = ? ORDER BY day",
            (data["id"],),
        ).fetchall()
        data["events"] = {
            day_from_db(e["day"]): payload_from_db(e["payload"]) for e in events
        }
        return Habit(**data)

    async def list_all(self) -> list[Habit]:
        rows = self.connection.execute(
            "SELECT * FROM habits ORDER BY position, id"
        ).fetchall()
        return [self._row_to_habit(row) for row in rows]

    async def find_by_id(self, habit_id: int) -> Habit | None:
        row = self.connection.execute(
            "SELECT * FROM habits WHERE id = ?", (habit_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_habit(row)

    def _insert(self, habit: Habit, keep_id: bool) -> int:
        columns = list(HABIT_COLUMNS)
        values = _habit_values(habit)
        if keep_id and habit.id is not None:
            columns.insert(0, "id")
            values.insert(0, habit.id)
        placeholders = ", ".join("?" for _ in columns)
        cursor = self.connection.execute(
            f"INSERT INTO habits ({', '.join(columns)}) VALUES ({placeholders})",
            values,
        )
        habit_id = cursor.lastrowid
        if habit_id is None:
            raise IdentityUnresolvedError(f"No row id for created habit {habit.title!r}")
        self._write_categories(habit_id, habit.categories)
        self.connection.executemany(
            """INSERT INTO events (habit_id, day, payload) VALUES (?, ?, ?)
               ON CONFLICT(habit_id, day) DO UPDATE SET payload = excluded.payload""",
            [
                (habit_id, day_to_db(day), payload_to_db(payload))
                for day, payload in habit.events.items()
            ],
        )
        return habit_id

    def _write_categories(self, habit_id: int, categories: list[Category]) -> None:
        self.connection.execute(
            "DELETE FROM habit_categories WHERE habit_id = ?", (habit_id,)
        )
        self.connection.executemany(
            "INSERT OR IGNORE INTO habit_categories (habit_id, category_id) VALUES (?, ?)",
            [(habit_id, c.id) for c in categories if c.id is not None],
        )

    async def create(self, habit: Habit) -> int:
        try:
            habit_id = self._insert(habit, keep_id=False)
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise
        logger.debug("Created habit %s (%r)", habit_id, habit.title)
        return habit_id

    async def update(self, habit: Habit) -> None:
        if habit.id is None:
            raise NotFoundError("Cannot update a habit without an id")

        assignments = ", ".join(f"{column} = ?" for column in HABIT_COLUMNS)
        try:
            cursor = self.connection.execute(
                f"UPDATE habits SET {assignments} WHERE id = ?",
                [*_habit_values(habit), habit.id],
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Habit not found: {habit.id}")
            self._write_categories(habit.id, habit.categories)
            self.connection.commit()
        except (sqlite3.Error, NotFoundError):
            self.connection.rollback()
            raise

    async def delete(self, habit_id: int) -> None:
        # Events and links carry no foreign key to habits.
        try:
            self.connection.execute("DELETE FROM events WHERE habit_id = ?", (habit_id,))
            self.connection.execute(
                "DELETE FROM habit_categories WHERE habit_id = ?", (habit_id,)
            )
            self.connection.execute("DELETE FROM habits WHERE id = ?", (habit_id,))
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

    async def update_order(self, habits: list[Habit]) -> None:
        self.connection.executemany(
            "UPDATE habits SET position = ? WHERE id = ?",
            [
                (position, habit.id)
                for position, habit in enumerate(habits)
                if habit.id is not None
            ],
        )
        self.connection.commit()

    async def delete_all(self) -> None:
        try:
            self.connection.execute("DELETE FROM habit_categories")
            self.connection.execute("DELETE FROM events")
            self.connection.execute("DELETE FROM habits")
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

    async def insert_many(self, habits: list[Habit]) -> list[int]:
        """Insert habits in one transaction, keeping ids that are already set."""
        try:
            ids = [self._insert(habit, keep_id=True) for habit in habits]
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise
        return ids
