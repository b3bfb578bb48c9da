"""SQLite implementation of RuleRepository."""

from __future__ import annotations

import sqlite3

from habo_data.adapters.sqlite.connection import get_connection
from habo_data.adapters.sqlite.utils import row_to_dict
from habo_data.models import Rule
from habo_data.repositories import RuleRepository
from habo_data.repositories.exceptions import IdentityUnresolvedError, NotFoundError


def _row_to_rule(row: sqlite3.Row) -> Rule:
    data = row_to_dict(row)
    data["active"] = bool(data["active"])
    return Rule(**data)


class SqliteRuleRepository(RuleRepository):
    """SQLite implementation of rule repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self) -> list[Rule]:
        rows = self.connection.execute(
            "SELECT * FROM rules ORDER BY habit, day, hour, minute"
        ).fetchall()
        return [_row_to_rule(row) for row in rows]

    async def list_for_habit(self, habit_name: str) -> list[Rule]:
        rows = self.connection.execute(
            "SELECT * FROM rules WHERE habit = ? ORDER BY day, hour, minute",
            (habit_name,),
        ).fetchall()
        return [_row_to_rule(row) for row in rows]

    async def find_by_id(self, rule_id: int) -> Rule | None:
        row = self.connection.execute(
            "SELECT * FROM rules WHERE id = ?", (rule_id,)
        ).fetchone()
        return _row_to_rule(row) if row is not None else None

    async def create(self, rule: Rule) -> int:
        cursor = self.connection.execute(
            "INSERT INTO rules (habit, day, hour, minute, active) VALUES (?, ?, ?, ?, ?)",
            (rule.habit, rule.day, rule.hour, rule.minute, int(rule.active)),
        )
        self.connection.commit()
        if cursor.lastrowid is None:
            raise IdentityUnresolvedError(f"No row id for created rule of {rule.habit!r}")
        return cursor.lastrowid

    async def update(self, rule: Rule) -> None:
        if rule.id is None:
            raise NotFoundError("Cannot update a rule without an id")
        cursor = self.connection.execute(
            """UPDATE rules SET habit = ?, day = ?, hour = ?, minute = ?, active = ?
               WHERE id = ?""",
            (rule.habit, rule.day, rule.hour, rule.minute, int(rule.active), rule.id),
        )
        self.connection.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(f"Rule not found: {rule.id}")

    async def delete(self, habit_name: str) -> None:
        self.connection.execute("DELETE FROM rules WHERE habit = ?", (habit_name,))
        self.connection.commit()
