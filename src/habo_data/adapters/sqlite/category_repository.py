"""SQLite implementation of CategoryRepository."""

from __future__ import annotations

import sqlite3

from habo_data.adapters.sqlite.connection import get_connection
from habo_data.adapters.sqlite.utils import row_to_dict
from habo_data.models import Category
from habo_data.repositories import CategoryRepository
from habo_data.repositories.exceptions import IdentityUnresolvedError, NotFoundError


class SqliteCategoryRepository(CategoryRepository):
    """SQLite implementation of category repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def list_all(self) -> list[Category]:
        rows = self.connection.execute(
            "SELECT id, name FROM categories ORDER BY name, id"
        ).fetchall()
        return [Category(**row_to_dict(row)) for row in rows]

    async def find_by_id(self, category_id: int) -> Category | None:
        row = self.connection.execute(
            "SELECT id, name FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        if row is None:
            return None
        return Category(**row_to_dict(row))

    async def create(self, category: Category) -> int:
        cursor = self.connection.execute(
            "INSERT INTO categories (name) VALUES (?)", (category.name,)
        )
        self.connection.commit()
        if cursor.lastrowid is None:
            raise IdentityUnresolvedError(
                f"No row id for created category {category.name!r}"
            )
        return cursor.lastrowid

    async def update(self, category: Category) -> None:
        if category.id is None:
            raise NotFoundError("Cannot update a category without an id")
        cursor = self.connection.execute(
            "UPDATE categories SET name = ? WHERE id = ?", (category.name, category.id)
        )
        self.connection.commit()
        if cursor.rowcount == 0:
            raise NotFoundError(f"Category not found: {category.id}")

    async def delete(self, category_id: int) -> None:
        # Cascade removes habit_categories entries
        self.connection.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        self.connection.commit()

    async def list_for_habit(self, habit_id: int) -> list[Category]:
        rows = self.connection.execute(
            """SELECT c.id, c.name FROM categories c
               JOIN habit_categories hc ON hc.category_id = c.id
               WHERE hc.habit_id = ? ORDER BY c.name""",
            (habit_id,),
        ).fetchall()
        return [Category(**row_to_dict(row)) for row in rows]

    async def set_categories_for_habit(
        self, habit_id: int, categories: list[Category]
    ) -> None:
        try:
            self.connection.execute(
                "DELETE FROM habit_categories WHERE habit_id = ?", (habit_id,)
            )
            self.connection.executemany(
                "INSERT OR IGNORE INTO habit_categories (habit_id, category_id) VALUES (?, ?)",
                [(habit_id, c.id) for c in categories if c.id is not None],
            )
            self.connection.commit()
        except sqlite3.Error:
            self.connection.rollback()
            raise

    async def add_habit_to_category(self, habit_id: int, category_id: int) -> None:
        self.connection.execute(
            "INSERT OR IGNORE INTO habit_categories (habit_id, category_id) VALUES (?, ?)",
            (habit_id, category_id),
        )
        self.connection.commit()

    async def remove_habit_from_category(
        self, habit_id: int, category_id: int
    ) -> None:
        self.connection.execute(
            "DELETE FROM habit_categories WHERE habit_id = ? AND category_id = ?",
            (habit_id, category_id),
        )
        self.connection.commit()
