"""Migration 002: categories and the habit-category junction."""

import sqlite3

from habo_data.adapters.sqlite import schema

from .runner import Migration


class CategoriesMigration(Migration):
    @property
    def version(self) -> int:
        return 2

    @property
    def description(self) -> str:
        return "Categories"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_CATEGORIES_TABLE)
        connection.execute(schema.CREATE_HABIT_CATEGORIES_TABLE)
        for index_sql in schema.CREATE_CATEGORY_INDEXES:
            connection.execute(index_sql)


categories_migration = CategoriesMigration()
