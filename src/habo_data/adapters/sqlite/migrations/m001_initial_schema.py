"""Migration 001: habits and their day-keyed events."""

import sqlite3

from habo_data.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create the habits and events tables."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Habits and events"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_HABITS_TABLE)
        connection.execute(schema.CREATE_EVENTS_TABLE)
        for index_sql in schema.CREATE_HABIT_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
