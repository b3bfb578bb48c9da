"""Migration 003: scheduling rules and habit logs."""

import sqlite3

from habo_data.adapters.sqlite import schema

from .runner import Migration


class RulesAndLogsMigration(Migration):
    @property
    def version(self) -> int:
        return 3

    @property
    def description(self) -> str:
        return "Rules and logs"

    def up(self, connection: sqlite3.Connection) -> None:
        connection.execute(schema.CREATE_RULES_TABLE)
        connection.execute(schema.CREATE_LOGS_TABLE)
        for index_sql in schema.CREATE_RULE_LOG_INDEXES:
            connection.execute(index_sql)


rules_logs_migration = RulesAndLogsMigration()
