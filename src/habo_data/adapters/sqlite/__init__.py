"""SQLite adapter module - Local database storage implementation."""

from habo_data.adapters.sqlite.category_repository import SqliteCategoryRepository
from habo_data.adapters.sqlite.event_repository import SqliteEventRepository
from habo_data.adapters.sqlite.habit_repository import SqliteHabitRepository
from habo_data.adapters.sqlite.log_repository import SqliteLogRepository
from habo_data.adapters.sqlite.rule_repository import SqliteRuleRepository

__all__ = [
    "SqliteHabitRepository",
    "SqliteEventRepository",
    "SqliteCategoryRepository",
    "SqliteRuleRepository",
    "SqliteLogRepository",
]
