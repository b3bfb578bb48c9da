"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository interfaces:
- sqlite: Local SQLite database storage
- rest_api: Remote Habo backend over HTTP
"""

from .rest_api import (
    RestApiCategoryRepository,
    RestApiEventRepository,
    RestApiHabitRepository,
    RestApiLogRepository,
    RestApiRuleRepository,
)
from .sqlite import (
    SqliteCategoryRepository,
    SqliteEventRepository,
    SqliteHabitRepository,
    SqliteLogRepository,
    SqliteRuleRepository,
)

__all__ = [
    # SQLite adapters
    "SqliteHabitRepository",
    "SqliteEventRepository",
    "SqliteCategoryRepository",
    "SqliteRuleRepository",
    "SqliteLogRepository",
    # REST API adapters
    "RestApiHabitRepository",
    "RestApiEventRepository",
    "RestApiCategoryRepository",
    "RestApiRuleRepository",
    "RestApiLogRepository",
]
