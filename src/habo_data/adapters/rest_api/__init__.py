"""REST API adapters for the Habo backend."""

from .category_repository import RestApiCategoryRepository
from .event_repository import RestApiEventRepository
from .habit_repository import RestApiHabitRepository
from .log_repository import RestApiLogRepository
from .rule_repository import RestApiRuleRepository

__all__ = [
    "RestApiHabitRepository",
    "RestApiEventRepository",
    "RestApiCategoryRepository",
    "RestApiRuleRepository",
    "RestApiLogRepository",
]
