"""habo-data domain models.

This package contains Pydantic models for the habit tracking entities and the
application configuration.
"""

from .config_models import (
    ENTITY_FAMILIES,
    APIConfig,
    AppConfig,
    OutputConfig,
    StorageConfig,
    StorageType,
)
from .core import (
    LOG_UPDATABLE_FIELDS,
    UNRESOLVED_ID,
    Category,
    Event,
    Habit,
    HabitType,
    Log,
    Rule,
    as_day,
    normalize_event_batch,
)

__all__ = [
    # Entity models
    "Habit",
    "HabitType",
    "Event",
    "Category",
    "Rule",
    "Log",
    "LOG_UPDATABLE_FIELDS",
    "UNRESOLVED_ID",
    "as_day",
    "normalize_event_batch",
    # Config models
    "AppConfig",
    "APIConfig",
    "StorageConfig",
    "OutputConfig",
    "StorageType",
    "ENTITY_FAMILIES",
]
