"""Repository interfaces for habo-data.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- habo_data.adapters.sqlite (local storage)
- habo_data.adapters.rest_api (remote backend)
"""

from .exceptions import (
    IdentityUnresolvedError,
    NotFoundError,
    RepositoryError,
    SchemaMismatchError,
    TransportError,
)
from .repository import (
    CategoryRepository,
    EventBatch,
    EventRepository,
    HabitRepository,
    LogRepository,
    RuleRepository,
)

__all__ = [
    "HabitRepository",
    "EventRepository",
    "EventBatch",
    "CategoryRepository",
    "RuleRepository",
    "LogRepository",
    "RepositoryError",
    "TransportError",
    "NotFoundError",
    "IdentityUnresolvedError",
    "SchemaMismatchError",
]
