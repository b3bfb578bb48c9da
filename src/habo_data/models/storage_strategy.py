"""
Strategy Pattern: per-family repository selection

A strategy owns every repository implementation for one storage backend
(local SQLite or the remote Habo API). The StorageStrategyContext picks a
strategy for each entity family from StorageConfig once, at startup, so
callers never branch on where the data lives.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from habo_data.models.config_models import AppConfig, StorageConfig, StorageType
from habo_data.repositories import (
    CategoryRepository,
    EventRepository,
    HabitRepository,
    LogRepository,
    RuleRepository,
)

logger = logging.getLogger(__name__)


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    Repositories are created on first request and reused afterwards.
    """

    @abstractmethod
    def get_habit_repository(self) -> HabitRepository:
        """Get habit repository implementation for this strategy."""

    @abstractmethod
    def get_event_repository(self) -> EventRepository:
        """Get event repository implementation for this strategy."""

    @abstractmethod
    def get_category_repository(self) -> CategoryRepository:
        """Get category repository implementation for this strategy."""

    @abstractmethod
    def get_rule_repository(self) -> RuleRepository:
        """Get rule repository implementation for this strategy."""

    @abstractmethod
    def get_log_repository(self) -> LogRepository:
        """Get log repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> StorageType:
        """Get storage type identifier (for logging/debugging)."""


class LocalStorageStrategy(StorageStrategy):
    """Local SQLite storage strategy; every repository shares one database file."""

    def __init__(self, db_path: str | None = None):
        """
        Initialize local strategy.

        Args:
            db_path: Path to SQLite database file, None for the platform default
        """
        self.db_path = db_path
        self._habit_repo: HabitRepository | None = None
        self._event_repo: EventRepository | None = None
        self._category_repo: CategoryRepository | None = None
        self._rule_repo: RuleRepository | None = None
        self._log_repo: LogRepository | None = None

    def get_habit_repository(self) -> HabitRepository:
        if self._habit_repo is None:
            from habo_data.adapters.sqlite import SqliteHabitRepository

            self._habit_repo = SqliteHabitRepository(db_path=self.db_path)
        return self._habit_repo

    def get_event_repository(self) -> EventRepository:
        if self._event_repo is None:
            from habo_data.adapters.sqlite import SqliteEventRepository

            self._event_repo = SqliteEventRepository(db_path=self.db_path)
        return self._event_repo

    def get_category_repository(self) -> CategoryRepository:
        if self._category_repo is None:
            from habo_data.adapters.sqlite import SqliteCategoryRepository

            self._category_repo = SqliteCategoryRepository(db_path=self.db_path)
        return self._category_repo

    def get_rule_repository(self) -> RuleRepository:
        if self._rule_repo is None:
            from habo_data.adapters.sqlite import SqliteRuleRepository

            self._rule_repo = SqliteRuleRepository(db_path=self.db_path)
        return self._rule_repo

    def get_log_repository(self) -> LogRepository:
        if self._log_repo is None:
            from habo_data.adapters.sqlite import SqliteLogRepository

            self._log_repo = SqliteLogRepository(db_path=self.db_path)
        return self._log_repo

    @property
    def storage_type(self) -> StorageType:
        return "local"


class RemoteStorageStrategy(StorageStrategy):
    """
    Remote API storage strategy.

    All repositories share one APIClient, released by close().
    """

    def __init__(self, client=None):
        """
        Initialize remote strategy.

        Args:
            client: APIClient to share; one is built from the configuration if None
        """
        if client is None:
            from habo_data.services.api.client import APIClient

            client = APIClient()
        self.client = client
        self._habit_repo: HabitRepository | None = None
        self._event_repo: EventRepository | None = None
        self._category_repo: CategoryRepository | None = None
        self._rule_repo: RuleRepository | None = None
        self._log_repo: LogRepository | None = None

    def get_habit_repository(self) -> HabitRepository:
        if self._habit_repo is None:
            from habo_data.adapters.rest_api import RestApiHabitRepository

            self._habit_repo = RestApiHabitRepository(self.client)
        return self._habit_repo

    def get_event_repository(self) -> EventRepository:
        if self._event_repo is None:
            from habo_data.adapters.rest_api import RestApiEventRepository

            self._event_repo = RestApiEventRepository(self.client)
        return self._event_repo

    def get_category_repository(self) -> CategoryRepository:
        if self._category_repo is None:
            from habo_data.adapters.rest_api import RestApiCategoryRepository

            self._category_repo = RestApiCategoryRepository(self.client)
        return self._category_repo

    def get_rule_repository(self) -> RuleRepository:
        if self._rule_repo is None:
            from habo_data.adapters.rest_api import RestApiRuleRepository

            self._rule_repo = RestApiRuleRepository(self.client)
        return self._rule_repo

    def get_log_repository(self) -> LogRepository:
        if self._log_repo is None:
            from habo_data.adapters.rest_api import RestApiLogRepository

            self._log_repo = RestApiLogRepository(self.client)
        return self._log_repo

    @property
    def storage_type(self) -> StorageType:
        return "remote"

    async def close(self) -> None:
        """Release the shared HTTP client."""
        await self.client.close()


class StorageStrategyContext:
    """
    Per-family repository access for the whole application.

    Each family's repository is resolved once, at construction, from the
    strategy StorageConfig names for it.

    Usage:
        context = StorageStrategyContext.from_config(config)
        habit_id = await context.habit_repository.create(habit)
    """

    def __init__(
        self,
        storage: StorageConfig,
        local: StorageStrategy,
        remote: StorageStrategy | None = None,
    ):
        """
        Initialize strategy context.

        Args:
            storage: Which backend serves each family
            local: Strategy for families configured as "local"
            remote: Strategy for families configured as "remote"

        Raises:
            ValueError: If a family is configured as remote but no remote strategy is given
        """
        self._storage = storage
        self._local = local
        self._remote = remote

        self._habit_repository = self._strategy_for("habits").get_habit_repository()
        self._event_repository = self._strategy_for("events").get_event_repository()
        self._category_repository = self._strategy_for(
            "categories"
        ).get_category_repository()
        self._rule_repository = self._strategy_for("rules").get_rule_repository()
        self._log_repository = self._strategy_for("logs").get_log_repository()

        logger.debug(
            "Storage: habits=%s events=%s categories=%s rules=%s logs=%s",
            storage.habits,
            storage.events,
            storage.categories,
            storage.rules,
            storage.logs,
        )

    @classmethod
    def from_config(cls, config: AppConfig, client=None) -> StorageStrategyContext:
        """Build the context, creating a remote strategy only when a family needs it."""
        local = LocalStorageStrategy(db_path=config.storage.db_path)
        remote = None
        if config.storage.uses_remote():
            if client is None:
                from habo_data.services.api.client import APIClient

                client = APIClient(config.api)
            remote = RemoteStorageStrategy(client)
        return cls(config.storage, local, remote)

    def _strategy_for(self, family: str) -> StorageStrategy:
        if self._storage.backend_for(family) == "local":
            return self._local
        if self._remote is None:
            raise ValueError(f"'{family}' is configured as remote but no remote strategy is set")
        return self._remote

    def storage_type_for(self, family: str) -> StorageType:
        """Get the storage type serving a family (for logging/debugging only)."""
        return self._storage.backend_for(family)

    @property
    def habit_repository(self) -> HabitRepository:
        return self._habit_repository

    @property
    def event_repository(self) -> EventRepository:
        return self._event_repository

    @property
    def category_repository(self) -> CategoryRepository:
        return self._category_repository

    @property
    def rule_repository(self) -> RuleRepository:
        return self._rule_repository

    @property
    def log_repository(self) -> LogRepository:
        return self._log_repository

    async def close(self) -> None:
        """Release the remote client, if any."""
        if isinstance(self._remote, RemoteStorageStrategy):
            await self._remote.close()
