"""Configuration service for habo-data.

ConfigService is the single source of truth for configuration. It loads and
saves config.json, chooses the storage backend of each entity family, and
builds the StorageStrategyContext from the result.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from habo_data.models.config_models import ENTITY_FAMILIES, AppConfig, StorageType
from habo_data.models.storage_strategy import StorageStrategyContext

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json, None for the platform default
        """
        self.config_dir = Path(config_dir or user_config_dir("habo_data"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("habo_data"))

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Get the StorageStrategyContext for the current configuration.

        Built on first access; changing the storage configuration discards it.
        """
        if self._storage_strategy_context is None:
            self._storage_strategy_context = StorageStrategyContext.from_config(self.config)
        return self._storage_strategy_context

    @property
    def db_path(self) -> str:
        """Database path in effect (configured or platform default)."""
        return self.config.storage.db_path or str(self.data_dir / "habo.db")

    def load_config(self) -> AppConfig:
        """Load configuration from config.json, writing defaults on first run.

        Raises:
            RuntimeError: If the file exists but cannot be parsed
        """
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            logger.info("No config at %s, writing defaults", self.config_path)
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to config.json."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._storage_strategy_context = None
        if self.config_path.exists():
            self.config_path.unlink()
        self._config = AppConfig()
        self.save_config()

    def set_storage(self, family: str, storage_type: StorageType) -> None:
        """Serve an entity family from the given backend.

        Raises:
            ValueError: If family or storage_type is unknown
        """
        if family not in ENTITY_FAMILIES:
            raise ValueError(
                f"Unknown entity family '{family}'. Valid: {', '.join(ENTITY_FAMILIES)}"
            )
        if storage_type not in ("local", "remote"):
            raise ValueError(f"Unknown storage type '{storage_type}'")
        setattr(self.config.storage, family, storage_type)
        self._storage_strategy_context = None
        self.save_config()
        logger.info("Storage for %s set to %s", family, storage_type)

    async def close(self) -> None:
        """Release network resources held by the storage context."""
        if self._storage_strategy_context is not None:
            await self._storage_strategy_context.close()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service


def get_storage_strategy_context() -> StorageStrategyContext:
    """Get the process-wide StorageStrategyContext."""
    return get_config_service().storage_strategy_context
