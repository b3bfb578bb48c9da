"""Configuration models.

Storage is chosen per entity family, so habits can live on the remote backend
while events, categories, rules and logs stay in the local database.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

StorageType = Literal["local", "remote"]

ENTITY_FAMILIES = ("habits", "events", "categories", "rules", "logs")


class APIConfig(BaseModel):
    """Remote backend configuration."""

    endpoint: str = Field(default="http://127.0.0.1:5000")
    timeout: int = Field(default=30)
    user_id: int = Field(default=1, description="User id used in every backend path")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class StorageConfig(BaseModel):
    """Which store backs each entity family."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (None = platform default)"
    )
    habits: StorageType = "local"
    events: StorageType = "local"
    categories: StorageType = "local"
    rules: StorageType = "local"
    logs: StorageType = "local"

    def backend_for(self, family: str) -> StorageType:
        """Get the configured storage type for an entity family."""
        if family not in ENTITY_FAMILIES:
            raise ValueError(f"Unknown entity family '{family}'")
        return getattr(self, family)

    def uses_remote(self) -> bool:
        """Whether any family is served by the remote backend."""
        return any(self.backend_for(f) == "remote" for f in ENTITY_FAMILIES)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="table")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main habo-data configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
