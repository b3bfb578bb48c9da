"""REST API implementation of LogRepository."""

from __future__ import annotations

import logging
from typing import Any

from habo_data.models import LOG_UPDATABLE_FIELDS, UNRESOLVED_ID, Log
from habo_data.repositories.exceptions import NotFoundError
from habo_data.repositories.repository import LogRepository

from .base import RestApiRepository
from .mapping import encode_value, log_from_wire, log_to_wire
from .reconciliation import resolve_new_id

logger = logging.getLogger(__name__)


class RestApiLogRepository(RestApiRepository, LogRepository):
    """Log repository backed by ``/{user}/logs``."""

    family = "logs"

    async def list_all(self, habit_name: str | None = None) -> list[Log]:
        payload = await self._get("fetch logs", params={"name": habit_name})
        return [log_from_wire(item) for item in self._envelope(payload, "result", "fetch logs")]

    async def find_by_id(self, log_id: int) -> Log | None:
        for log in await self.list_all():
            if log.id == log_id:
                return log
        return None

    async def create(self, log: Log) -> int:
        known_ids = {
            entry.id for entry in await self.list_all(log.habit_name) if entry.id is not None
        }
        await self.submit_create(log)
        return await self.resolve_created_id(log.habit_name, known_ids)

    async def submit_create(self, log: Log) -> None:
        await self._post("create log", "/add", params=log_to_wire(log))

    async def resolve_created_id(self, habit_name: str, known_ids: set[int]) -> int:
        """Adopt the single id that was not in known_ids before the create."""
        log_id = resolve_new_id(known_ids, await self.list_all(habit_name))
        if log_id == UNRESOLVED_ID:
            logger.warning("Could not resolve the id of created log for %r", habit_name)
        return log_id

    async def update(self, log_id: int, field: str, value: Any) -> None:
        if field not in LOG_UPDATABLE_FIELDS:
            raise ValueError(
                f"Cannot update log field '{field}'. "
                f"Valid fields: {', '.join(LOG_UPDATABLE_FIELDS)}"
            )
        if await self.find_by_id(log_id) is None:
            raise NotFoundError(f"Log not found: {log_id}")
        await self._post(
            "update log",
            "/update",
            params={"id": log_id, "field": field, "value": encode_value(value)},
        )

    async def delete(self, log_id: int) -> None:
        if await self.find_by_id(log_id) is None:
            logger.debug("Log %s already absent, nothing to delete", log_id)
            return
        await self._post("delete log", "/delete", params={"id": log_id})
