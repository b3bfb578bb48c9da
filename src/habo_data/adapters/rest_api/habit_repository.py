"""REST API implementation of HabitRepository.

The backend has no endpoint for fetching or deleting a habit by id and its
create endpoint does not return the new id. Lookups scan the full list,
deletes go by title, and creates are reconciled by title afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from habo_data.models import UNRESOLVED_ID, Habit
from habo_data.repositories.exceptions import NotFoundError, SchemaMismatchError
from habo_data.repositories.repository import HabitRepository

from .base import RestApiRepository
from .mapping import habit_from_remote, habit_to_remote, habit_update_params
from .reconciliation import resolve_by_title

logger = logging.getLogger(__name__)


class RestApiHabitRepository(RestApiRepository, HabitRepository):
    """Habit repository backed by ``/{user}/habits``."""

    family = "habits"

    async def list_all(self) -> list[Habit]:
        payload = await self._get("fetch habits")
        records = self._envelope(payload, "habits", "fetch habits")
        habits = []
        for record in records:
            if not isinstance(record, Mapping):
                raise SchemaMismatchError(f"Failed to fetch habits: bad record {record!r}")
            habits.append(habit_from_remote(record))
        return habits

    async def find_by_id(self, habit_id: int) -> Habit | None:
        for habit in await self.list_all():
            if habit.id == habit_id:
                return habit
        return None

    async def create(self, habit: Habit) -> int:
        await self.submit_create(habit)
        return await self.resolve_created_id(habit.title)

    async def submit_create(self, habit: Habit) -> None:
        """First phase of create: send the narrowed habit."""
        await self._post("create habit", "/add", params=habit_to_remote(habit))

    async def resolve_created_id(self, title: str) -> int:
        """Second phase of create: find the new habit's id by title.

        Returns UNRESOLVED_ID when zero or several habits carry the title.
        A transport failure here propagates even though the habit was created.
        """
        habit_id = resolve_by_title(await self.list_all(), title)
        if habit_id == UNRESOLVED_ID:
            logger.warning("Could not resolve the id of created habit %r", title)
        return habit_id

    async def update(self, habit: Habit) -> None:
        current = await self.find_by_id(habit.id) if habit.id is not None else None
        if current is None:
            raise NotFoundError(f"Habit not found: {habit.id}")
        await self._post(
            "update habit", "/update", params=habit_update_params(current.title, habit)
        )

    async def delete(self, habit_id: int) -> None:
        habit = await self.find_by_id(habit_id)
        if habit is None:
            logger.debug("Habit %s already absent, nothing to delete", habit_id)
            return
        await self._delete_by_title(habit.title)

    async def _delete_by_title(self, title: str) -> None:
        await self._post("delete habit", "/delete", params={"name": title})

    async def update_order(self, habits: list[Habit]) -> None:
        # The backend has no ordering field.
        logger.debug("Ignoring habit reorder of %d habits", len(habits))

    async def delete_all(self) -> None:
        habits = await self.list_all()
        for title in dict.fromkeys(habit.title for habit in habits):
            await self._delete_by_title(title)

    async def insert_many(self, habits: list[Habit]) -> list[int]:
        ids = []
        for habit in habits:
            ids.append(await self.create(habit))
        return ids
