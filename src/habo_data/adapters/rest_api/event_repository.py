"""REST API implementation of EventRepository."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from habo_data.models import Event, as_day, normalize_event_batch
from habo_data.repositories.repository import EventBatch, EventRepository

from .base import RestApiRepository
from .mapping import day_to_wire, event_from_wire, events_map_from_wire, events_map_to_wire

logger = logging.getLogger(__name__)


class RestApiEventRepository(RestApiRepository, EventRepository):
    """Event repository backed by ``/{user}/events``."""

    family = "events"

    async def list_for_habit(self, habit_id: int) -> list[Event]:
        action = f"fetch events of habit {habit_id}"
        payload = await self._get(action, f"/habit/{habit_id}")
        items = self._envelope(payload, "events", action)
        events = [event_from_wire(habit_id, item) for item in items]
        return sorted(events, key=lambda event: event.day)

    async def map_for_habit(self, habit_id: int) -> dict[date, list[Any]]:
        action = f"fetch event map of habit {habit_id}"
        payload = await self._get(action, f"/habit/{habit_id}/map")
        return events_map_from_wire(self._envelope(payload, "events", action, dict))

    async def find_event(self, habit_id: int, day: date) -> Event | None:
        day = as_day(day)
        events = await self.map_for_habit(habit_id)
        if day not in events:
            return None
        return Event(habit_id=habit_id, day=day, payload=events[day])

    async def insert_event(self, habit_id: int, day: date, payload: list[Any]) -> None:
        await self._post(
            "insert event",
            "/add",
            json={"habitId": habit_id, "date": day_to_wire(day), "eventData": payload},
        )

    async def delete_event(self, habit_id: int, day: date) -> None:
        action = "delete event"
        response = await self._request(
            "POST", action, "/delete", json={"habitId": habit_id, "date": day_to_wire(day)}
        )
        if response.status_code == 404:
            logger.debug("No event for habit %s on %s", habit_id, as_day(day))
            return
        self._expect_ok(response, action)

    async def insert_many_for_habit(self, habit_id: int, events: EventBatch) -> None:
        normalized = normalize_event_batch(events)
        if not normalized:
            return
        await self._post(
            "insert events",
            f"/habit/{habit_id}/batch",
            json={"habitId": habit_id, "events": events_map_to_wire(normalized)},
        )

    async def delete_all_for_habit(self, habit_id: int) -> None:
        await self._post("clear events", f"/habit/{habit_id}/clear")

    async def delete_all(self) -> None:
        await self._post("clear all events", "/clear-all")
