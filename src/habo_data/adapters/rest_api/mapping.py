"""Translation between domain models and the backend's wire shapes.

The remote backend stores a narrow habit record (``id``, ``habit_name``,
``is_device``). Widening fills every other field with the local defaults;
narrowing keeps the title and maps ``archived`` onto ``is_device``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from habo_data.models import Category, Event, Habit, Log, Rule, as_day
from habo_data.repositories.exceptions import SchemaMismatchError

DEFAULT_TITLE = "Unnamed habit"

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def parse_remote_id(raw: Any) -> int | None:
    """Parse an identifier sent as an int or a numeric string."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def coerce_bool(raw: Any, default: bool) -> bool:
    """Read a boolean that may arrive as a JSON bool or a string."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if isinstance(raw, int):
        return raw != 0
    return default


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def encode_value(value: Any) -> str:
    """Render a scalar the way the backend expects it in a query string."""
    if isinstance(value, bool):
        return encode_bool(value)
    return str(value)


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------


def habit_from_remote(record: Mapping[str, Any]) -> Habit:
    """Widen a remote habit record to a full Habit.

    Missing or malformed fields fall back to defaults; this never raises.
    """
    title = record.get("habit_name")
    if not isinstance(title, str):
        title = DEFAULT_TITLE
    is_device = coerce_bool(record.get("is_device"), default=True)
    return Habit(
        id=parse_remote_id(record.get("habit_id")),
        title=title,
        archived=not is_device,
    )


def habit_to_remote(habit: Habit) -> dict[str, str]:
    """Narrow a Habit to the query parameters of ``POST /add``."""
    return {"name": habit.title, "device": encode_bool(not habit.archived)}


def habit_update_params(remote_title: str, habit: Habit) -> dict[str, str]:
    """Query parameters for ``POST /update``; only ``is_device`` can change remotely."""
    return {
        "name": remote_title,
        "field": "is_device",
        "value": encode_bool(not habit.archived),
    }


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def day_to_wire(day: date) -> str:
    """Encode a day as an ISO-8601 datetime at midnight."""
    return datetime.combine(as_day(day), time()).isoformat()


def day_from_wire(raw: Any) -> date:
    if not isinstance(raw, str):
        raise SchemaMismatchError(f"Expected an ISO-8601 date, got {raw!r}")
    try:
        return as_day(raw)
    except ValueError as e:
        raise SchemaMismatchError(f"Invalid event date {raw!r}") from e


def event_from_wire(habit_id: int, item: Any) -> Event:
    """Decode one ``{"date": ..., "eventData": [...]}`` entry."""
    if not isinstance(item, Mapping):
        raise SchemaMismatchError(f"Expected an event object, got {item!r}")
    payload = item.get("eventData", [])
    if not isinstance(payload, list):
        raise SchemaMismatchError(f"Expected eventData to be a list, got {payload!r}")
    return Event(habit_id=habit_id, day=day_from_wire(item.get("date")), payload=payload)


def events_map_from_wire(raw: Mapping[str, Any]) -> dict[date, list[Any]]:
    """Decode an ``{iso_date: payload}`` object into an ascending day map."""
    decoded: dict[date, list[Any]] = {}
    for key, payload in raw.items():
        if not isinstance(payload, list):
            raise SchemaMismatchError(f"Expected a list payload for {key!r}")
        decoded[day_from_wire(key)] = payload
    return dict(sorted(decoded.items()))


def events_map_to_wire(events: Mapping[date, list[Any]]) -> dict[str, list[Any]]:
    return {day_to_wire(day): payload for day, payload in events.items()}


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def category_from_wire(item: Any) -> Category:
    if not isinstance(item, Mapping):
        raise SchemaMismatchError(f"Expected a category object, got {item!r}")
    name = item.get("name")
    if not isinstance(name, str):
        raise SchemaMismatchError(f"Category without a name: {item!r}")
    return Category(id=parse_remote_id(item.get("id")), name=name)


def category_to_wire(category: Category) -> dict[str, Any]:
    body: dict[str, Any] = {"name": category.name}
    if category.id is not None:
        body["id"] = category.id
    return body


# ---------------------------------------------------------------------------
# Rules and logs
# ---------------------------------------------------------------------------


def _required_int(item: Mapping[str, Any], key: str) -> int:
    value = parse_remote_id(item.get(key))
    if value is None:
        raise SchemaMismatchError(f"Expected an integer '{key}' in {item!r}")
    return value


def rule_from_wire(item: Any) -> Rule:
    if not isinstance(item, Mapping):
        raise SchemaMismatchError(f"Expected a rule object, got {item!r}")
    habit = item.get("habit")
    if not isinstance(habit, str):
        raise SchemaMismatchError(f"Rule without a habit name: {item!r}")
    try:
        return Rule(
            id=parse_remote_id(item.get("id")),
            habit=habit,
            day=_required_int(item, "day"),
            hour=_required_int(item, "hour"),
            minute=_required_int(item, "minute"),
            active=coerce_bool(item.get("active"), default=True),
        )
    except ValueError as e:
        raise SchemaMismatchError(f"Invalid rule {item!r}: {e}") from e


def rule_to_wire(rule: Rule) -> dict[str, str]:
    return {
        "habit": rule.habit,
        "day": str(rule.day),
        "hour": str(rule.hour),
        "minute": str(rule.minute),
        "active": encode_bool(rule.active),
    }


def log_from_wire(item: Any) -> Log:
    if not isinstance(item, Mapping):
        raise SchemaMismatchError(f"Expected a log object, got {item!r}")
    habit_name = item.get("habit_name")
    if not isinstance(habit_name, str):
        raise SchemaMismatchError(f"Log without a habit name: {item!r}")
    state = item.get("state")
    return Log(
        id=parse_remote_id(item.get("id")),
        habit_name=habit_name,
        state="" if state is None else str(state),
        reported=coerce_bool(item.get("reported"), default=True),
    )


def log_to_wire(log: Log) -> dict[str, str]:
    return {
        "name": log.habit_name,
        "state": log.state,
        "reported": encode_bool(log.reported),
    }
