"""Habit tracking data models."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Identifier returned by create() when the store accepted the record but the
# assigned identity could not be determined.
UNRESOLVED_ID = 0


def as_day(value: Any) -> Any:
    """Truncate datetimes (or ISO strings) to calendar-day granularity."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class HabitType(str, Enum):
    """How progress on a habit is tracked."""

    BOOLEAN = "boolean"
    NUMERIC = "numeric"


class Category(BaseModel):
    """Category model grouping habits.

    Attributes:
        id: Unique identifier, None until persisted
        name: Display name
    """

    id: int | None = None
    name: str


class Habit(BaseModel):
    """Habit model carrying the full local field set.

    Remote stores only supply a subset of these fields (see
    ``habo_data.adapters.rest_api.mapping``); the rest take the defaults
    declared here.

    Attributes:
        id: Store-assigned identifier, None until persisted or reconciled
        title: Habit title (unique per user in practice, not enforced)
        position: Display position in the habit list
        habit_type: Boolean (done / not done) or numeric tracking
        target_value: Daily target for numeric habits
        partial_value: Step used when recording partial progress
        unit: Unit label for numeric habits
        archived: Whether the habit is hidden from the active list
        notification: Whether a reminder notification is enabled
        notification_time: Time of day for the reminder
        two_day_rule: Allow one missed day without breaking a streak
        cue: Habit loop cue
        routine: Habit loop routine
        reward: Habit loop reward
        show_reward: Show the reward text after completion
        advanced: Whether the advanced habit loop fields are in use
        sanction: Consequence text for a missed day
        show_sanction: Show the sanction text after a miss
        accountant: Person the user is accountable to
        categories: Categories the habit belongs to
        events: Tracked events keyed by day, ordered ascending
    """

    id: int | None = None
    title: str
    position: int = 0
    habit_type: HabitType = HabitType.BOOLEAN
    target_value: float = 100.0
    partial_value: float = 10.0
    unit: str = ""
    archived: bool = False
    notification: bool = False
    notification_time: time = time(8, 0)
    two_day_rule: bool = False
    cue: str = ""
    routine: str = ""
    reward: str = ""
    show_reward: bool = False
    advanced: bool = False
    sanction: str = ""
    show_sanction: bool = False
    accountant: str = ""
    categories: list[Category] = Field(default_factory=list)
    events: dict[date, list[Any]] = Field(default_factory=dict)

    @field_validator("events", mode="before")
    @classmethod
    def sort_events(cls, value: Any) -> Any:
        if isinstance(value, dict):
            normalized = {as_day(key): payload for key, payload in value.items()}
            return dict(sorted(normalized.items()))
        return value


class Event(BaseModel):
    """A tracked day for a habit, unique per (habit_id, day).

    Attributes:
        habit_id: Identifier of the owning habit
        day: Calendar day (no time component)
        payload: Free-form event data, e.g. ``[day_type, comment]``
    """

    habit_id: int
    day: date
    payload: list[Any] = Field(default_factory=list)

    @field_validator("day", mode="before")
    @classmethod
    def truncate_to_day(cls, value: Any) -> Any:
        return as_day(value)


class Rule(BaseModel):
    """Scheduling rule attached to a habit by name.

    Attributes:
        id: Store-assigned identifier, None until persisted or reconciled
        habit: Name of the habit the rule applies to
        day: Day of week (0-6)
        hour: Hour of day (0-23)
        minute: Minute of hour (0-59)
        active: Whether the rule is enabled
    """

    id: int | None = None
    habit: str
    day: int = Field(ge=0, le=6)
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    active: bool = True


class Log(BaseModel):
    """Habit log entry.

    Attributes:
        id: Store-assigned identifier, None until persisted or reconciled
        habit_name: Name of the habit the entry belongs to
        state: Free-text state (e.g. "completed", "NaV")
        reported: True when self-reported, False when reported by a device
    """

    id: int | None = None
    habit_name: str
    state: str
    reported: bool = True


# Log fields that may be changed through LogRepository.update().
LOG_UPDATABLE_FIELDS = ("habit_name", "state", "reported")


def normalize_event_batch(events: Any) -> dict[date, list[Any]]:
    """Collapse a batch of events to one payload per day, ascending by day.

    Accepts a day -> payload mapping or an iterable of (day, payload) pairs.
    When a day appears more than once the last payload wins.
    """
    items = events.items() if isinstance(events, Mapping) else events
    normalized: dict[date, list[Any]] = {}
    for day, payload in items:
        normalized[as_day(day)] = list(payload)
    return dict(sorted(normalized.items()))
