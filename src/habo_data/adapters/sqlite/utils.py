"""Utility functions for SQLite adapter."""

from __future__ import annotations

import json
from datetime import UTC, date, datetime, time
from typing import Any

from habo_data.models import as_day


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def day_to_db(day: date | datetime | str) -> str:
    """Store days as ``YYYY-MM-DD`` so text order is chronological."""
    return as_day(day).isoformat()


def day_from_db(value: str) -> date:
    return date.fromisoformat(value)


def time_to_db(value: time) -> str:
    return value.strftime("%H:%M")


def time_from_db(value: str) -> time:
    hour, minute = value.split(":")[:2]
    return time(int(hour), int(minute))


def payload_to_db(payload: list[Any]) -> str:
    return json.dumps(payload)


def payload_from_db(value: str | None) -> list[Any]:
    if not value:
        return []
    return json.loads(value)
