"""Event (tracked day) commands."""

from datetime import date, datetime

import typer

from habo_data.services.config_service import get_storage_strategy_context
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Tracked day commands")

DAY_STATES = ("check", "fail", "skip", "progress")


def _parse_day(value: str | None) -> date:
    if value is None:
        return date.today()
    return datetime.strptime(value, "%Y-%m-%d").date()


@app.command("list")
@command_wrapper
async def list_events(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List the tracked days of a habit."""
    event_repo = get_storage_strategy_context().event_repository
    events = await event_repo.list_for_habit(habit_id)
    format_output(
        {"events": [{"day": e.day.isoformat(), "payload": e.payload} for e in events]},
        output,
    )


@app.command("mark")
@command_wrapper
async def mark_day(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    day: str | None = typer.Argument(None, help="Day (YYYY-MM-DD), default today"),
    state: str = typer.Option("check", "--state", "-s", help="check, fail, skip or progress"),
    comment: str = typer.Option("", "--comment", "-c", help="Comment for the day"),
) -> None:
    """Record a day for a habit, replacing any existing entry."""
    if state not in DAY_STATES:
        raise ValueError(f"Unknown state '{state}'. Valid: {', '.join(DAY_STATES)}")
    target = _parse_day(day)
    event_repo = get_storage_strategy_context().event_repository
    await event_repo.insert_event(habit_id, target, [state, comment])
    format_success(f"Marked {target.isoformat()} as {state} for habit {habit_id}")


@app.command("clear")
@command_wrapper
async def clear_day(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    day: str | None = typer.Argument(None, help="Day (YYYY-MM-DD), default today"),
) -> None:
    """Remove the entry recorded for a day."""
    target = _parse_day(day)
    event_repo = get_storage_strategy_context().event_repository
    await event_repo.delete_event(habit_id, target)
    format_success(f"Cleared {target.isoformat()} for habit {habit_id}")
