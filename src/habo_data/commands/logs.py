"""Habit log commands."""

import typer

from habo_data.models import UNRESOLVED_ID, Log
from habo_data.services.config_service import get_storage_strategy_context
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Habit log commands")


@app.command("list")
@command_wrapper
async def list_logs(
    habit: str | None = typer.Option(None, "--habit", help="Only entries of this habit"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List log entries."""
    log_repo = get_storage_strategy_context().log_repository
    logs = await log_repo.list_all(habit)
    format_output({"logs": [entry.model_dump() for entry in logs]}, output)


@app.command("add")
@command_wrapper
async def add_log(
    habit: str = typer.Argument(..., help="Habit name"),
    state: str = typer.Argument(..., help="State, e.g. completed"),
    device: bool = typer.Option(False, "--device", help="Reported by a device"),
) -> None:
    """Append a log entry."""
    log_repo = get_storage_strategy_context().log_repository
    log_id = await log_repo.create(Log(habit_name=habit, state=state, reported=not device))
    if log_id == UNRESOLVED_ID:
        format_warning("Log entry created, but its id could not be determined")
    else:
        format_success(f"Log entry created: {log_id}")
