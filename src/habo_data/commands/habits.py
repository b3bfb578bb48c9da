"""Habit management commands."""

import typer

from habo_data.models import UNRESOLVED_ID, Habit
from habo_data.repositories.exceptions import NotFoundError
from habo_data.services.config_service import get_storage_strategy_context
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import (
    format_error,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Habit management commands")


def _summary(habit: Habit) -> dict:
    return {
        "id": habit.id,
        "title": habit.title,
        "archived": habit.archived,
        "type": habit.habit_type.value,
        "position": habit.position,
    }


@app.command("list")
@command_wrapper
async def list_habits(
    archived: bool = typer.Option(False, "--archived", help="Include archived habits"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List habits."""
    habit_repo = get_storage_strategy_context().habit_repository
    habits = await habit_repo.list_all()
    if not archived:
        habits = [h for h in habits if not h.archived]
    format_output({"habits": [_summary(h) for h in habits]}, output)


@app.command("show")
@command_wrapper
async def show_habit(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show habit details."""
    habit_repo = get_storage_strategy_context().habit_repository
    habit = await habit_repo.find_by_id(habit_id)
    if habit is None:
        format_error(f"Habit not found: {habit_id}")
        raise typer.Exit(1)
    format_output(habit.model_dump(mode="json", exclude={"events"}), output)


@app.command("add")
@command_wrapper
async def add_habit(
    title: str = typer.Argument(..., help="Habit title"),
    archived: bool = typer.Option(False, "--archived", help="Create as archived"),
) -> None:
    """Create a habit."""
    habit_repo = get_storage_strategy_context().habit_repository
    habit_id = await habit_repo.create(Habit(title=title, archived=archived))
    if habit_id == UNRESOLVED_ID:
        format_warning(f"Habit '{title}' created, but its id could not be determined")
    else:
        format_success(f"Habit created: {habit_id}")


async def _set_archived(habit_id: int, archived: bool) -> None:
    habit_repo = get_storage_strategy_context().habit_repository
    habit = await habit_repo.find_by_id(habit_id)
    if habit is None:
        raise NotFoundError(f"Habit not found: {habit_id}")
    await habit_repo.update(habit.model_copy(update={"archived": archived}))


@app.command("archive")
@command_wrapper
async def archive_habit(habit_id: int = typer.Argument(..., help="Habit ID")) -> None:
    """Archive a habit."""
    await _set_archived(habit_id, True)
    format_success(f"Habit archived: {habit_id}")


@app.command("unarchive")
@command_wrapper
async def unarchive_habit(habit_id: int = typer.Argument(..., help="Habit ID")) -> None:
    """Restore an archived habit."""
    await _set_archived(habit_id, False)
    format_success(f"Habit unarchived: {habit_id}")


@app.command("delete")
@command_wrapper
async def delete_habit(
    habit_id: int = typer.Argument(..., help="Habit ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a habit."""
    if not yes:
        confirm = typer.confirm(f"Are you sure you want to delete habit {habit_id}?")
        if not confirm:
            format_error("Cancelled")
            raise typer.Exit(0)

    habit_repo = get_storage_strategy_context().habit_repository
    await habit_repo.delete(habit_id)
    format_success(f"Habit deleted: {habit_id}")
