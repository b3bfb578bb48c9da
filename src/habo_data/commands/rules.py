"""Scheduling rule commands."""

import typer

from habo_data.models import UNRESOLVED_ID, Rule
from habo_data.services.config_service import get_storage_strategy_context
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Scheduling rule commands")


@app.command("list")
@command_wrapper
async def list_rules(
    habit: str | None = typer.Option(None, "--habit", help="Only rules of this habit"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List scheduling rules."""
    rule_repo = get_storage_strategy_context().rule_repository
    rules = await (rule_repo.list_all() if habit is None else rule_repo.list_for_habit(habit))
    format_output({"rules": [r.model_dump() for r in rules]}, output)


@app.command("add")
@command_wrapper
async def add_rule(
    habit: str = typer.Argument(..., help="Habit name"),
    day: int = typer.Argument(..., min=0, max=6, help="Day of week (0-6)"),
    hour: int = typer.Argument(..., min=0, max=23, help="Hour (0-23)"),
    minute: int = typer.Argument(0, min=0, max=59, help="Minute (0-59)"),
    inactive: bool = typer.Option(False, "--inactive", help="Create the rule disabled"),
) -> None:
    """Add a scheduling rule to a habit."""
    rule_repo = get_storage_strategy_context().rule_repository
    rule_id = await rule_repo.create(
        Rule(habit=habit, day=day, hour=hour, minute=minute, active=not inactive)
    )
    if rule_id == UNRESOLVED_ID:
        format_warning("Rule created, but its id could not be determined")
    else:
        format_success(f"Rule created: {rule_id}")
