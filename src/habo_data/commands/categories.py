"""Category management commands."""

import typer

from habo_data.models import Category
from habo_data.services.config_service import get_storage_strategy_context
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.formatters import format_error, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Category management commands")


@app.command("list")
@command_wrapper
async def list_categories(
    habit_id: int | None = typer.Option(None, "--habit", help="Only categories of this habit"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List categories."""
    category_repo = get_storage_strategy_context().category_repository
    if habit_id is None:
        categories = await category_repo.list_all()
    else:
        categories = await category_repo.list_for_habit(habit_id)
    format_output({"categories": [c.model_dump() for c in categories]}, output)


@app.command("add")
@command_wrapper
async def add_category(name: str = typer.Argument(..., help="Category name")) -> None:
    """Create a category."""
    category_repo = get_storage_strategy_context().category_repository
    category_id = await category_repo.create(Category(name=name))
    format_success(f"Category created: {category_id}")


@app.command("delete")
@command_wrapper
async def delete_category(
    category_id: int = typer.Argument(..., help="Category ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a category."""
    if not yes:
        confirm = typer.confirm(f"Are you sure you want to delete category {category_id}?")
        if not confirm:
            format_error("Cancelled")
            raise typer.Exit(0)

    category_repo = get_storage_strategy_context().category_repository
    await category_repo.delete(category_id)
    format_success(f"Category deleted: {category_id}")
