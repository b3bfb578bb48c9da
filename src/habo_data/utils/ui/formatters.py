"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from habo_data.utils.ui.console import get_console

console = get_console()

# Keys that wrap a list of records in command results.
COLLECTION_KEYS = ("habits", "events", "categories", "rules", "logs", "items")


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "pretty":
        format_pretty(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_table(data)


def _collection(data: dict) -> list | None:
    for key in COLLECTION_KEYS:
        if isinstance(data.get(key), list):
            return data[key]
    return None


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        items = _collection(data)
        if items is not None:
            format_dict_table(items)
        else:
            format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col, "")) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Format habits as a compact list, anything else as a table."""
    if isinstance(data, dict) and isinstance(data.get("habits"), list):
        format_habits_pretty(data["habits"])
    else:
        format_table(data)


def format_habits_pretty(habits: list[dict]) -> None:
    """Format habits one per line with an archived marker."""
    if not habits:
        console.print("[yellow]No habits found[/yellow]")
        return

    for habit in habits:
        line = Text()
        line.append("🗃️ " if habit.get("archived") else "⬜ ")
        line.append(str(habit.get("title", "")), style="dim" if habit.get("archived") else "bold")
        habit_id = habit.get("id")
        line.append(f"  #{habit_id}" if habit_id else "  #?", style="cyan")
        console.print(line)


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
    elif isinstance(data, dict):
        items = _collection(data)
        if items is not None:
            format_quiet(items)
        elif "id" in data:
            print(data["id"])


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")
