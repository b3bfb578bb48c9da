"""Main entry point for the habo CLI."""

import logging

import typer

from habo_data import __version__
from habo_data.commands import categories, config, events, habits, logs, rules
from habo_data.utils.logger import set_level
from habo_data.utils.typer_helpers import SuggestingGroup
from habo_data.utils.ui.console import get_console, set_color

app = typer.Typer(
    name="habo",
    cls=SuggestingGroup,
    help="Manage Habo habit data in a local database or on a Habo backend",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(habits.app, name="habits", help="Habit management commands")
app.add_typer(events.app, name="events", help="Tracked day commands")
app.add_typer(categories.app, name="categories", help="Category management commands")
app.add_typer(rules.app, name="rules", help="Scheduling rule commands")
app.add_typer(logs.app, name="logs", help="Habit log commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Write debug records to the log file"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Print plain, unstyled output"),
) -> None:
    """Manage Habo habit data in a local database or on a Habo backend."""
    if verbose:
        set_level(logging.DEBUG)
    if no_color:
        set_color(False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]habo-data[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
