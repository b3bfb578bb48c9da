"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from habo_data.utils.ui.console import get_console


def suggest_commands(attempted: str, known: list[str]) -> list[str]:
    """Known command names close to a mistyped one, best match first."""
    return get_close_matches(attempted, known, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with the closest matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            suggestions = suggest_commands(args[0], sorted(self.commands)) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(f'[red]Error:[/red] unknown command "{args[0]}" for "{ctx.info_name}"')
            if len(suggestions) == 1:
                heading = "Did you mean this?"
            else:
                heading = "Did you mean one of these?"
            console.print(f"\n[yellow]{heading}[/yellow]")
            for suggestion in suggestions:
                console.print(f"    {ctx.info_name} {suggestion}")
            raise typer.Exit(1) from e
