"""Shared rich console for habo output.

Commands, formatters and the suggestion group print through the same Console
so ``habo --no-color`` switches all of them to plain text at once.
"""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Process-wide Console; rich already honours ``NO_COLOR`` and non-tty output."""
    return Console(highlight=True)


def set_color(enabled: bool) -> None:
    """Turn styled output on or off for the shared console."""
    get_console().no_color = not enabled
