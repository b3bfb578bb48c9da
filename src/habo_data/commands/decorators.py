"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from habo_data.repositories.exceptions import RepositoryError
from habo_data.utils.logger import get_logger
from habo_data.utils.ui.formatters import format_error


async def _run_and_release(func: Callable, *args, **kwargs):
    """Run an async command, then release HTTP clients bound to this event loop."""
    from habo_data.services.config_service import get_config_service

    try:
        return await func(*args, **kwargs)
    finally:
        if get_config_service.cache_info().currsize:
            await get_config_service().close()


def command_wrapper(func: Callable):
    """Run a command (sync or async) with logging and error reporting.

    Repository and validation errors become a one-line error message and exit
    code 1; anything else is logged with its traceback first.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(_run_and_release(func, *args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except (RepositoryError, ValueError) as e:
            logger.error(
                "command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e
            )
            format_error(str(e))
            raise typer.Exit(code=1) from e

        except typer.Exit:
            raise

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=1) from e

    return wrapper
