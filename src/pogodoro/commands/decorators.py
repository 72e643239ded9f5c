"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from pogodoro.models.exceptions import (
    InvalidInputError,
    NotFoundError,
    PogodoroError,
    StoreUnavailableError,
)
from pogodoro.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORE_UNAVAILABLE,
)
from pogodoro.utils.logger import get_logger
from pogodoro.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: PogodoroError) -> int:
    """Exit code reported for a domain error."""
    if isinstance(error, InvalidInputError):
        return ERROR_INVALID_ARGS
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, StoreUnavailableError):
        return ERROR_STORE_UNAVAILABLE
    return ERROR_GENERAL


def command_wrapper(func: Callable):
    """Log the command lifecycle and turn errors into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (AppError, PogodoroError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
            raise typer.Exit(code=code) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
