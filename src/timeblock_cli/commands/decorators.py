"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from timeblock_cli.models import (
    OverlapConflictError,
    StorageError,
    TaskNotFoundError,
)
from timeblock_cli.utils import exit_codes
from timeblock_cli.utils.logger import get_logger
from timeblock_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


# Engine errors and the exit code each one maps to
_ERROR_EXIT_CODES: list[tuple[type[Exception], int]] = [
    (OverlapConflictError, exit_codes.ERROR_OVERLAP),
    (TaskNotFoundError, exit_codes.ERROR_NOT_FOUND),
    (StorageError, exit_codes.ERROR_STORAGE),
    (ValidationError, exit_codes.ERROR_INVALID_ARGS),
]


def _exit_code_for(error: Exception) -> int | None:
    if isinstance(error, AppError):
        return error.exit_code
    for error_type, code in _ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return None


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
            for err in error.errors()
        )
    return str(error)


def command_wrapper(func: Callable):
    """Run a (sync or async) command, logging it and mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            code = _exit_code_for(e)
            if code is None:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {e}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                exit_codes.get_exit_code_name(code),
                str(e),
            )
            format_error(_describe(e))
            raise typer.Exit(code=code) from e

    return wrapper
