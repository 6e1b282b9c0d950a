"""Error boundary handling for CLI commands.

Turns the failures a user can cause or fix (a missing hive, a broken PE file,
a bad config value) into a one-line message and exit code 1 instead of a
stack trace.
"""

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

import click

from nt_load_order.cli.output import user_output
from nt_load_order.cli.rendering import emit_json_error
from nt_load_order.errors import LoadOrderError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Any])

_HANDLED_ERRORS = (LoadOrderError, ValueError, FileNotFoundError, PermissionError)


def cli_error_boundary(func: T) -> T:
    """Decorator that catches well-known exceptions and displays clean error messages.

    Catches:
        - LoadOrderError: Registry, PE and API Set failures
        - ValueError: Invalid input or configuration
        - FileNotFoundError: Missing files/directories
        - PermissionError: Permission denied errors

    If the command was called with format="json", the error is emitted as a
    JSON ErrorResponse on stdout instead. All other exceptions bubble up
    normally with full stack traces.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except _HANDLED_ERRORS as e:
            logger.debug("Command failed", exc_info=True)
            if kwargs.get("output_format") == "json":
                emit_json_error(str(e), type(e).__name__)
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
