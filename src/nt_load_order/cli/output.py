"""Output routing for CLI commands.

Human-readable messages go to stderr, machine-readable data to stdout, so
`nt-load-order show --format json | jq` only ever sees JSON.
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output an informational message for the user (stderr)."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Output structured data for machine consumption (stdout)."""
    click.echo(message, nl=nl)
