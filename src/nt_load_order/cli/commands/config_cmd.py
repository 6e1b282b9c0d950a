"""Config command implementation."""

import click

from nt_load_order.cli.error_boundary import cli_error_boundary
from nt_load_order.cli.output import machine_output, user_output
from nt_load_order.config import CONFIG_KEYS
from nt_load_order.context import AppContext


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


@click.group("config")
def config_group() -> None:
    """Manage the defaults used by `nt-load-order show`."""


@config_group.command("list")
@click.pass_obj
@cli_error_boundary
def config_list(app: AppContext) -> None:
    """Print the configured keys and values."""
    config = app.config_store.load()
    user_output(click.style(f"Configuration ({app.config_store.path()}):", bold=True))

    items = config.items()
    if not items:
        user_output("  (nothing configured)")
        return

    for key, value in items:
        machine_output(f"{key}={_format_value(value)}")


@config_group.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
@click.pass_obj
@cli_error_boundary
def config_set(app: AppContext, key: str, value: str) -> None:
    """Set KEY to VALUE."""
    config = app.config_store.load().with_value(key, value)
    app.config_store.save(config)
    user_output(f"Set {key}={_format_value(getattr(config, key))}")


@config_group.command("unset")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.pass_obj
@cli_error_boundary
def config_unset(app: AppContext, key: str) -> None:
    """Remove KEY, restoring its built-in default."""
    config = app.config_store.load().without(key)
    app.config_store.save(config)
    user_output(f"Unset {key}")
