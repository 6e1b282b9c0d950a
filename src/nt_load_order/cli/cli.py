import logging
import os

import click

from nt_load_order.cli.commands.config_cmd import config_group
from nt_load_order.cli.commands.show import show_cmd
from nt_load_order.context import create_app_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "NT_LOAD_ORDER_DEBUG"


def _enable_debug_logging() -> None:
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="nt-load-order")
@click.option("--debug", is_flag=True, help="Log every pipeline step to stderr.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Determine the order in which Windows loads boot drivers and their DLLs."""
    if debug or os.getenv(DEBUG_ENV_VAR):
        _enable_debug_logging()

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_app_context()


cli.add_command(config_group)
cli.add_command(show_cmd)


def main() -> None:
    """CLI entry point used by the `nt-load-order` console script."""
    cli()
