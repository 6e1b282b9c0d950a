"""Show command implementation."""

import logging
from pathlib import Path
from typing import TypeVar

import click

from nt_load_order.cli.error_boundary import cli_error_boundary
from nt_load_order.cli.rendering import emit_entries_json, render_entries_table
from nt_load_order.config import LoadOrderConfig
from nt_load_order.context import AppContext
from nt_load_order.integrations.cpu.abc import CpuInfo
from nt_load_order.load_order import (
    DEFAULT_BOOT_FILE_SYSTEM,
    DEFAULT_CONTROL_SET,
    LoadOrderRequest,
    get_load_order,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STEP_SWITCHES = (
    ("sort_by_tag_and_group", "Sort services by Tag/GroupOrderList and ServiceGroupOrder."),
    ("sort_by_hardcoded_groups", "Move groups the boot loader always loads first."),
    ("sort_by_hardcoded_service_lists", "Move drivers the boot loader always loads first."),
    ("add_kernel_binaries", "Prepend ntoskrnl.exe, hal.dll and related kernel binaries."),
    ("add_imports", "Add the DLLs imported by every module."),
)


def _step_switch_options(func: T) -> T:
    for name, help_text in reversed(_STEP_SWITCHES):
        flag = name.replace("_", "-")
        func = click.option(
            f"--{flag}/--no-{flag}",
            name,
            default=None,
            help=f"{help_text} [default: enabled]",
        )(func)  # type: ignore[arg-type]
    return func


def _pick(cli_value: T | None, config_value: T | None, default: T) -> T:
    if cli_value is not None:
        return cli_value
    if config_value is not None:
        return config_value
    return default


def build_request(
    config: LoadOrderConfig,
    cpu_info: CpuInfo,
    *,
    kd_driver: str | None,
    cpu_vendor: str | None,
    detect_cpu_vendor: bool | None,
    boot_file_system: str | None,
    control_set: int | None,
    switches: dict[str, bool | None],
    live_system: bool,
) -> LoadOrderRequest:
    """Combine command line options, config file and defaults, in that precedence.

    The CPU vendor of this machine is detected by default only when live_system
    is set, i.e. when the running system is analyzed.
    """
    vendor = _pick(cpu_vendor, config.cpu_vendor, None)
    if vendor is None and _pick(detect_cpu_vendor, config.detect_cpu_vendor, live_system):
        vendor = cpu_info.vendor()
        logger.debug("Detected CPU vendor %s", vendor)

    return LoadOrderRequest(
        kd_driver=_pick(kd_driver, config.kd_driver, None),
        cpu_vendor=vendor,
        boot_file_system=_pick(boot_file_system, config.boot_file_system, DEFAULT_BOOT_FILE_SYSTEM),
        control_set=_pick(control_set, config.control_set, DEFAULT_CONTROL_SET),
        **{
            name: _pick(switches[name], getattr(config, name), True)
            for name, _help_text in _STEP_SWITCHES
        },
    )


@click.command("show")
@click.option(
    "--system-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Windows directory of an offline system. Analyzes the running system if omitted.",
)
@click.option("--kd-driver", help='Kernel debugger transport to load, e.g. "kdcom".')
@click.option("--cpu-vendor", help='CPUID vendor string, e.g. "AuthenticAMD" or "GenuineIntel".')
@click.option(
    "--detect-cpu-vendor/--no-detect-cpu-vendor",
    default=None,
    help=(
        "Use the vendor of this machine's CPU if --cpu-vendor is not given. "
        "On by default when analyzing the running system."
    ),
)
@_step_switch_options
@click.option("--boot-file-system", help="Service name of the boot file system driver.")
@click.option(
    "--control-set",
    type=click.IntRange(1, 999),
    help="Number of the ControlSet key to read.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.pass_obj
@cli_error_boundary
def show_cmd(
    app: AppContext,
    system_root: Path | None,
    kd_driver: str | None,
    cpu_vendor: str | None,
    detect_cpu_vendor: bool | None,
    sort_by_tag_and_group: bool | None,
    sort_by_hardcoded_groups: bool | None,
    sort_by_hardcoded_service_lists: bool | None,
    add_kernel_binaries: bool | None,
    add_imports: bool | None,
    boot_file_system: str | None,
    control_set: int | None,
    output_format: str,
) -> None:
    """Show the order in which the boot loader loads drivers and DLLs."""
    request = build_request(
        app.config_store.load(),
        app.cpu_info,
        kd_driver=kd_driver,
        cpu_vendor=cpu_vendor,
        detect_cpu_vendor=detect_cpu_vendor,
        boot_file_system=boot_file_system,
        control_set=control_set,
        switches={
            "sort_by_tag_and_group": sort_by_tag_and_group,
            "sort_by_hardcoded_groups": sort_by_hardcoded_groups,
            "sort_by_hardcoded_service_lists": sort_by_hardcoded_service_lists,
            "add_kernel_binaries": add_kernel_binaries,
            "add_imports": add_imports,
        },
        live_system=system_root is None,
    )
    logger.debug("Computing load order with %s", request)

    entries = get_load_order(app.open_context(system_root), request)

    if output_format == "json":
        emit_entries_json(entries)
    else:
        render_entries_table(entries)
