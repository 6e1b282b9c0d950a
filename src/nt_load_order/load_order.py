"""Compute the boot driver load order of a Windows system."""

import logging
from dataclasses import dataclass

from nt_load_order.context import LoadOrderContext
from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.errors import SystemRootError
from nt_load_order.steps import (
    add_imports,
    add_kernel_binaries,
    load_from_registry,
    sort_by_hardcoded_groups,
    sort_by_hardcoded_service_lists,
    sort_by_tag_and_group,
)
from nt_load_order.types import Entry

logger = logging.getLogger(__name__)

DEFAULT_BOOT_FILE_SYSTEM = "ntfs"
DEFAULT_CONTROL_SET = 1


@dataclass(frozen=True)
class LoadOrderRequest:
    """Options of one load order computation.

    Attributes:
        kd_driver: Kernel debugger transport to load, e.g. "kdcom"
        cpu_vendor: CPUID vendor string selecting the microcode update module,
            e.g. "AuthenticAMD"
        sort_by_tag_and_group: Sort by Tag/GroupOrderList and ServiceGroupOrder.
            If disabled, services stay in registry enumeration order.
        sort_by_hardcoded_groups: Move the groups the boot loader always loads first
        sort_by_hardcoded_service_lists: Move the drivers the boot loader always loads first
        add_kernel_binaries: Prepend ntoskrnl.exe, hal.dll and friends
        add_imports: Add the DLLs imported by every module
        boot_file_system: Service name of the boot file system driver
        control_set: Number of the ControlSet key to read
    """

    kd_driver: str | None = None
    cpu_vendor: str | None = None
    sort_by_tag_and_group: bool = True
    sort_by_hardcoded_groups: bool = True
    sort_by_hardcoded_service_lists: bool = True
    add_kernel_binaries: bool = True
    add_imports: bool = True
    boot_file_system: str = DEFAULT_BOOT_FILE_SYSTEM
    control_set: int = DEFAULT_CONTROL_SET


def get_load_order(ctx: LoadOrderContext, request: LoadOrderRequest) -> list[Entry]:
    """Run every enabled pass and return the entries in load order.

    Raises:
        LoadOrderError: On any registry, PE or API Set failure. There is no partial result.
    """
    registry_info = load_from_registry(ctx.registry, request.boot_file_system, request.control_set)

    if request.sort_by_tag_and_group:
        entries = sort_by_tag_and_group(registry_info)
    else:
        entries = OrderedEntryList(registry_info.entries)

    if request.sort_by_hardcoded_groups:
        sort_by_hardcoded_groups(entries)

    if request.sort_by_hardcoded_service_lists:
        sort_by_hardcoded_service_lists(entries)

    if request.add_kernel_binaries:
        add_kernel_binaries(entries, request.kd_driver, request.cpu_vendor)

    if request.add_imports:
        if ctx.system_root is None:
            raise SystemRootError("Could not read SystemRoot environment variable")
        entries = add_imports(entries, ctx.system_root, ctx.pe_reader)

    logger.debug("Load order has %d entries", len(entries))
    return list(entries)
