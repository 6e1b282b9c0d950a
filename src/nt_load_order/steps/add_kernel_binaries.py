"""Prepend the kernel binaries that are loaded before any boot driver."""

import logging

from nt_load_order.entry_list import Handle, OrderedEntryList
from nt_load_order.types import Entry

logger = logging.getLogger(__name__)

KERNEL_BINARY_REASON = "Kernel binary"


def add_kernel_binaries(
    entries: OrderedEntryList[Entry],
    kd_driver: str | None,
    cpu_vendor: str | None,
) -> Handle:
    """Prepend ntoskrnl, hal and the optional KD transport and microcode update modules.

    Args:
        entries: List to prepend to
        kd_driver: Base name of the kernel debugger transport DLL, e.g. "kdcom"
        cpu_vendor: CPUID vendor string selecting mcupdate_<vendor>.dll, e.g. "GenuineIntel"

    Returns:
        Handle of the last kernel binary inserted
    """
    last = add_basic_kernel_binaries(entries)

    if kd_driver is not None:
        last = add_kernel_binary(entries, last, kd_driver, f"System32\\{kd_driver}.dll")

    if cpu_vendor is not None:
        last = add_kernel_binary(entries, last, "mcupdate", f"System32\\mcupdate_{cpu_vendor}.dll")

    return last


def add_basic_kernel_binaries(entries: OrderedEntryList[Entry]) -> Handle:
    ntoskrnl = entries.push_front(_kernel_binary_entry("ntoskrnl", "System32\\ntoskrnl.exe"))
    logger.debug("Added kernel binary System32\\ntoskrnl.exe")
    return add_kernel_binary(entries, ntoskrnl, "hal", "System32\\hal.dll")


def add_kernel_binary(
    entries: OrderedEntryList[Entry], after: Handle, name: str, image_path: str
) -> Handle:
    handle = entries.insert_after(after, _kernel_binary_entry(name, image_path))
    logger.debug("Added kernel binary %s", image_path)
    return handle


def _kernel_binary_entry(name: str, image_path: str) -> Entry:
    return Entry(
        name=name,
        image_path=image_path,
        group=None,
        tag=None,
        reason=KERNEL_BINARY_REASON,
        is_kernel_binary=True,
    )
