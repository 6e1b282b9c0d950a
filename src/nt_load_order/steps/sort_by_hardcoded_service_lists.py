"""Move the drivers the boot loader always loads first to the front."""

import logging

from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.steps.front_partition import FrontPartitioner
from nt_load_order.types import Entry

logger = logging.getLogger(__name__)

# (list name, image paths in load order)
HARDCODED_SERVICE_LISTS: list[tuple[str, list[str]]] = [
    (
        "Core Driver Services",
        [
            "system32\\drivers\\verifierext.sys",
            "system32\\drivers\\wdf01000.sys",
            "system32\\drivers\\acpiex.sys",
            "system32\\drivers\\cng.sys",
            "system32\\drivers\\mssecflt.sys",
            "system32\\drivers\\sgrmagent.sys",
            "system32\\drivers\\lxss.sys",
            "system32\\drivers\\palcore.sys",
        ],
    ),
    (
        "TPM Core Driver Services",
        [
            "system32\\drivers\\acpisim.sys",
            "system32\\drivers\\acpi.sys",
        ],
    ),
]


def sort_by_hardcoded_service_lists(entries: OrderedEntryList[Entry]) -> None:
    partitioner = FrontPartitioner(entries)

    for list_name, image_paths in reversed(HARDCODED_SERVICE_LISTS):
        suffix = f', loaded earlier due to hardcoded "{list_name}" list'

        for image_path in reversed(image_paths):
            lowered = image_path.lower()
            moved = partitioner.move_to_front(lambda entry: entry.image_path.lower() == lowered)

            for handle in moved:
                entries[handle] = entries[handle].with_reason_suffix(suffix)

            if moved:
                logger.debug('Moved %s to the front (hardcoded "%s" list)', image_path, list_name)
