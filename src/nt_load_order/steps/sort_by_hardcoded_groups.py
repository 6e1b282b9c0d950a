"""Move the groups the boot loader always loads first to the front."""

import logging

from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.steps.front_partition import FrontPartitioner
from nt_load_order.types import Entry

logger = logging.getLogger(__name__)

HARDCODED_GROUPS = [
    "Early-Launch",
    "Core Platform Extensions",
    "Core Security Extensions",
]


def sort_by_hardcoded_groups(entries: OrderedEntryList[Entry]) -> None:
    partitioner = FrontPartitioner(entries)

    for group_name in reversed(HARDCODED_GROUPS):
        lowered = group_name.lower()
        moved = partitioner.move_to_front(
            lambda entry: entry.group is not None and entry.group.search_key == lowered
        )

        suffix = f', loaded earlier due to hardcoded "{group_name}" group'
        for handle in moved:
            entries[handle] = entries[handle].with_reason_suffix(suffix)

        logger.debug('Moved %d entries of hardcoded group "%s"', len(moved), group_name)
