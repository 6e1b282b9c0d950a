"""Order boot services by their Tag and Group the way the boot loader does."""

import logging

from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.steps.front_partition import FrontPartitioner
from nt_load_order.types import Entry, RegistryInfo, TagOrder

logger = logging.getLogger(__name__)

# Index of a tag that its group's GroupOrderList does not mention.
UNLISTED_TAG_INDEX = 0xFFFF_FFFE


def sort_by_tag_and_group(registry_info: RegistryInfo) -> OrderedEntryList[Entry]:
    """Build the entry list from registry_info, sorted by tag and then by group.

    The entries are loaded in reverse registry order, which becomes the
    tie-break order for entries with equal sort index.
    """
    entries = OrderedEntryList(reversed(registry_info.entries))
    sort_by_tag(entries, registry_info.groups)
    sort_by_group(entries, registry_info.service_group_order)
    logger.debug("Sorted %d entries by tag and group", len(entries))
    return entries


def sort_by_tag(entries: OrderedEntryList[Entry], groups: dict[str, TagOrder]) -> None:
    """Insertion sort over the linked list using compare_tags()."""
    start = entries.front()
    end = entries.back()
    if start is None or start == end:
        return

    current = start
    while current != end:
        next_handle = entries.next(current)
        assert next_handle is not None

        if compare_tags(entries[current], entries[next_handle], groups) > 0:
            # Find the first element that next_handle does not sort after.
            target = entries.front()
            while (
                target is not None
                and target != current
                and compare_tags(entries[next_handle], entries[target], groups) > 0
            ):
                target = entries.next(target)
            assert target is not None
            entries.move_before(next_handle, target)

        current = next_handle


def sort_by_group(entries: OrderedEntryList[Entry], service_group_order: list[str]) -> None:
    """Move the members of each ServiceGroupOrder group to the front, first group first."""
    partitioner = FrontPartitioner(entries)
    for group_name in reversed(service_group_order):
        lowered = group_name.lower()
        partitioner.move_to_front(
            lambda entry: entry.group is not None and entry.group.search_key == lowered
        )


def compare_tags(a: Entry, b: Entry, groups: dict[str, TagOrder]) -> int:
    """Three-way comparison of two entries by tag.

    Tagged entries sort before untagged ones and grouped before ungrouped.
    Tagged, grouped entries are compared by get_tag_index().

    Returns:
        A negative number if a sorts first, a positive number if b sorts first, 0 on a tie
    """
    if a.tag is None and b.tag is None:
        return 0
    if a.tag is None:
        return 1
    if b.tag is None:
        return -1

    if a.group is None and b.group is None:
        return 0
    if a.group is None:
        return 1
    if b.group is None:
        return -1

    a_index = get_tag_index(a.group.search_key, a.tag, groups)
    b_index = get_tag_index(b.group.search_key, b.tag, groups)
    return (a_index > b_index) - (a_index < b_index)


def get_tag_index(search_key: str, tag: int, groups: dict[str, TagOrder]) -> int:
    """Sort index of a tag within its group.

    1-based position of the tag in the group's GroupOrderList if it is listed,
    UNLISTED_TAG_INDEX if the group has a GroupOrderList without the tag, and
    the tag itself if the group has no GroupOrderList.
    """
    tag_order = groups.get(search_key)
    if tag_order is None:
        return tag

    position = tag_order.position(tag)
    if position is None:
        return UNLISTED_TAG_INDEX
    return position + 1
