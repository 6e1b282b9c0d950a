"""Tests for sorting boot services by tag and group."""

from nt_load_order.steps.sort_by_tag_and_group import (
    UNLISTED_TAG_INDEX,
    compare_tags,
    get_tag_index,
    sort_by_tag_and_group,
)
from nt_load_order.types import Entry, RegistryInfo, TagOrder
from tests.test_utils.builders import entry


def _sorted_names(
    entries: list[Entry],
    groups: dict[str, TagOrder] | None = None,
    service_group_order: list[str] | None = None,
) -> list[str]:
    registry_info = RegistryInfo(
        entries=entries, groups=groups or {}, service_group_order=service_group_order or []
    )
    return [e.name for e in sort_by_tag_and_group(registry_info)]


def test_tagged_grouped_before_tagged_before_untagged() -> None:
    a = entry("A", tag=5, group="G")
    b = entry("B")
    c = entry("C", tag=5)

    assert _sorted_names([b, c, a]) == ["A", "C", "B"]
    assert _sorted_names([a, b, c]) == ["A", "C", "B"]


def test_group_order_list_positions_then_unlisted_then_untagged() -> None:
    groups = {"g": TagOrder([10, 20])}
    entries = [
        entry("untagged", group="G"),
        entry("tag30", group="G", tag=30),
        entry("tag20", group="G", tag=20),
        entry("tag10", group="G", tag=10),
    ]

    assert _sorted_names(entries, groups) == ["tag10", "tag20", "tag30", "untagged"]


def test_raw_tag_is_index_without_group_order_list() -> None:
    entries = [entry("t1", group="G", tag=1), entry("t3", group="G", tag=3)]

    assert _sorted_names(entries) == ["t1", "t3"]


def test_equal_entries_keep_reversed_registry_order() -> None:
    entries = [entry("first"), entry("second"), entry("third")]

    assert _sorted_names(entries) == ["third", "second", "first"]


def test_service_group_order_moves_groups_to_front() -> None:
    entries = [
        entry("other"),
        entry("late", group="Late"),
        entry("early", group="Early"),
        entry("ungrouped"),
    ]

    names = _sorted_names(entries, service_group_order=["EARLY", "late"])

    assert names == ["early", "late", "ungrouped", "other"]


def test_groups_sorted_by_tag_within_group() -> None:
    groups = {"boot bus extender": TagOrder([2, 1])}
    entries = [
        entry("pci", group="Boot Bus Extender", tag=1),
        entry("acpi", group="Boot Bus Extender", tag=2),
        entry("disk", group="SCSI Class", tag=1),
    ]

    names = _sorted_names(entries, groups, ["Boot Bus Extender", "SCSI Class"])

    assert names == ["acpi", "pci", "disk"]


def test_compare_tags() -> None:
    groups = {"g": TagOrder([7])}

    assert compare_tags(entry("a"), entry("b"), groups) == 0
    assert compare_tags(entry("a", tag=1), entry("b"), groups) < 0
    assert compare_tags(entry("a"), entry("b", tag=1), groups) > 0
    assert compare_tags(entry("a", tag=1), entry("b", tag=9), groups) == 0
    assert compare_tags(entry("a", tag=9), entry("b", tag=1, group="H"), groups) > 0
    assert compare_tags(entry("a", tag=7, group="G"), entry("b", tag=1, group="G"), groups) < 0


def test_get_tag_index() -> None:
    groups = {"g": TagOrder([10, 20])}

    assert get_tag_index("g", 10, groups) == 1
    assert get_tag_index("g", 20, groups) == 2
    assert get_tag_index("g", 30, groups) == UNLISTED_TAG_INDEX
    assert get_tag_index("h", 30, groups) == 30
