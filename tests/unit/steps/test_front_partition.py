"""Tests for the stable move-to-front partitioning."""

from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.steps.front_partition import FrontPartitioner
from nt_load_order.types import Entry
from tests.test_utils.builders import entry


def _names(entries: OrderedEntryList[Entry]) -> list[str]:
    return [e.name for e in entries]


def test_matches_move_to_front_in_original_order() -> None:
    entries = OrderedEntryList(
        [
            entry("a"),
            entry("x1", group="X"),
            entry("b"),
            entry("x2", group="X"),
            entry("c"),
            entry("x3", group="X"),
        ]
    )

    moved = FrontPartitioner(entries).move_to_front(lambda e: e.group is not None)

    assert _names(entries) == ["x1", "x2", "x3", "a", "b", "c"]
    assert [entries[handle].name for handle in moved] == ["x3", "x2", "x1"]


def test_no_match_leaves_list_unchanged() -> None:
    entries = OrderedEntryList([entry("a"), entry("b")])

    moved = FrontPartitioner(entries).move_to_front(lambda e: False)

    assert moved == []
    assert _names(entries) == ["a", "b"]


def test_empty_list() -> None:
    entries: OrderedEntryList[Entry] = OrderedEntryList()

    assert FrontPartitioner(entries).move_to_front(lambda e: True) == []


def test_front_entry_matching_stays_in_place() -> None:
    entries = OrderedEntryList([entry("x1", group="X"), entry("a"), entry("x2", group="X")])

    FrontPartitioner(entries).move_to_front(lambda e: e.group is not None)

    assert _names(entries) == ["x1", "x2", "a"]


def test_keys_processed_in_reverse_end_up_in_key_order() -> None:
    entries = OrderedEntryList(
        [
            entry("k3a", group="K3"),
            entry("rest1"),
            entry("k1a", group="K1"),
            entry("k2a", group="K2"),
            entry("k3b", group="K3"),
            entry("k1b", group="K1"),
            entry("rest2"),
            entry("k2b", group="K2"),
        ]
    )
    partitioner = FrontPartitioner(entries)

    for key in reversed(["k1", "k2", "k3"]):
        partitioner.move_to_front(lambda e: e.group is not None and e.group.search_key == key)

    assert _names(entries) == ["k1a", "k1b", "k2a", "k2b", "k3a", "k3b", "rest1", "rest2"]


def test_entries_placed_by_an_earlier_key_are_not_rescanned() -> None:
    entries = OrderedEntryList([entry("a"), entry("both", group="X", tag=1), entry("b")])
    partitioner = FrontPartitioner(entries)

    first = partitioner.move_to_front(lambda e: e.tag == 1)
    second = partitioner.move_to_front(lambda e: e.group is not None)

    assert [entries[handle].name for handle in first] == ["both"]
    assert second == []
    assert _names(entries) == ["both", "a", "b"]
