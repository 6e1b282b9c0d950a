"""Data types shared by the load order pipeline."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class EntryGroup:
    """Load order group of a service.

    Two groups are the same iff their search keys match.
    """

    display_name: str
    search_key: str

    @staticmethod
    def from_display_name(display_name: str) -> "EntryGroup":
        return EntryGroup(display_name=display_name, search_key=display_name.lower())


@dataclass(frozen=True)
class Entry:
    """One module in the computed load order.

    Attributes:
        name: Service name, or file name for imports and kernel binaries
        image_path: Backslash-separated path relative to the system root
        group: Group from the service's "Group" value, if any
        tag: Tag from the service's "Tag" value, if any
        reason: Why this module is loaded here. Later passes only ever append to it.
        is_kernel_binary: True for the fixed-position kernel binaries
    """

    name: str
    image_path: str
    group: EntryGroup | None
    tag: int | None
    reason: str
    is_kernel_binary: bool = False

    def with_reason_suffix(self, suffix: str) -> "Entry":
        return replace(self, reason=self.reason + suffix)


class TagOrder:
    """Ordered, duplicate-free set of tags decoded from a GroupOrderList value."""

    def __init__(self, tags: Iterable[int] = ()) -> None:
        self._positions: dict[int, int] = {}
        for tag in tags:
            if tag not in self._positions:
                self._positions[tag] = len(self._positions)

    def __contains__(self, tag: object) -> bool:
        return tag in self._positions

    def __iter__(self) -> Iterator[int]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagOrder):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"TagOrder({list(self)!r})"

    def position(self, tag: int) -> int | None:
        """Return the 0-based position of tag, or None if it is not in the set."""
        return self._positions.get(tag)


@dataclass(frozen=True)
class RegistryInfo:
    """Unsorted boot services plus the ordering metadata read from the registry.

    Attributes:
        entries: Boot services in registry enumeration order
        groups: Lowercased group name -> tag order from GroupOrderList
        service_group_order: Group names from ServiceGroupOrder\\List
    """

    entries: list[Entry]
    groups: dict[str, TagOrder]
    service_group_order: list[str]
