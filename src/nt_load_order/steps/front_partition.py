"""Stable move-to-front partitioning.

Several passes move all entries matching some key to the front of the list
while keeping the relative order on both sides. When a pass has several keys
that must end up in a given order, it calls move_to_front() once per key in
reverse order on the same FrontPartitioner: the key processed last lands
nearest the front.
"""

from collections.abc import Callable

from nt_load_order.entry_list import Handle, OrderedEntryList
from nt_load_order.types import Entry


class FrontPartitioner:
    """Moves matching entries to the front across a sequence of keys.

    The first entry moved by any call marks the boundary between the already
    sorted front part and the unsorted rest. Later calls stop scanning when
    they reach it, so entries placed by an earlier call are never moved again.
    """

    def __init__(self, entries: OrderedEntryList[Entry]) -> None:
        self._entries = entries
        self._first_moved: Handle | None = None

    def move_to_front(self, predicate: Callable[[Entry], bool]) -> list[Handle]:
        """Move all unsorted entries matching predicate to the front.

        Walks from the back of the list towards the front, moving each match
        before the current front entry. Matches therefore keep their original
        relative order.

        Returns:
            Handles of the moved entries, in the order they were visited (back to front)
        """
        entries = self._entries
        moved: list[Handle] = []

        current = entries.back()
        while current is not None:
            # Capture the predecessor before current may be moved away from it.
            previous = entries.previous(current)

            if predicate(entries[current]):
                front = entries.front()
                if front is not None and current != front:
                    entries.move_before(current, front)
                if self._first_moved is None:
                    self._first_moved = current
                moved.append(current)

            if previous == self._first_moved:
                break
            current = previous

        return moved
