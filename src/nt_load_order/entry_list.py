"""Ordered list with stable handles.

OrderedEntryList keeps its elements in an arena of slots. Slots are linked by
index into a doubly-linked list, and freed slots are reused through a free list.
A Handle names one slot together with the generation it was issued for, so a
handle stays valid while its element is moved around and becomes invalid once
the element is removed.

All positional operations (push, insert, move, remove, navigation) are O(1).
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Handle:
    """Stable reference to one element of an OrderedEntryList."""

    index: int
    generation: int


@dataclass(slots=True)
class _Slot:
    value: Any
    previous: int | None
    next: int | None
    generation: int
    occupied: bool


class OrderedEntryList(Generic[T]):
    """Sequence container whose elements keep their handles across relocation.

    Passing a handle that was never issued by this list, or whose element has
    been removed, is a programming error and raises ValueError.
    """

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._slots: list[_Slot] = []
        self._free: list[int] = []
        self._head: int | None = None
        self._tail: int | None = None
        self._length = 0

        for value in values:
            self.push_back(value)

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[T]:
        """Iterate over the values front to back without consuming them."""
        index = self._head
        while index is not None:
            slot = self._slots[index]
            yield slot.value
            index = slot.next

    def __getitem__(self, handle: Handle) -> T:
        return self._slot(handle).value

    def __setitem__(self, handle: Handle, value: T) -> None:
        self._slot(handle).value = value

    def __repr__(self) -> str:
        return f"OrderedEntryList({list(self)!r})"

    def handles(self) -> Iterator[Handle]:
        """Iterate over the handles front to back."""
        index = self._head
        while index is not None:
            slot = self._slots[index]
            yield Handle(index, slot.generation)
            index = slot.next

    def drain(self) -> Iterator[T]:
        """Remove and yield all values front to back."""
        while self._head is not None:
            slot = self._slots[self._head]
            yield self.remove(Handle(self._head, slot.generation))

    def front(self) -> Handle | None:
        return self._handle_at(self._head)

    def back(self) -> Handle | None:
        return self._handle_at(self._tail)

    def next(self, handle: Handle) -> Handle | None:
        return self._handle_at(self._slot(handle).next)

    def previous(self, handle: Handle) -> Handle | None:
        return self._handle_at(self._slot(handle).previous)

    def push_front(self, value: T) -> Handle:
        index = self._allocate(value)
        if self._head is None:
            self._head = index
            self._tail = index
        else:
            self._link_before(index, self._head)
        return self._handle_at_unchecked(index)

    def push_back(self, value: T) -> Handle:
        index = self._allocate(value)
        if self._tail is None:
            self._head = index
            self._tail = index
        else:
            self._link_after(index, self._tail)
        return self._handle_at_unchecked(index)

    def insert_after(self, handle: Handle, value: T) -> Handle:
        """Insert value directly after the element named by handle."""
        self._slot(handle)
        index = self._allocate(value)
        self._link_after(index, handle.index)
        return self._handle_at_unchecked(index)

    def insert_before(self, handle: Handle, value: T) -> Handle:
        """Insert value directly before the element named by handle."""
        self._slot(handle)
        index = self._allocate(value)
        self._link_before(index, handle.index)
        return self._handle_at_unchecked(index)

    def move_before(self, handle: Handle, target: Handle) -> None:
        """Relocate the element named by handle to directly before target.

        Both handles stay valid. Moving an element before itself is rejected.
        """
        self._slot(handle)
        self._slot(target)
        if handle.index == target.index:
            raise ValueError("Cannot move an element before itself")

        self._unlink(handle.index)
        self._link_before(handle.index, target.index)

    def remove(self, handle: Handle) -> T:
        """Remove the element named by handle and return its value."""
        slot = self._slot(handle)
        self._unlink(handle.index)

        value = slot.value
        slot.value = None
        slot.occupied = False
        slot.generation += 1
        self._free.append(handle.index)
        self._length -= 1
        return value

    def _slot(self, handle: Handle) -> _Slot:
        if not 0 <= handle.index < len(self._slots):
            raise ValueError(f"Invalid handle {handle}")
        slot = self._slots[handle.index]
        if not slot.occupied or slot.generation != handle.generation:
            raise ValueError(f"Stale handle {handle}")
        return slot

    def _handle_at(self, index: int | None) -> Handle | None:
        if index is None:
            return None
        return self._handle_at_unchecked(index)

    def _handle_at_unchecked(self, index: int) -> Handle:
        return Handle(index, self._slots[index].generation)

    def _allocate(self, value: T) -> int:
        self._length += 1
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.value = value
            slot.previous = None
            slot.next = None
            slot.occupied = True
            return index

        self._slots.append(_Slot(value=value, previous=None, next=None, generation=0, occupied=True))
        return len(self._slots) - 1

    def _unlink(self, index: int) -> None:
        slot = self._slots[index]

        if slot.previous is None:
            self._head = slot.next
        else:
            self._slots[slot.previous].next = slot.next

        if slot.next is None:
            self._tail = slot.previous
        else:
            self._slots[slot.next].previous = slot.previous

        slot.previous = None
        slot.next = None

    def _link_before(self, index: int, target: int) -> None:
        slot = self._slots[index]
        target_slot = self._slots[target]

        slot.previous = target_slot.previous
        slot.next = target
        if target_slot.previous is None:
            self._head = index
        else:
            self._slots[target_slot.previous].next = index
        target_slot.previous = index

    def _link_after(self, index: int, target: int) -> None:
        slot = self._slots[index]
        target_slot = self._slots[target]

        slot.previous = target
        slot.next = target_slot.next
        if target_slot.next is None:
            self._tail = index
        else:
            self._slots[target_slot.next].previous = index
        target_slot.next = index
