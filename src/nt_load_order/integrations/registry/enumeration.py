"""Index based enumeration of registry subkeys and values."""

from collections.abc import Callable
from typing import TypeVar

from nt_load_order.errors import RegistryError

# Windows error code reported once the index runs past the last item
ERROR_NO_MORE_ITEMS = 259

T = TypeVar("T")


def enumerate_registry_items(read_item: Callable[[int], T], what: str) -> list[T]:
    """Call read_item with increasing indices until the items are exhausted.

    Args:
        read_item: Reads the item at an index, e.g. a winreg.EnumKey call.
        what: Description of the enumerated items for error messages.

    Raises:
        RegistryError: If reading an item fails for any other reason than
            ERROR_NO_MORE_ITEMS
    """
    items: list[T] = []
    index = 0
    while True:
        try:
            items.append(read_item(index))
        except OSError as e:
            if getattr(e, "winerror", None) == ERROR_NO_MORE_ITEMS:
                return items
            raise RegistryError(f"Failed to enumerate {what}: {e}") from e
        index += 1
