"""Tests for index based registry enumeration."""

import pytest

from nt_load_order.errors import RegistryError
from nt_load_order.integrations.registry.enumeration import (
    ERROR_NO_MORE_ITEMS,
    enumerate_registry_items,
)


def _windows_error(winerror: int, message: str) -> OSError:
    error = OSError(message)
    error.winerror = winerror  # type: ignore[attr-defined]
    return error


def _reader(items: list[str], failure: OSError):
    def read_item(index: int) -> str:
        if index < len(items):
            return items[index]
        raise failure

    return read_item


def test_stops_at_no_more_items() -> None:
    read_item = _reader(
        ["acpi", "disk", "Ntfs"], _windows_error(ERROR_NO_MORE_ITEMS, "No more data is available")
    )

    assert enumerate_registry_items(read_item, "subkeys") == ["acpi", "disk", "Ntfs"]


def test_empty_key() -> None:
    read_item = _reader([], _windows_error(ERROR_NO_MORE_ITEMS, "No more data is available"))

    assert enumerate_registry_items(read_item, "values") == []


def test_access_denied_midway_is_an_error() -> None:
    read_item = _reader(["acpi", "disk", "Ntfs"], PermissionError(13, "Access is denied"))

    with pytest.raises(RegistryError, match='Failed to enumerate subkeys of key "Services"'):
        enumerate_registry_items(read_item, 'subkeys of key "Services"')


def test_other_windows_error_is_an_error() -> None:
    # ERROR_INVALID_HANDLE
    read_item = _reader(["acpi"], _windows_error(6, "The handle is invalid"))

    with pytest.raises(RegistryError, match="The handle is invalid"):
        enumerate_registry_items(read_item, "values")
