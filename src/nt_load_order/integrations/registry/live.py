"""Live registry implementation using winreg.

Reads HKEY_LOCAL_MACHINE\\SYSTEM of the running Windows system. Registry handles
are opened per operation and closed before returning, so a key object only
remembers its path.

This module imports winreg and can therefore only be imported on Windows.
"""

import winreg

from nt_load_order.errors import (
    RegistryError,
    RegistryKeyNotFoundError,
    RegistryValueNotFoundError,
)
from nt_load_order.integrations.registry.abc import Registry, RegistryKey
from nt_load_order.integrations.registry.enumeration import enumerate_registry_items
from nt_load_order.integrations.registry.types import RegistryValue

_SYSTEM_KEY = "SYSTEM"


def _open(path: str) -> winreg.HKEYType:
    try:
        return winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, path)
    except FileNotFoundError as e:
        raise RegistryKeyNotFoundError(f'Did not find "HKLM\\{path}" key') from e
    except OSError as e:
        raise RegistryError(f'Failed to open "HKLM\\{path}" key: {e}') from e


class LiveRegistryKey(RegistryKey):
    """Key node of the running system's registry."""

    def __init__(self, name: str, path: str) -> None:
        self._name = name
        self._path = path

    @property
    def name(self) -> str:
        return self._name

    def subkey(self, name: str) -> RegistryKey:
        path = f"{self._path}\\{name}"
        with _open(path):
            pass
        return LiveRegistryKey(name, path)

    def subkeys(self) -> list[RegistryKey]:
        with _open(self._path) as handle:
            names = enumerate_registry_items(
                lambda index: winreg.EnumKey(handle, index),
                f'subkeys of key "HKLM\\{self._path}"',
            )
        return [LiveRegistryKey(name, f"{self._path}\\{name}") for name in names]

    def value(self, name: str) -> RegistryValue:
        with _open(self._path) as handle:
            try:
                data, value_type = winreg.QueryValueEx(handle, name)
            except FileNotFoundError as e:
                raise RegistryValueNotFoundError(
                    f'Key node "{self._name}" has no value "{name}"'
                ) from e
            except OSError as e:
                raise RegistryError(
                    f'Failed to read value "{name}" of key node "{self._name}": {e}'
                ) from e
        return RegistryValue(name=name, value_type=value_type, data=_normalize(data))

    def values(self) -> list[RegistryValue]:
        with _open(self._path) as handle:
            raw_values = enumerate_registry_items(
                lambda index: winreg.EnumValue(handle, index),
                f'values of key "HKLM\\{self._path}"',
            )
        return [
            RegistryValue(name=name, value_type=value_type, data=_normalize(data))
            for name, data, value_type in raw_values
        ]


def _normalize(data: object) -> int | str | list[str] | bytes:
    # winreg returns None for zero-length REG_BINARY/REG_NONE data
    if data is None:
        return b""
    if isinstance(data, (int, str, bytes)):
        return data
    if isinstance(data, list):
        return [str(item) for item in data]
    return bytes(data)  # type: ignore[call-overload]


class LiveRegistry(Registry):
    """Production implementation reading HKLM\\SYSTEM of the running system."""

    def key(self, path: str) -> RegistryKey:
        full_path = f"{_SYSTEM_KEY}\\{path}"
        with _open(full_path):
            pass
        name = path.rsplit("\\", 1)[-1]
        return LiveRegistryKey(name, full_path)

    def describe(self) -> str:
        return "registry of the running system"
