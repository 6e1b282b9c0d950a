"""Offline SYSTEM hive implementation using python-registry.

Reads <system_root>\\system32\\config\\SYSTEM of a Windows installation that is
not currently running (e.g. a mounted disk image).
"""

import logging
from pathlib import Path

from Registry import Registry as RegistryModule
from Registry import RegistryParse

from nt_load_order.errors import (
    HiveOpenError,
    RegistryError,
    RegistryKeyNotFoundError,
    RegistryValueNotFoundError,
)
from nt_load_order.integrations.registry.abc import Registry, RegistryKey
from nt_load_order.integrations.registry.types import RegistryValue
from nt_load_order.paths import resolve_case_insensitive

logger = logging.getLogger(__name__)


def system_hive_path(system_root: Path) -> Path:
    """Location of the SYSTEM hive below a system root."""
    return resolve_case_insensitive(system_root / "system32" / "config" / "SYSTEM")


def _to_registry_value(value: "RegistryModule.RegistryValue") -> RegistryValue:
    try:
        return RegistryValue(name=value.name(), value_type=value.value_type(), data=value.value())
    except RegistryParse.RegistryException as e:
        raise RegistryError(f'Failed to read data of value "{value.name()}": {e}') from e


class HiveRegistryKey(RegistryKey):
    """Key node of a parsed hive file."""

    def __init__(self, key: "RegistryModule.RegistryKey") -> None:
        self._key = key
        self._name = key.name()

    @property
    def name(self) -> str:
        return self._name

    def subkey(self, name: str) -> RegistryKey:
        try:
            return HiveRegistryKey(self._key.subkey(name))
        except RegistryModule.RegistryKeyNotFoundException as e:
            raise RegistryKeyNotFoundError(f'Key node "{self._name}" has no subkey "{name}"') from e
        except RegistryParse.RegistryException as e:
            raise RegistryError(
                f'Failed to read subkey "{name}" of key node "{self._name}": {e}'
            ) from e

    def subkeys(self) -> list[RegistryKey]:
        try:
            return [HiveRegistryKey(key) for key in self._key.subkeys()]
        except RegistryParse.RegistryException as e:
            raise RegistryError(
                f'Failed to enumerate subkeys of key node "{self._name}": {e}'
            ) from e

    def value(self, name: str) -> RegistryValue:
        try:
            value = self._key.value(name)
        except RegistryModule.RegistryValueNotFoundException as e:
            raise RegistryValueNotFoundError(
                f'Key node "{self._name}" has no value "{name}"'
            ) from e
        except RegistryParse.RegistryException as e:
            raise RegistryError(
                f'Failed to read value "{name}" of key node "{self._name}": {e}'
            ) from e
        return _to_registry_value(value)

    def values(self) -> list[RegistryValue]:
        try:
            values = self._key.values()
        except RegistryParse.RegistryException as e:
            raise RegistryError(
                f'Failed to enumerate values of key node "{self._name}": {e}'
            ) from e
        return [_to_registry_value(value) for value in values]


class HiveRegistry(Registry):
    """Production implementation reading the SYSTEM hive file of a system root.

    The whole hive is read into memory on construction; no file handle stays open.
    """

    def __init__(self, system_root: Path) -> None:
        self._path = system_hive_path(system_root)
        logger.debug("Loading SYSTEM hive from %s", self._path)

        try:
            self._hive = RegistryModule.Registry(str(self._path))
        except OSError as e:
            raise HiveOpenError(f'Could not read file "{self._path}": {e}') from e
        except RegistryParse.RegistryException as e:
            raise HiveOpenError(f'Could not parse hive file "{self._path}": {e}') from e

    def key(self, path: str) -> RegistryKey:
        try:
            return HiveRegistryKey(self._hive.open(path))
        except RegistryModule.RegistryKeyNotFoundException as e:
            raise RegistryKeyNotFoundError(f'Did not find "{path}" key in {self._path}') from e
        except RegistryParse.RegistryException as e:
            raise RegistryError(f'Failed to open "{path}" key in {self._path}: {e}') from e

    def describe(self) -> str:
        return f"SYSTEM hive {self._path}"
