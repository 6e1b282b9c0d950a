"""Data types for the registry integration."""

from dataclasses import dataclass
from enum import IntEnum

from nt_load_order.errors import RegistryDecodeError


class RegistryValueType(IntEnum):
    """Registry value types (REG_*)."""

    NONE = 0
    SZ = 1
    EXPAND_SZ = 2
    BINARY = 3
    DWORD = 4
    DWORD_BIG_ENDIAN = 5
    LINK = 6
    MULTI_SZ = 7
    RESOURCE_LIST = 8
    FULL_RESOURCE_DESCRIPTOR = 9
    RESOURCE_REQUIREMENTS_LIST = 10
    QWORD = 11


_STRING_TYPES = (RegistryValueType.SZ, RegistryValueType.EXPAND_SZ)
_DWORD_TYPES = (RegistryValueType.DWORD, RegistryValueType.DWORD_BIG_ENDIAN)


@dataclass(frozen=True)
class RegistryValue:
    """A registry value with its data already decoded by the backend.

    Backends store REG_DWORD data as int, REG_SZ/REG_EXPAND_SZ as str,
    REG_MULTI_SZ as list[str] and everything else as bytes.

    value_type is kept as a plain int because hives may contain types outside
    RegistryValueType.
    """

    name: str
    value_type: int
    data: int | str | list[str] | bytes

    def dword(self) -> int:
        if self.value_type not in _DWORD_TYPES or not isinstance(self.data, int):
            raise RegistryDecodeError(self._mismatch("a DWORD"))
        return self.data

    def string(self) -> str:
        if self.value_type not in _STRING_TYPES or not isinstance(self.data, str):
            raise RegistryDecodeError(self._mismatch("a string"))
        return self.data

    def multi_string(self) -> list[str]:
        if self.value_type != RegistryValueType.MULTI_SZ or not isinstance(self.data, list):
            raise RegistryDecodeError(self._mismatch("a multi-string"))
        return list(self.data)

    def binary(self) -> bytes:
        if not isinstance(self.data, bytes):
            raise RegistryDecodeError(self._mismatch("binary data"))
        return self.data

    def _mismatch(self, expected: str) -> str:
        return f'Value "{self.name}" of type {self.value_type} does not hold {expected}'
