"""API Set namespace decoding.

Windows redirects imports of virtual DLL names such as
"api-ms-win-core-synch-l1-2-0.dll" to the DLL that implements them on the
running OS build. The mapping is stored in the ".apiset" section of
System32\\apisetschema.dll.

Only schema version 6 (Windows 10 and later) is supported. Its layout, all
little-endian and with offsets relative to the start of the section:

    namespace header (28 bytes):
        Version, Size, Flags, Count, EntryOffset, HashOffset, HashFactor
    Count namespace entries at EntryOffset (24 bytes each):
        Flags, NameOffset, NameLength, HashedLength, ValueOffset, ValueCount
    ValueCount value entries at ValueOffset (20 bytes each):
        Flags, NameOffset, NameLength, ValueOffset, ValueLength

Strings are UTF-16LE, lengths are in bytes.
"""

import logging
import struct
from collections.abc import Iterator
from dataclasses import dataclass

from nt_load_order.errors import ApiSetError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMA_VERSION = 6

_HEADER = struct.Struct("<7I")
_NAMESPACE_ENTRY = struct.Struct("<6I")
_VALUE_ENTRY = struct.Struct("<5I")

_SEALED_FLAG = 0x1


@dataclass(frozen=True)
class ApiSetRedirection:
    """One candidate host of an API Set.

    importing_module is empty for the default redirection; otherwise the
    redirection only applies to imports made by that module.
    """

    importing_module: str
    host_module: str


@dataclass(frozen=True)
class ApiSetNamespaceEntry:
    """One API Set and its candidate redirections, in schema order."""

    name: str
    hashed_name: str
    sealed: bool
    redirections: list[ApiSetRedirection]


def _lookup_key(api_set_name: str) -> str:
    # The loader ignores everything from the last hyphen on (the minor version).
    hyphen = api_set_name.rfind("-")
    if hyphen != -1:
        api_set_name = api_set_name[:hyphen]
    return api_set_name.lower()


class ApiSetNamespace:
    """Lookup table from virtual API Set names to their redirections."""

    def __init__(self, entries: list[ApiSetNamespaceEntry]) -> None:
        self._entries = {entry.hashed_name: entry for entry in entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ApiSetNamespaceEntry]:
        return iter(self._entries.values())

    def find(self, api_set_name: str) -> ApiSetNamespaceEntry | None:
        """Find the namespace entry for an API Set name without its ".dll" extension.

        The name is matched case-insensitively up to its last hyphen, so
        "api-ms-win-core-foo-l1-1-0" finds the entry "api-ms-win-core-foo-l1-1-1".
        """
        return self._entries.get(_lookup_key(api_set_name))

    @staticmethod
    def from_bytes(data: bytes) -> "ApiSetNamespace":
        """Decode the contents of an .apiset section.

        Raises:
            ApiSetError: If the schema version is unsupported or the data is truncated
        """
        if len(data) < _HEADER.size:
            raise ApiSetError(f"API Set namespace is truncated ({len(data)} bytes)")

        header = _HEADER.unpack_from(data, 0)
        version, count, entry_offset = header[0], header[3], header[4]
        if version != SUPPORTED_SCHEMA_VERSION:
            raise ApiSetError(
                f"Unsupported API Set schema version {version}, "
                f"only version {SUPPORTED_SCHEMA_VERSION} is supported"
            )

        entries = [
            _read_namespace_entry(data, entry_offset + index * _NAMESPACE_ENTRY.size)
            for index in range(count)
        ]
        logger.debug("Decoded %d API Set namespace entries", len(entries))
        return ApiSetNamespace(entries)


def _read_namespace_entry(data: bytes, offset: int) -> ApiSetNamespaceEntry:
    flags, name_offset, name_length, hashed_length, value_offset, value_count = _unpack(
        _NAMESPACE_ENTRY, data, offset, "namespace entry"
    )
    name = _read_string(data, name_offset, name_length)
    hashed_name = _read_string(data, name_offset, min(hashed_length, name_length))

    redirections = []
    for index in range(value_count):
        _value_flags, importer_offset, importer_length, host_offset, host_length = _unpack(
            _VALUE_ENTRY, data, value_offset + index * _VALUE_ENTRY.size, f'value entry of "{name}"'
        )
        redirections.append(
            ApiSetRedirection(
                importing_module=_read_string(data, importer_offset, importer_length),
                host_module=_read_string(data, host_offset, host_length),
            )
        )

    return ApiSetNamespaceEntry(
        name=name,
        hashed_name=hashed_name.lower(),
        sealed=bool(flags & _SEALED_FLAG),
        redirections=redirections,
    )


def _unpack(layout: struct.Struct, data: bytes, offset: int, what: str) -> tuple[int, ...]:
    if offset < 0 or offset + layout.size > len(data):
        raise ApiSetError(f"API Set {what} at offset {offset:#x} lies outside the namespace")
    return layout.unpack_from(data, offset)


def _read_string(data: bytes, offset: int, length: int) -> str:
    if length == 0:
        return ""
    if offset + length > len(data):
        raise ApiSetError(f"API Set string at offset {offset:#x} lies outside the namespace")
    try:
        return data[offset : offset + length].decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise ApiSetError(f"API Set string at offset {offset:#x} is not valid UTF-16") from e
