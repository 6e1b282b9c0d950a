"""Registry data source interface.

The load order pipeline reads the SYSTEM hive through this interface, so it
does not care whether the data comes from the running system or from the
SYSTEM hive file of an offline Windows installation.

Architecture:
- Registry: Opens key nodes by backslash-separated path below the SYSTEM root
- RegistryKey: Navigates subkeys and reads values
- LiveRegistry: Running system via winreg (Windows only)
- HiveRegistry: Offline SYSTEM hive file via python-registry
- FakeRegistry: In-memory tree for tests
"""

from abc import ABC, abstractmethod

from nt_load_order.integrations.registry.types import RegistryValue


class RegistryKey(ABC):
    """A key node of the registry.

    All lookups by name are case-insensitive, like the Windows registry.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this key (last path component)."""
        ...

    @abstractmethod
    def subkey(self, name: str) -> "RegistryKey":
        """Open a direct subkey.

        Raises:
            RegistryKeyNotFoundError: If there is no such subkey
            RegistryError: If the subkey cannot be read
        """
        ...

    @abstractmethod
    def subkeys(self) -> list["RegistryKey"]:
        """List all direct subkeys in enumeration order."""
        ...

    @abstractmethod
    def value(self, name: str) -> RegistryValue:
        """Read a value of this key.

        Raises:
            RegistryValueNotFoundError: If there is no such value
            RegistryError: If the value cannot be read
        """
        ...

    @abstractmethod
    def values(self) -> list[RegistryValue]:
        """List all values of this key in enumeration order."""
        ...


class Registry(ABC):
    """Abstract interface for reading the SYSTEM hive."""

    @abstractmethod
    def key(self, path: str) -> RegistryKey:
        """Open a key by its backslash-separated path relative to the SYSTEM root.

        Raises:
            RegistryKeyNotFoundError: If any component of the path does not exist
            RegistryError: If the key cannot be read
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description of the data source, for logs and errors."""
        ...
