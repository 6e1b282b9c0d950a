"""Fake Registry implementation for testing.

FakeRegistry serves a tree of FakeRegistryKey nodes built in memory, so tests
can describe exactly the services and group metadata a scenario needs.
"""

from nt_load_order.errors import RegistryKeyNotFoundError, RegistryValueNotFoundError
from nt_load_order.integrations.registry.abc import Registry, RegistryKey
from nt_load_order.integrations.registry.types import RegistryValue


class FakeRegistryKey(RegistryKey):
    """In-memory registry key.

    All state is provided via constructor. Subkeys and values keep the order
    they are given in, which becomes their enumeration order.
    """

    def __init__(
        self,
        name: str,
        *,
        subkeys: list["FakeRegistryKey"] | None = None,
        values: list[RegistryValue] | None = None,
    ) -> None:
        self._name = name
        self._subkeys = subkeys or []
        self._values = values or []

    @property
    def name(self) -> str:
        return self._name

    def subkey(self, name: str) -> "FakeRegistryKey":
        for key in self._subkeys:
            if key.name.lower() == name.lower():
                return key
        raise RegistryKeyNotFoundError(f'Key "{self._name}" has no subkey "{name}"')

    def subkeys(self) -> list[RegistryKey]:
        return list(self._subkeys)

    def value(self, name: str) -> RegistryValue:
        for value in self._values:
            if value.name.lower() == name.lower():
                return value
        raise RegistryValueNotFoundError(f'Key "{self._name}" has no value "{name}"')

    def values(self) -> list[RegistryValue]:
        return list(self._values)


class FakeRegistry(Registry):
    """In-memory fake implementation rooted at a FakeRegistryKey.

    Tracks every key path that was opened for test assertions.
    """

    def __init__(self, root: FakeRegistryKey | None = None) -> None:
        self._root = root if root is not None else FakeRegistryKey("SYSTEM")
        self._opened_paths: list[str] = []

    @property
    def opened_paths(self) -> list[str]:
        """Key paths passed to key(), in call order.

        This property is for test assertions only.
        """
        return self._opened_paths

    def key(self, path: str) -> RegistryKey:
        self._opened_paths.append(path)
        key: RegistryKey = self._root
        for component in path.split("\\"):
            if component:
                key = key.subkey(component)
        return key

    def describe(self) -> str:
        return "fake registry"
