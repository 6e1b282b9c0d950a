"""Persisted defaults for load order computations.

Stored in ~/.nt-load-order/config.toml. Every key is optional; an unset key
falls back to the built-in default of LoadOrderRequest. Command line options
take precedence over the file.
"""

import dataclasses
import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit

STRING_KEYS = ("kd_driver", "cpu_vendor", "boot_file_system")
INT_KEYS = ("control_set",)
BOOL_KEYS = (
    "detect_cpu_vendor",
    "sort_by_tag_and_group",
    "sort_by_hardcoded_groups",
    "sort_by_hardcoded_service_lists",
    "add_kernel_binaries",
    "add_imports",
)
CONFIG_KEYS = STRING_KEYS + INT_KEYS + BOOL_KEYS


@dataclass(frozen=True)
class LoadOrderConfig:
    """Immutable persisted defaults. None means "not configured"."""

    kd_driver: str | None = None
    cpu_vendor: str | None = None
    boot_file_system: str | None = None
    control_set: int | None = None
    detect_cpu_vendor: bool | None = None
    sort_by_tag_and_group: bool | None = None
    sort_by_hardcoded_groups: bool | None = None
    sort_by_hardcoded_service_lists: bool | None = None
    add_kernel_binaries: bool | None = None
    add_imports: bool | None = None

    def items(self) -> list[tuple[str, Any]]:
        """Configured (key, value) pairs in CONFIG_KEYS order."""
        return [(key, getattr(self, key)) for key in CONFIG_KEYS if getattr(self, key) is not None]

    def with_value(self, key: str, value: str) -> "LoadOrderConfig":
        """Return a copy with key set from its command line string form.

        Raises:
            ValueError: If key is unknown or value doesn't parse as the key's type
        """
        return dataclasses.replace(self, **{key: parse_config_value(key, value)})

    def without(self, key: str) -> "LoadOrderConfig":
        """Return a copy with key unset.

        Raises:
            ValueError: If key is unknown
        """
        _check_key(key)
        return dataclasses.replace(self, **{key: None})


def parse_config_value(key: str, value: str) -> str | int | bool:
    """Parse the string form of a config value.

    Raises:
        ValueError: If key is unknown or value doesn't parse as the key's type
    """
    _check_key(key)

    if key in BOOL_KEYS:
        if value.lower() not in ("true", "false"):
            raise ValueError(f"Invalid boolean value for {key}: {value}")
        return value.lower() == "true"

    if key in INT_KEYS:
        try:
            number = int(value)
        except ValueError:
            raise ValueError(f"Invalid integer value for {key}: {value}") from None
        _check_control_set(number)
        return number

    if not value:
        raise ValueError(f"Empty value for {key}")
    return value


def config_from_dict(data: dict[str, Any], source: Path) -> LoadOrderConfig:
    """Build a LoadOrderConfig from parsed TOML data.

    Raises:
        ValueError: If a key is unknown or a value has the wrong type
    """
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            raise ValueError(f"Unknown key '{key}' in {source}")

        if key in BOOL_KEYS:
            expected: type = bool
        elif key in INT_KEYS:
            expected = int
        else:
            expected = str

        # bool is a subclass of int
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(f"'{key}' in {source} must be a {expected.__name__}, got {value!r}")
        if key in INT_KEYS:
            _check_control_set(value)
        values[key] = value

    return LoadOrderConfig(**values)


def _check_key(key: str) -> None:
    if key not in CONFIG_KEYS:
        raise ValueError(f"Invalid config key: {key}. Valid keys: {', '.join(CONFIG_KEYS)}")


def _check_control_set(number: int) -> None:
    if not 1 <= number <= 999:
        raise ValueError(f"control_set must be between 1 and 999, got {number}")


class ConfigStore(ABC):
    """Abstract interface for reading and writing the persisted defaults."""

    @abstractmethod
    def load(self) -> LoadOrderConfig:
        """Load the config. A missing config yields an empty LoadOrderConfig.

        Raises:
            ValueError: If the config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: LoadOrderConfig) -> None:
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path of the config file, for messages."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.nt-load-order/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = config_path

    def load(self) -> LoadOrderConfig:
        config_path = self.path()
        if not config_path.exists():
            return LoadOrderConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return config_from_dict(data, config_path)

    def save(self, config: LoadOrderConfig) -> None:
        """Write config, keeping comments and formatting of an existing file.

        Raises:
            PermissionError: If the directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent}")
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("nt-load-order defaults, see `nt-load-order config --help`"))

        configured = dict(config.items())
        for key in CONFIG_KEYS:
            if key in configured:
                doc[key] = configured[key]
            elif key in doc:
                del doc[key]

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return Path.home() / ".nt-load-order" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: LoadOrderConfig | None = None) -> None:
        self._config = config if config is not None else LoadOrderConfig()

    def load(self) -> LoadOrderConfig:
        return self._config

    def save(self, config: LoadOrderConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/test/.nt-load-order/config.toml")
