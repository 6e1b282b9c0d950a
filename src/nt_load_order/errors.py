"""Exception hierarchy for load order computation.

Every failure that aborts a load order computation derives from LoadOrderError,
so callers (the CLI error boundary in particular) can report it as a single
descriptive message without a partial result.

- RegistryError: the registry data source could not be opened or a required
  key/value is missing or has an unexpected type.
- ImportResolutionError: apisetschema.dll or a PE file could not be read, or a
  dependent DLL could not be located.
- SystemRootError: no system root could be determined for the analysis.
"""


class LoadOrderError(Exception):
    """Base class for all load order failures."""


class RegistryError(LoadOrderError):
    """The registry data source failed."""


class HiveOpenError(RegistryError):
    """An offline hive file could not be read or parsed."""


class RegistryKeyNotFoundError(RegistryError):
    """A requested registry key does not exist."""


class RegistryValueNotFoundError(RegistryError):
    """A requested registry value does not exist."""


class RegistryDecodeError(RegistryError):
    """A registry value does not hold data of the requested type."""


class ImportResolutionError(LoadOrderError):
    """Resolving the imports of a module failed."""


class PeDecodeError(ImportResolutionError):
    """A PE file could not be opened or parsed."""


class ApiSetError(ImportResolutionError):
    """The API Set namespace could not be decoded."""


class ImageNotFoundError(ImportResolutionError):
    """An imported DLL exists in none of the search locations."""


class SystemRootError(LoadOrderError):
    """No usable system root directory is available."""
