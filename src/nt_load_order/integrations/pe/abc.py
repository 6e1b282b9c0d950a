"""PE image reader interface.

The import expander only needs three things from a module on disk: whether it
exists, the names of the DLLs it imports, and the raw data of a named section
(for the .apiset section of apisetschema.dll).
"""

from abc import ABC, abstractmethod
from pathlib import Path


class PeReader(ABC):
    """Abstract interface for reading PE files."""

    @abstractmethod
    def path_exists(self, path: Path) -> bool:
        """Check whether a file exists at path (case-insensitively)."""
        ...

    @abstractmethod
    def read_imports(self, path: Path) -> list[str]:
        """Read the imported module names of a PE file.

        Args:
            path: Full path of the PE file

        Returns:
            Imported DLL names in the order of the import directory. Empty if the
            file has no import directory.

        Raises:
            PeDecodeError: If the file cannot be opened or is not a valid PE file
        """
        ...

    @abstractmethod
    def read_section(self, path: Path, section_name: str) -> bytes:
        """Read the raw data of a section of a PE file.

        Raises:
            PeDecodeError: If the file cannot be opened, is not a valid PE file
                or has no section of that name
        """
        ...
