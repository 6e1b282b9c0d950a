"""Host CPU information abstraction.

The vendor string selects the microcode update module the bootloader loads
(mcupdate_GenuineIntel.dll, mcupdate_AuthenticAMD.dll, ...).
"""

from abc import ABC, abstractmethod


class CpuInfo(ABC):
    """Abstract host CPU queries for dependency injection."""

    @abstractmethod
    def vendor(self) -> str | None:
        """Return the CPUID vendor string (e.g. "AuthenticAMD"), or None if unknown."""
        ...
