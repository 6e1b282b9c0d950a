"""Fake CpuInfo implementation for testing."""

from nt_load_order.integrations.cpu.abc import CpuInfo


class FakeCpuInfo(CpuInfo):
    """Returns the vendor string given at construction and counts queries."""

    def __init__(self, vendor: str | None = None) -> None:
        self._vendor = vendor
        self._vendor_calls = 0

    @property
    def vendor_calls(self) -> int:
        """Number of vendor() calls made.

        This property is for test assertions only.
        """
        return self._vendor_calls

    def vendor(self) -> str | None:
        self._vendor_calls += 1
        return self._vendor
