"""Real CPU information using py-cpuinfo."""

import cpuinfo

from nt_load_order.integrations.cpu.abc import CpuInfo


class RealCpuInfo(CpuInfo):
    """Production implementation reading CPUID through py-cpuinfo."""

    def vendor(self) -> str | None:
        vendor = cpuinfo.get_cpu_info().get("vendor_id_raw")
        if not vendor:
            return None
        return str(vendor)
