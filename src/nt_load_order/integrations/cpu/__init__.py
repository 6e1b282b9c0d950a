from nt_load_order.integrations.cpu.abc import CpuInfo
from nt_load_order.integrations.cpu.fake import FakeCpuInfo
from nt_load_order.integrations.cpu.real import RealCpuInfo

__all__ = [
    "CpuInfo",
    "FakeCpuInfo",
    "RealCpuInfo",
]
