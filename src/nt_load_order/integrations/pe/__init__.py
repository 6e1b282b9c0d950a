from nt_load_order.integrations.pe.abc import PeReader
from nt_load_order.integrations.pe.fake import FakePeReader
from nt_load_order.integrations.pe.real import RealPeReader

__all__ = [
    "FakePeReader",
    "PeReader",
    "RealPeReader",
]
