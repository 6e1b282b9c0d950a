from nt_load_order.integrations.registry.abc import Registry, RegistryKey
from nt_load_order.integrations.registry.fake import FakeRegistry, FakeRegistryKey
from nt_load_order.integrations.registry.types import RegistryValue, RegistryValueType

# LiveRegistry (winreg) and HiveRegistry (python-registry) are imported lazily by
# nt_load_order.context so that importing this package works on every platform.

__all__ = [
    "FakeRegistry",
    "FakeRegistryKey",
    "Registry",
    "RegistryKey",
    "RegistryValue",
    "RegistryValueType",
]
