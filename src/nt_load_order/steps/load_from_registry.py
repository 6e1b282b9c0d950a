"""Read boot services and group metadata from the SYSTEM hive."""

import logging
import struct

from nt_load_order.errors import RegistryError
from nt_load_order.integrations.registry.abc import Registry, RegistryKey
from nt_load_order.integrations.registry.types import RegistryValue
from nt_load_order.types import Entry, EntryGroup, RegistryInfo, TagOrder

logger = logging.getLogger(__name__)

SERVICE_BOOT_START = 0

START_REASON = 'Boot Driver via its "Start" value'
START_OVERRIDE_REASON = 'Boot Driver via its value in the "StartOverride" subkey'
BOOT_FILE_SYSTEM_REASON = "Boot File System Driver"

_TAG = struct.Struct("<I")


def control_set_key_name(control_set: int) -> str:
    return f"ControlSet{control_set:03d}"


def load_from_registry(registry: Registry, boot_file_system: str, control_set: int) -> RegistryInfo:
    """Collect the boot services of a control set in registry enumeration order.

    A service is a boot service if its "Start" value is 0. A DWORD named after
    HardwareConfig\\LastId in the service's "StartOverride" subkey takes precedence
    over "Start". The boot file system driver is appended last, regardless of its
    start type.

    Raises:
        RegistryError: If HardwareConfig\\LastId, ServiceGroupOrder\\List,
            GroupOrderList, the Services key or the boot file system service is
            missing or malformed
    """
    control_set_name = control_set_key_name(control_set)
    logger.debug("Loading boot services of %s from %s", control_set_name, registry.describe())

    hardware_config_id = str(registry.key("HardwareConfig").value("LastId").dword())

    service_group_order = (
        registry.key(f"{control_set_name}\\Control\\ServiceGroupOrder").value("List").multi_string()
    )

    groups: dict[str, TagOrder] = {}
    for value in registry.key(f"{control_set_name}\\Control\\GroupOrderList").values():
        groups[value.name.lower()] = decode_group_order(value)

    services_key = registry.key(f"{control_set_name}\\Services")
    entries: list[Entry] = []

    for service in services_key.subkeys():
        start_and_reason: tuple[int, str] | None = None

        start = _optional_dword(service, "Start")
        if start is not None:
            start_and_reason = (start, START_REASON)

        start_override = _optional_start_override(service, hardware_config_id)
        if start_override is not None:
            start_and_reason = (start_override, START_OVERRIDE_REASON)

        if start_and_reason is not None and start_and_reason[0] == SERVICE_BOOT_START:
            entries.append(_service_entry(service, start_and_reason[1]))

    boot_file_system_key = services_key.subkey(boot_file_system)
    entries.append(_service_entry(boot_file_system_key, BOOT_FILE_SYSTEM_REASON))

    logger.debug(
        "Loaded %d boot services, %d groups in ServiceGroupOrder, %d GroupOrderList entries",
        len(entries),
        len(service_group_order),
        len(groups),
    )
    return RegistryInfo(entries=entries, groups=groups, service_group_order=service_group_order)


def decode_group_order(value: RegistryValue) -> TagOrder:
    """Decode a GroupOrderList value: a DWORD count followed by that many DWORD tags.

    Data shorter than a count plus one tag yields an empty TagOrder.
    """
    data = value.binary()
    if len(data) < 2 * _TAG.size:
        return TagOrder()

    (count,) = _TAG.unpack_from(data, 0)
    tag_data = data[_TAG.size :]
    usable = len(tag_data) - len(tag_data) % _TAG.size
    tags = [tag for (tag,) in _TAG.iter_unpack(tag_data[:usable])]
    return TagOrder(tags[:count])


def service_image_path(service: RegistryKey) -> str:
    """Image path of a service, derived from its name if there is no "ImagePath" value."""
    image_path = _optional_string(service, "ImagePath")
    if image_path is not None:
        return image_path
    # Required for services like "Fs_Rec" and "Wof".
    return f"System32\\Drivers\\{service.name}.sys"


def _service_entry(service: RegistryKey, reason: str) -> Entry:
    group = None
    group_name = _optional_string(service, "Group")
    if group_name is not None:
        group = EntryGroup.from_display_name(group_name)

    return Entry(
        name=service.name,
        image_path=service_image_path(service),
        group=group,
        tag=_optional_dword(service, "Tag"),
        reason=reason,
    )


def _optional_start_override(service: RegistryKey, hardware_config_id: str) -> int | None:
    try:
        start_override_key = service.subkey("StartOverride")
    except RegistryError:
        return None
    return _optional_dword(start_override_key, hardware_config_id)


def _optional_dword(key: RegistryKey, name: str) -> int | None:
    try:
        return key.value(name).dword()
    except RegistryError:
        return None


def _optional_string(key: RegistryKey, name: str) -> str | None:
    try:
        return key.value(name).string()
    except RegistryError:
        return None
