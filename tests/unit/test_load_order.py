"""Tests for the load order orchestrator."""

import pytest

from nt_load_order.context import LoadOrderContext
from nt_load_order.errors import SystemRootError
from nt_load_order.integrations.pe.fake import FakePeReader
from nt_load_order.integrations.registry.fake import FakeRegistry
from nt_load_order.load_order import LoadOrderRequest, get_load_order
from nt_load_order.steps.add_imports import APISET_SECTION_NAME, APISETSCHEMA_IMAGE_PATH
from tests.test_utils.builders import (
    apiset_namespace_bytes,
    group_order_list_value,
    service_key,
    system_file,
    system_registry,
)

NO_EXTRAS = LoadOrderRequest(add_kernel_binaries=False, add_imports=False)


def _registry() -> FakeRegistry:
    return system_registry(
        [
            service_key("disk", group="SCSI Class", tag=1),
            service_key("cng", group="Core", image_path="System32\\Drivers\\cng.sys"),
            service_key("acpi", group="Core", tag=2, image_path="System32\\drivers\\acpi.sys"),
            service_key("elam", group="Early-Launch"),
        ],
        service_group_order=["Core", "SCSI Class"],
        group_order_list=[group_order_list_value("Core", [2])],
    )


def _names(request: LoadOrderRequest, ctx: LoadOrderContext | None = None) -> list[str]:
    ctx = ctx or LoadOrderContext.for_test(registry=_registry())
    return [e.name for e in get_load_order(ctx, request)]


def test_all_sorting_passes() -> None:
    assert _names(NO_EXTRAS) == ["cng", "acpi", "elam", "disk", "Ntfs"]


def test_without_tag_and_group_sort_keeps_registry_order() -> None:
    request = LoadOrderRequest(
        sort_by_tag_and_group=False,
        sort_by_hardcoded_groups=False,
        sort_by_hardcoded_service_lists=False,
        add_kernel_binaries=False,
        add_imports=False,
    )

    assert _names(request) == ["disk", "cng", "acpi", "elam", "Ntfs"]


def test_without_hardcoded_passes() -> None:
    request = LoadOrderRequest(
        sort_by_hardcoded_groups=False,
        sort_by_hardcoded_service_lists=False,
        add_kernel_binaries=False,
        add_imports=False,
    )

    assert _names(request) == ["acpi", "cng", "disk", "Ntfs", "elam"]


def test_kernel_binaries_come_first() -> None:
    request = LoadOrderRequest(kd_driver="kdcom", cpu_vendor="GenuineIntel", add_imports=False)

    assert _names(request)[:5] == ["ntoskrnl", "hal", "kdcom", "mcupdate", "cng"]


def test_imports_added() -> None:
    pe_reader = FakePeReader(
        imports={
            system_file("System32\\ntoskrnl.exe"): [],
            system_file("System32\\hal.dll"): [],
            system_file("System32\\drivers\\disk.sys"): ["classpnp.sys"],
            system_file("System32\\drivers\\classpnp.sys"): [],
            system_file("System32\\drivers\\cng.sys"): [],
            system_file("System32\\drivers\\acpi.sys"): [],
            system_file("System32\\Drivers\\elam.sys"): [],
            system_file("System32\\Drivers\\Ntfs.sys"): [],
        },
        sections={
            (system_file(APISETSCHEMA_IMAGE_PATH), APISET_SECTION_NAME): (
                apiset_namespace_bytes({})
            )
        },
    )
    ctx = LoadOrderContext.for_test(registry=_registry(), pe_reader=pe_reader)

    assert _names(LoadOrderRequest(), ctx) == [
        "ntoskrnl",
        "hal",
        "cng",
        "acpi",
        "elam",
        "disk",
        "classpnp.sys",
        "Ntfs",
    ]


def test_imports_need_a_system_root() -> None:
    ctx = LoadOrderContext(registry=_registry(), pe_reader=FakePeReader(), system_root=None)

    with pytest.raises(SystemRootError, match="SystemRoot"):
        get_load_order(ctx, LoadOrderRequest())

    assert len(get_load_order(ctx, NO_EXTRAS)) == 5
