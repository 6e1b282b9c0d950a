"""Tests for system root path handling."""

from pathlib import Path

from nt_load_order.paths import full_path, image_path_components, resolve_case_insensitive


def test_image_path_components_strip_system_root_prefix() -> None:
    assert image_path_components("\\SystemRoot\\System32\\drivers\\acpi.sys") == [
        "System32",
        "drivers",
        "acpi.sys",
    ]
    assert image_path_components("SYSTEMROOT\\system32\\drivers\\wd\\WdBoot.sys") == [
        "system32",
        "drivers",
        "wd",
        "WdBoot.sys",
    ]
    assert image_path_components("System32\\hal.dll") == ["System32", "hal.dll"]


def test_full_path_joins_onto_system_root() -> None:
    assert full_path(Path("/mnt/Windows"), "System32\\drivers\\cng.sys") == Path(
        "/mnt/Windows/System32/drivers/cng.sys"
    )


def test_resolve_case_insensitive_finds_on_disk_spelling(tmp_path: Path) -> None:
    drivers = tmp_path / "System32" / "DRIVERS"
    drivers.mkdir(parents=True)
    (drivers / "Acpi.SYS").write_bytes(b"")

    resolved = resolve_case_insensitive(tmp_path / "system32" / "drivers" / "acpi.sys")

    assert resolved == drivers / "Acpi.SYS"


def test_resolve_case_insensitive_keeps_missing_components(tmp_path: Path) -> None:
    (tmp_path / "System32").mkdir()

    resolved = resolve_case_insensitive(tmp_path / "system32" / "missing" / "x.dll")

    assert resolved == tmp_path / "System32" / "missing" / "x.dll"
    assert not resolved.exists()
