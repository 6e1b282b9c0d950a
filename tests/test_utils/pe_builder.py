"""Builds minimal PE32+ images for tests of the pefile based reader.

The image has two sections:
    .idata   RVA 0x1000, file offset 0x200: one import descriptor importing
             "Sleep" from a single module
    .apiset  RVA 0x2000, file offset 0x400: caller supplied data
"""

import struct
from pathlib import Path

_FILE_ALIGNMENT = 0x200
_SECTION_ALIGNMENT = 0x1000
_PE_OFFSET = 0x40

_IDATA_RVA = 0x1000
_IDATA_OFFSET = 0x200
_APISET_RVA = 0x2000
_APISET_OFFSET = 0x400
_SECTION_SIZE = 0x200

# Offsets into .idata
_DESCRIPTORS = 0x00
_ORIGINAL_FIRST_THUNK = 0x28
_FIRST_THUNK = 0x38
_DLL_NAME = 0x48
_HINT_NAME = 0x70
_MAX_DLL_NAME = _HINT_NAME - _DLL_NAME - 1


def _file_header() -> bytes:
    return struct.pack(
        "<HHIIIHH",
        0x8664,  # Machine: AMD64
        2,  # NumberOfSections
        0,  # TimeDateStamp
        0,  # PointerToSymbolTable
        0,  # NumberOfSymbols
        0xF0,  # SizeOfOptionalHeader
        0x22,  # Characteristics: EXECUTABLE_IMAGE | LARGE_ADDRESS_AWARE
    )


def _optional_header(import_directory: tuple[int, int]) -> bytes:
    header = struct.pack(
        "<HBBIIIIIQIIHHHHHHIIIIHHQQQQII",
        0x20B,  # Magic: PE32+
        14,  # MajorLinkerVersion
        0,  # MinorLinkerVersion
        0,  # SizeOfCode
        2 * _SECTION_SIZE,  # SizeOfInitializedData
        0,  # SizeOfUninitializedData
        0,  # AddressOfEntryPoint
        0,  # BaseOfCode
        0x140000000,  # ImageBase
        _SECTION_ALIGNMENT,
        _FILE_ALIGNMENT,
        10,  # MajorOperatingSystemVersion
        0,  # MinorOperatingSystemVersion
        0,  # MajorImageVersion
        0,  # MinorImageVersion
        10,  # MajorSubsystemVersion
        0,  # MinorSubsystemVersion
        0,  # Win32VersionValue
        0x3000,  # SizeOfImage
        _FILE_ALIGNMENT,  # SizeOfHeaders
        0,  # CheckSum
        3,  # Subsystem: WINDOWS_CUI
        0,  # DllCharacteristics
        0x100000,  # SizeOfStackReserve
        0x1000,  # SizeOfStackCommit
        0x100000,  # SizeOfHeapReserve
        0x1000,  # SizeOfHeapCommit
        0,  # LoaderFlags
        16,  # NumberOfRvaAndSizes
    )
    directories = [(0, 0)] * 16
    directories[1] = import_directory
    return header + b"".join(struct.pack("<II", rva, size) for rva, size in directories)


def _section_header(name: bytes, rva: int, offset: int, characteristics: int) -> bytes:
    return struct.pack(
        "<8sIIIIIIHHI",
        name,
        _SECTION_SIZE,  # VirtualSize
        rva,
        _SECTION_SIZE,  # SizeOfRawData
        offset,
        0,  # PointerToRelocations
        0,  # PointerToLinenumbers
        0,  # NumberOfRelocations
        0,  # NumberOfLinenumbers
        characteristics,
    )


def _idata(imported_dll: bytes) -> bytes:
    if len(imported_dll) > _MAX_DLL_NAME:
        raise ValueError(f"DLL name {imported_dll!r} does not fit into the import section")

    data = bytearray(_SECTION_SIZE)
    # the second descriptor stays zeroed and terminates the table
    struct.pack_into(
        "<IIIII",
        data,
        _DESCRIPTORS,
        _IDATA_RVA + _ORIGINAL_FIRST_THUNK,
        0,  # TimeDateStamp
        0,  # ForwarderChain
        _IDATA_RVA + _DLL_NAME,
        _IDATA_RVA + _FIRST_THUNK,
    )
    # both thunk arrays hold one hint/name RVA followed by a null thunk
    struct.pack_into("<Q", data, _ORIGINAL_FIRST_THUNK, _IDATA_RVA + _HINT_NAME)
    struct.pack_into("<Q", data, _FIRST_THUNK, _IDATA_RVA + _HINT_NAME)
    data[_DLL_NAME : _DLL_NAME + len(imported_dll)] = imported_dll
    struct.pack_into("<H6s", data, _HINT_NAME, 0, b"Sleep\x00")
    return bytes(data)


def minimal_pe_bytes(
    *, imported_dll: bytes | None = b"kernelbase.dll", apiset_data: bytes = b""
) -> bytes:
    """Encode a PE32+ image.

    Args:
        imported_dll: Raw name of the single imported module. None leaves the
            import directory empty.
        apiset_data: Content of the .apiset section, zero padded to 0x200 bytes.
    """
    if len(apiset_data) > _SECTION_SIZE:
        raise ValueError("apiset_data does not fit into the .apiset section")

    import_directory = (_IDATA_RVA, 40) if imported_dll is not None else (0, 0)

    headers = bytearray(_FILE_ALIGNMENT)
    headers[0:2] = b"MZ"
    struct.pack_into("<I", headers, 0x3C, _PE_OFFSET)
    nt_headers = (
        b"PE\x00\x00"
        + _file_header()
        + _optional_header(import_directory)
        + _section_header(b".idata", _IDATA_RVA, _IDATA_OFFSET, 0xC0000040)
        + _section_header(b".apiset", _APISET_RVA, _APISET_OFFSET, 0x40000040)
    )
    headers[_PE_OFFSET : _PE_OFFSET + len(nt_headers)] = nt_headers

    idata = _idata(imported_dll if imported_dll is not None else b"")
    apiset = apiset_data.ljust(_SECTION_SIZE, b"\x00")
    return bytes(headers) + idata + apiset


def write_pe(path: Path, **kwargs) -> Path:
    """Write minimal_pe_bytes(**kwargs) to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(minimal_pe_bytes(**kwargs))
    return path
