"""Production PE reader using pefile."""

import logging
from pathlib import Path

import pefile

from nt_load_order.errors import PeDecodeError
from nt_load_order.integrations.pe.abc import PeReader
from nt_load_order.paths import resolve_case_insensitive

logger = logging.getLogger(__name__)

_IMPORT_DIRECTORY = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_IMPORT"]
_INVALID_DLL_NAME = b"*invalid*"


class RealPeReader(PeReader):
    """Production implementation parsing PE files from disk.

    Files are parsed with fast_load and only the import directory is decoded.
    Every file is closed again before a method returns.
    """

    def path_exists(self, path: Path) -> bool:
        return resolve_case_insensitive(path).is_file()

    def read_imports(self, path: Path) -> list[str]:
        pe = self._open(path)
        try:
            pe.parse_data_directories(directories=[_IMPORT_DIRECTORY], import_dllnames_only=True)
            descriptors = getattr(pe, "DIRECTORY_ENTRY_IMPORT", [])
            imports = [_decode_dll_name(path, descriptor.dll) for descriptor in descriptors]
        except pefile.PEFormatError as e:
            raise PeDecodeError(f'Failed to parse import directory of "{path}": {e}') from e
        finally:
            pe.close()

        logger.debug("%s imports %s", path, imports)
        return imports

    def read_section(self, path: Path, section_name: str) -> bytes:
        pe = self._open(path)
        try:
            for section in pe.sections:
                if section.Name.rstrip(b"\x00").decode("ascii", errors="replace") == section_name:
                    return section.get_data()
        finally:
            pe.close()

        raise PeDecodeError(f'"{path}" has no "{section_name}" section')

    def _open(self, path: Path) -> pefile.PE:
        resolved = resolve_case_insensitive(path)
        try:
            return pefile.PE(str(resolved), fast_load=True)
        except OSError as e:
            raise PeDecodeError(f'Could not open "{path}": {e}') from e
        except pefile.PEFormatError as e:
            raise PeDecodeError(f'"{path}" is not a valid PE file: {e}') from e


def _decode_dll_name(path: Path, dll: bytes) -> str:
    # pefile substitutes names that are not valid DOS file names
    if dll == _INVALID_DLL_NAME:
        raise PeDecodeError(f'"{path}" imports a module with an invalid name')
    try:
        return dll.decode("ascii")
    except UnicodeDecodeError as e:
        raise PeDecodeError(f'"{path}" imports a module with a non-ASCII name: {dll!r}') from e
