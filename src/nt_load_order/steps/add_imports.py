"""Add the DLLs imported by every entry, recursively.

Boot drivers and kernel binaries import DLLs the boot loader has to load as
well. Each import is placed before the module that first pulls it in, with
its own imports placed before it in turn. Every image path is placed once.
"""

import logging
from pathlib import Path

from nt_load_order.apiset import ApiSetNamespace
from nt_load_order.entry_list import OrderedEntryList
from nt_load_order.errors import ImageNotFoundError
from nt_load_order.integrations.pe.abc import PeReader
from nt_load_order.paths import full_path
from nt_load_order.types import Entry

logger = logging.getLogger(__name__)

APISETSCHEMA_IMAGE_PATH = "System32\\apisetschema.dll"
APISET_SECTION_NAME = ".apiset"

_API_SET_PREFIXES = ("api-", "ext-")
_DLL_EXTENSION = ".dll"


def add_imports(
    entries: OrderedEntryList[Entry], system_root: Path, pe_reader: PeReader
) -> OrderedEntryList[Entry]:
    """Return a new list with the imports of every entry inserted.

    The kernel binaries at the front keep their positions and are followed by
    their imports. Every other entry is followed by those of its imports that
    are not placed yet.

    Raises:
        ImportResolutionError: If apisetschema.dll or a PE file cannot be read,
            or an imported DLL exists in none of the search locations
    """
    apiset_data = pe_reader.read_section(
        full_path(system_root, APISETSCHEMA_IMAGE_PATH), APISET_SECTION_NAME
    )
    namespace = ApiSetNamespace.from_bytes(apiset_data)

    handler = ImportHandler(system_root, pe_reader, namespace)
    remaining = list(entries.drain())

    # Kernel binaries come first and don't move. Mark all of them as placed
    # before resolving any imports so none of them is pulled in as an import.
    kernel_binaries = []
    for entry in remaining:
        if not entry.is_kernel_binary:
            break
        kernel_binaries.append(entry)

    for entry in kernel_binaries:
        handler.mark_placed(entry.image_path)
        handler.entries.push_back(entry)

    for entry in kernel_binaries:
        handler.handle_image(entry.image_path)

    for entry in remaining[len(kernel_binaries) :]:
        if handler.mark_placed(entry.image_path):
            handler.entries.push_back(entry)
            handler.handle_image(entry.image_path)

    logger.debug(
        "Added %d imports to %d entries", len(handler.entries) - len(remaining), len(remaining)
    )
    return handler.entries


class ImportHandler:
    """Resolves imports recursively into an output list."""

    def __init__(self, system_root: Path, pe_reader: PeReader, namespace: ApiSetNamespace) -> None:
        self.entries: OrderedEntryList[Entry] = OrderedEntryList()
        self._system_root = system_root
        self._pe_reader = pe_reader
        self._namespace = namespace
        self._placed_image_paths: set[str] = set()

    def mark_placed(self, image_path: str) -> bool:
        """Record image_path as placed. Returns False if it already was."""
        key = image_path.lower()
        if key in self._placed_image_paths:
            return False
        self._placed_image_paths.add(key)
        return True

    def handle_image(self, image_path: str) -> None:
        """Append the not yet placed imports of image_path, each after its own imports."""
        file_path = full_path(self._system_root, image_path)

        for dll_name in self._pe_reader.read_imports(file_path):
            patched_name = patch_dll_name(dll_name, self._namespace)
            if patched_name is None:
                logger.debug(
                    'Skipping import "%s" of %s, it is not available on this system',
                    dll_name,
                    image_path,
                )
                continue

            import_path = get_image_path(patched_name, self._system_root, self._pe_reader)
            if not self.mark_placed(import_path):
                continue

            self.handle_image(import_path)
            self.entries.push_back(
                Entry(
                    name=patched_name,
                    image_path=import_path,
                    group=None,
                    tag=None,
                    reason=f'Import of "{image_path}"',
                )
            )
            logger.debug("Added %s as import of %s", import_path, image_path)


def patch_dll_name(dll_name: str, namespace: ApiSetNamespace) -> str | None:
    """Resolve an API Set name to the DLL hosting it.

    Names that don't look like API Sets are returned unchanged. Only a lowercase
    ".dll" extension and lowercase "api-"/"ext-" prefixes are recognized.

    Returns:
        The DLL name to load, or None if the API Set has no host on this system
    """
    if not dll_name.endswith(_DLL_EXTENSION) or not dll_name.startswith(_API_SET_PREFIXES):
        return dll_name

    entry = namespace.find(dll_name[: -len(_DLL_EXTENSION)])
    if entry is None or not entry.redirections:
        return None

    host_module = entry.redirections[0].host_module
    if not host_module:
        return None
    return host_module


def get_image_path(file_name: str, system_root: Path, pe_reader: PeReader) -> str:
    """Locate an imported DLL in System32\\drivers or System32.

    Raises:
        ImageNotFoundError: If it exists in neither directory
    """
    for image_path in (f"System32\\drivers\\{file_name}", f"System32\\{file_name}"):
        if pe_reader.path_exists(full_path(system_root, image_path)):
            return image_path

    raise ImageNotFoundError(f'Cannot find "{file_name}" in {system_root}')
