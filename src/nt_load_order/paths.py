"""Path handling below a Windows system root.

Image paths in the registry are backslash-separated and relative to the system
root (e.g. "System32\\drivers\\acpi.sys"). Offline images are often examined from
a case-sensitive filesystem, so on-disk lookups resolve each path component
case-insensitively the way Windows would.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_SYSTEM_ROOT_PREFIXES = ("\\systemroot\\", "systemroot\\")


def image_path_components(image_path: str) -> list[str]:
    """Split a registry image path into its components below the system root."""
    lowered = image_path.lower()
    for prefix in _SYSTEM_ROOT_PREFIXES:
        if lowered.startswith(prefix):
            image_path = image_path[len(prefix) :]
            break
    return [component for component in image_path.split("\\") if component]


def full_path(system_root: Path, image_path: str) -> Path:
    """Join a registry image path onto the system root."""
    return system_root.joinpath(*image_path_components(image_path))


def resolve_case_insensitive(path: Path) -> Path:
    """Return the on-disk spelling of path, matching components case-insensitively.

    If path exists as given, it is returned unchanged. Otherwise each component
    that does not exist verbatim is matched against the entries of its parent
    directory ignoring case. Components that cannot be matched are kept as
    given, so the result simply does not exist.
    """
    if path.exists():
        return path

    resolved = Path(path.anchor) if path.anchor else Path()
    parts = path.parts[1:] if path.anchor else path.parts

    for index, part in enumerate(parts):
        candidate = resolved / part
        if candidate.exists():
            resolved = candidate
            continue

        match = _find_entry_ignoring_case(resolved, part)
        if match is None:
            return resolved.joinpath(*parts[index:])
        resolved = match

    logger.debug("Resolved %s to %s", path, resolved)
    return resolved


def _find_entry_ignoring_case(directory: Path, name: str) -> Path | None:
    if not directory.is_dir():
        return None
    lowered = name.lower()
    for entry in directory.iterdir():
        if entry.name.lower() == lowered:
            return entry
    return None
