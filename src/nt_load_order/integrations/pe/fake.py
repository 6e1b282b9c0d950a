"""Fake PeReader implementation for testing.

Paths are compared case-insensitively, the way Windows would resolve them.
"""

from pathlib import Path

from nt_load_order.errors import PeDecodeError
from nt_load_order.integrations.pe.abc import PeReader


def _key(path: Path) -> str:
    return path.as_posix().lower()


class FakePeReader(PeReader):
    """In-memory fake implementation that serves predetermined PE contents.

    This class has NO public setup methods. All state is provided via constructor
    and read calls are captured for assertions.
    """

    def __init__(
        self,
        *,
        imports: dict[Path, list[str]] | None = None,
        sections: dict[tuple[Path, str], bytes] | None = None,
        undecodable: set[Path] | None = None,
    ) -> None:
        """Create FakePeReader with pre-configured files.

        Args:
            imports: Mapping of PE file path -> imported DLL names. Every path in
                this mapping exists.
            sections: Mapping of (PE file path, section name) -> section data.
                Every path in this mapping exists.
            undecodable: Paths that exist but fail to parse as PE files
        """
        self._imports = {_key(path): names for path, names in (imports or {}).items()}
        self._sections = {
            (_key(path), name): data for (path, name), data in (sections or {}).items()
        }
        self._undecodable = {_key(path) for path in (undecodable or set())}
        self._existing = (
            set(self._imports) | {path for path, _ in self._sections} | self._undecodable
        )
        self._read_imports_calls: list[Path] = []

    @property
    def read_imports_calls(self) -> list[Path]:
        """Paths passed to read_imports(), in call order.

        This property is for test assertions only.
        """
        return self._read_imports_calls

    def path_exists(self, path: Path) -> bool:
        return _key(path) in self._existing

    def read_imports(self, path: Path) -> list[str]:
        self._read_imports_calls.append(path)
        key = self._check_readable(path)
        return list(self._imports.get(key, []))

    def read_section(self, path: Path, section_name: str) -> bytes:
        key = self._check_readable(path)
        data = self._sections.get((key, section_name))
        if data is None:
            raise PeDecodeError(f'"{path}" has no "{section_name}" section')
        return data

    def _check_readable(self, path: Path) -> str:
        key = _key(path)
        if key not in self._existing:
            raise PeDecodeError(f'Could not open "{path}"')
        if key in self._undecodable:
            raise PeDecodeError(f'"{path}" is not a valid PE file')
        return key
