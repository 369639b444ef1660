"""Directory-backed archive reader.

Treats a directory tree of loose cooked files as one archive: entry names
are POSIX paths relative to the root, locators are resolved file paths.
Key material is accepted for signature compatibility and ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional

from ..errors import format_error
from .protocols import ArchiveEntry

__all__ = ["LooseArchive", "open_loose_archive", "safe_file_path"]


def safe_file_path(base_dir: Path, file_path: str) -> Path:
    base_dir = base_dir.resolve()
    resolved = (base_dir / file_path).resolve()
    resolved.relative_to(base_dir)  # raises ValueError if escapes
    return resolved


class LooseArchive:
    def __init__(self, root: str | Path):
        self.root = Path(root)
        if not self.root.is_dir():
            raise format_error(
                f"Archive root is not a directory: {self.root}",
                {"path": str(self.root)},
            )
        self._entries: List[ArchiveEntry] | None = None

    def __repr__(self) -> str:
        return f"LooseArchive({str(self.root)!r})"

    def _scan(self) -> Iterator[ArchiveEntry]:
        for p in sorted(self.root.rglob("*")):
            if p.is_file():
                name = p.relative_to(self.root).as_posix()
                yield ArchiveEntry(name=name, locator=p)

    def entries(self) -> List[ArchiveEntry]:
        if self._entries is None:
            self._entries = list(self._scan())
        return self._entries

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        path = safe_file_path(self.root, entry.name)
        return path.open("rb")


def open_loose_archive(
    path: str | Path, key: Optional[bytes] = None
) -> LooseArchive:
    return LooseArchive(path)
