from __future__ import annotations

"""In-memory archive readers and decoders for package index tests."""
import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional

from pakreader.archive import ArchiveEntry


class MemoryArchive:
    def __init__(self, name: str, files: Dict[str, bytes]):
        self.name = name
        self.files = dict(files)
        self.opened: List[str] = []

    def __repr__(self) -> str:
        return f"MemoryArchive({self.name!r})"

    def entries(self) -> List[ArchiveEntry]:
        return [ArchiveEntry(n, (self.name, n)) for n in self.files]

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        self.opened.append(entry.name)
        return io.BytesIO(self.files[entry.name])


class MemoryOpener:
    """Archive opener over a dict of name -> MemoryArchive."""

    def __init__(self, archives: Dict[str, MemoryArchive]):
        self.archives = archives
        self.keys: Dict[str, Optional[bytes]] = {}

    def __call__(self, path, key: Optional[bytes] = None) -> MemoryArchive:
        self.keys[str(path)] = key
        return self.archives[str(path)]


@dataclass
class FakeExport:
    name: str
    mips: List[bytes] = field(default_factory=list)
    pixel_format: Optional[str] = None


class RecordingDecoder:
    """Export decoder splitting the export payload on commas."""

    def __init__(self):
        self.calls = 0
        self.last_bulk: Optional[bytes] = None

    def __call__(self, header, export, bulk=None) -> List[Any]:
        self.calls += 1
        assert header.read().startswith(b"HDR")
        self.last_bulk = bulk.read() if bulk is not None else None
        exports: List[Any] = []
        for name in export.read().decode().split(","):
            if not name:
                continue
            if name.startswith("tex:"):
                exports.append(
                    FakeExport(name[4:], mips=[b"mip0", b"mip1"], pixel_format="PF_B8G8R8A8")
                )
            else:
                exports.append(FakeExport(name))
        return exports


def fake_image_exporter(mip: bytes, pixel_format: str) -> tuple:
    return ("image", mip, pixel_format)
