"""Collaborator contracts consumed by the package index.

The archive container reader, the export-graph decoder and the image
exporter live outside this package; anything matching these protocols can
be plugged in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Optional, Protocol, Sequence

__all__ = [
    "ArchiveEntry",
    "ArchiveReader",
    "ArchiveOpener",
    "ExportDecoder",
    "ImageExporter",
]


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    name: str
    locator: Any = None


class ArchiveReader(Protocol):
    def entries(self) -> Iterable[ArchiveEntry]: ...

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO: ...


class ArchiveOpener(Protocol):
    def __call__(
        self, path: str | Path, key: Optional[bytes] = None
    ) -> ArchiveReader: ...


class ExportDecoder(Protocol):
    def __call__(
        self,
        header: BinaryIO,
        export: BinaryIO,
        bulk: Optional[BinaryIO] = None,
    ) -> Sequence[Any]: ...


class ImageExporter(Protocol):
    def __call__(self, mip: Any, pixel_format: Any) -> Any: ...
