"""Package index built incrementally from many archives.

Entries for one logical package may come from different archive files and
in any order. Merges into the same package path are serialized by a
per-path lock; different paths never contend. Published packages are
immutable snapshots, so lookups see either the state before a merge or
after it.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..logging import get_logger
from .package import Package, normalize_package_path, split_entry_name
from .protocols import (
    ArchiveEntry,
    ArchiveOpener,
    ArchiveReader,
    ExportDecoder,
    ImageExporter,
)

__all__ = ["PackageIndex"]


class PackageIndex:
    def __init__(
        self,
        opener: Optional[ArchiveOpener] = None,
        export_decoder: Optional[ExportDecoder] = None,
        image_exporter: Optional[ImageExporter] = None,
    ):
        self.opener = opener
        self.export_decoder = export_decoder
        self.image_exporter = image_exporter
        self._packages: Dict[str, Package] = {}
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, path: str) -> threading.Lock:
        # setdefault is atomic on a dict, so two threads agree on one lock.
        return self._locks.setdefault(path, threading.Lock())

    def add_archive(
        self, path: str | Path, key: Optional[bytes] = None
    ) -> int:
        """Open an archive and index all of its entries.

        Returns the number of entries indexed. An OverflowCollision aborts
        the call; entries merged before it stay indexed.
        """
        if self.opener is None:
            raise ValueError("PackageIndex has no archive opener")
        reader = self.opener(path, key)
        count = self.add_reader(reader)
        get_logger().debug("Indexed %s: entries=%d", path, count)
        return count

    def add_reader(self, reader: ArchiveReader) -> int:
        count = 0
        for entry in reader.entries():
            self._insert(entry, reader)
            count += 1
        return count

    def _insert(self, entry: ArchiveEntry, reader: ArchiveReader) -> None:
        path, extension = split_entry_name(entry.name)
        with self._lock_for(path):
            current = self._packages.get(path)
            if current is None:
                current = Package(
                    path,
                    export_decoder=self.export_decoder,
                    image_exporter=self.image_exporter,
                )
            self._packages[path] = current.with_entry(entry, extension, reader)

    def get_package(self, name: str) -> Optional[Package]:
        """Look up a package by path; the extension is ignored, case folded.

        The result is a snapshot. Later ``add_archive`` calls publish new
        snapshots and never change this one, so look the package up again
        to see entries merged afterwards.
        """
        return self._packages.get(normalize_package_path(name))

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return normalize_package_path(name) in self._packages

    def __len__(self) -> int:
        return len(self._packages)

    def __iter__(self) -> Iterator[Tuple[str, Package]]:
        for path, package in list(self._packages.items()):
            yield path, package

    def paths(self) -> List[str]:
        return [path for path, _ in self]
