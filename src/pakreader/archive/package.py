"""Logical package merged from header/export/bulk archive entries.

A `Package` is an immutable snapshot. Adding an entry returns a new
snapshot, which lets the index publish merges atomically.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Sequence

from ..errors import (
    E_MISSING_CAPABILITY,
    E_MISSING_SLOT,
    E_OVERFLOW_COLLISION,
    OverflowCollision,
    PackageError,
)
from ..logging import get_logger
from .protocols import ArchiveEntry, ArchiveReader, ExportDecoder, ImageExporter

__all__ = [
    "SlotRole",
    "PackageSlot",
    "Package",
    "split_entry_name",
    "normalize_package_path",
]


class SlotRole(Enum):
    HEADER = "uasset"
    EXPORT = "uexp"
    BULK = "ubulk"


_ROLE_BY_EXTENSION = {role.value: role for role in SlotRole}


def normalize_package_path(name: str) -> str:
    return name.lower()


def split_entry_name(name: str) -> tuple[str, str]:
    """Split an entry name into (package path, extension), both case-folded."""
    base, sep, ext = name.rpartition(".")
    if not sep or "/" in ext:
        return normalize_package_path(name), ""
    return normalize_package_path(base), ext.lower()


@dataclass(frozen=True, slots=True)
class PackageSlot:
    entry: ArchiveEntry
    reader: ArchiveReader

    def open(self) -> BinaryIO:
        return self.reader.open_entry(self.entry)


@dataclass(frozen=True)
class Package:
    path: str
    header: Optional[PackageSlot] = None
    export: Optional[PackageSlot] = None
    bulk: Optional[PackageSlot] = None
    overflow: Mapping[str, PackageSlot] = field(
        default_factory=lambda: MappingProxyType({})
    )
    export_decoder: Optional[ExportDecoder] = field(
        default=None, compare=False, repr=False
    )
    image_exporter: Optional[ImageExporter] = field(
        default=None, compare=False, repr=False
    )

    def with_entry(
        self, entry: ArchiveEntry, extension: str, reader: ArchiveReader
    ) -> "Package":
        slot = PackageSlot(entry, reader)
        role = _ROLE_BY_EXTENSION.get(extension)
        if role is SlotRole.HEADER:
            return replace(self, header=slot)
        if role is SlotRole.EXPORT:
            return replace(self, export=slot)
        if role is SlotRole.BULK:
            return replace(self, bulk=slot)
        if extension in self.overflow:
            raise OverflowCollision(
                code=E_OVERFLOW_COLLISION,
                message=(
                    f"Package '{self.path}' already has a '.{extension}' entry"
                ),
                context={
                    "path": self.path,
                    "extension": extension,
                    "existing": self.overflow[extension].entry.name,
                    "incoming": entry.name,
                },
            )
        other = dict(self.overflow)
        other[extension] = slot
        return replace(
            self, overflow=MappingProxyType(dict(sorted(other.items())))
        )

    def slot(self, role: SlotRole) -> Optional[PackageSlot]:
        if role is SlotRole.HEADER:
            return self.header
        if role is SlotRole.EXPORT:
            return self.export
        return self.bulk

    def open_slot(self, role: SlotRole) -> BinaryIO:
        slot = self.slot(role)
        if slot is None:
            raise self._missing_slot(role)
        return slot.open()

    def _missing_slot(self, role: SlotRole) -> PackageError:
        return PackageError(
            code=E_MISSING_SLOT,
            message=f"Package '{self.path}' has no .{role.value} entry",
            context={"path": self.path, "role": role.name.lower()},
        )

    @property
    def decodable(self) -> bool:
        return self.header is not None and self.export is not None

    def exports(self) -> Sequence[Any]:
        """Decode the export graph. Not cached: every call decodes again."""
        if self.header is None:
            raise self._missing_slot(SlotRole.HEADER)
        if self.export is None:
            raise self._missing_slot(SlotRole.EXPORT)
        if self.export_decoder is None:
            raise PackageError(
                code=E_MISSING_CAPABILITY,
                message="No export decoder configured",
                context={"path": self.path},
            )
        with ExitStack() as stack:
            header = stack.enter_context(self.header.open())
            export = stack.enter_context(self.export.open())
            bulk = (
                stack.enter_context(self.bulk.open())
                if self.bulk is not None
                else None
            )
            get_logger().debug("Decoding exports for %s", self.path)
            return self.export_decoder(header, export, bulk)

    def first_object(self) -> Any:
        exports = self.exports()
        return exports[0] if exports else None

    def first_texture(self) -> Any:
        """Return an image for the first export, or None if it has no mips."""
        obj = self.first_object()
        mips = getattr(obj, "mips", None)
        pixel_format = getattr(obj, "pixel_format", None)
        if not mips or pixel_format is None:
            return None
        if self.image_exporter is None:
            raise PackageError(
                code=E_MISSING_CAPABILITY,
                message="No image exporter configured",
                context={"path": self.path},
            )
        return self.image_exporter(mips[0], pixel_format)

    def slots(self) -> Dict[str, PackageSlot]:
        found: Dict[str, PackageSlot] = {}
        for role in SlotRole:
            slot = self.slot(role)
            if slot is not None:
                found[role.value] = slot
        found.update(self.overflow)
        return found

    def extract(self, out_dir: str | Path) -> List[Path]:
        """Write the raw payload of every populated entry into `out_dir`."""
        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []
        for slot in self.slots().values():
            target = out / Path(slot.entry.name).name
            with slot.open() as src:
                target.write_bytes(src.read())
            written.append(target)
        return written
