"""LocMeta header decoder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from ..binary import BinaryReader, normalize_string
from ..errors import InvalidMagic, E_INVALID_MAGIC, unsupported_version
from .versions import LOCMETA_MAGIC, LocMetaVersion

__all__ = ["MetaHeader", "read_locmeta", "load_locmeta"]


@dataclass(frozen=True, slots=True)
class MetaHeader:
    native_culture: str
    native_locres: str


def read_locmeta(stream: BinaryIO) -> MetaHeader:
    reader = BinaryReader(stream)
    magic = reader.try_read_guid()
    if magic != LOCMETA_MAGIC:
        raise InvalidMagic(
            code=E_INVALID_MAGIC,
            message="LocMeta file has an invalid magic constant!",
            context={"magic": str(magic) if magic else None},
        )
    raw = reader.read_u8("version")
    latest = LocMetaVersion.latest()
    if raw > latest:
        raise unsupported_version("LocMeta", raw, int(latest))
    return MetaHeader(
        native_culture=normalize_string(reader.read_string("native_culture")),
        native_locres=normalize_string(reader.read_string("native_locres")),
    )


def load_locmeta(path: str | Path) -> MetaHeader:
    with Path(path).open("rb") as f:
        return read_locmeta(f)
