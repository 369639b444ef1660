"""Format generations for LocRes and LocMeta files.

Each LocRes generation maps to a `LocResLayout` describing how that
generation lays out keys and the localized string pool, so the decoder
branches on layout fields instead of comparing versions inline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from ..binary import Guid

__all__ = [
    "LocResVersion",
    "LocMetaVersion",
    "LocResLayout",
    "LAYOUTS",
    "LOCRES_MAGIC",
    "LOCMETA_MAGIC",
]

LOCRES_MAGIC = Guid(0x7574140E, 0xFC034A67, 0x9D90154A, 0x1B7F37C3)
LOCMETA_MAGIC = Guid(0xA14CEE4F, 0x83554868, 0xBD464C6C, 0x7C50DA70)


class LocResVersion(IntEnum):
    # No magic number; strings stored inline.
    LEGACY = 0
    # Strings stored once in a lookup table.
    COMPACT = 1
    # Pre-hashed keys, entry count hint and per-string reference counts.
    OPTIMIZED = 2

    @classmethod
    def latest(cls) -> "LocResVersion":
        return max(cls)


class LocMetaVersion(IntEnum):
    INITIAL = 0

    @classmethod
    def latest(cls) -> "LocMetaVersion":
        return max(cls)


@dataclass(frozen=True, slots=True)
class LocResLayout:
    hashed_keys: bool
    has_pool: bool
    pool_refcounts: bool
    has_entry_hint: bool


LAYOUTS: Dict[LocResVersion, LocResLayout] = {
    LocResVersion.LEGACY: LocResLayout(
        hashed_keys=False,
        has_pool=False,
        pool_refcounts=False,
        has_entry_hint=False,
    ),
    LocResVersion.COMPACT: LocResLayout(
        hashed_keys=False,
        has_pool=True,
        pool_refcounts=False,
        has_entry_hint=False,
    ),
    LocResVersion.OPTIMIZED: LocResLayout(
        hashed_keys=True,
        has_pool=True,
        pool_refcounts=True,
        has_entry_hint=True,
    ),
}
