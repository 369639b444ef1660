"""Readers for localization resources and cross-archive package indexes."""

from .errors import (
    ReaderError,
    FormatError,
    UnsupportedVersion,
    InvalidMagic,
    InvalidReference,
    OverflowCollision,
    PackageError,
)
from .localization import (
    LocalizationTable,
    MetaHeader,
    read_locres,
    read_locmeta,
    load_locres,
    load_locmeta,
)
from .archive import ArchiveEntry, Package, PackageIndex

__all__ = [
    "ReaderError",
    "FormatError",
    "UnsupportedVersion",
    "InvalidMagic",
    "InvalidReference",
    "OverflowCollision",
    "PackageError",
    "LocalizationTable",
    "MetaHeader",
    "read_locres",
    "read_locmeta",
    "load_locres",
    "load_locmeta",
    "ArchiveEntry",
    "Package",
    "PackageIndex",
]
