from .protocols import (
    ArchiveEntry,
    ArchiveReader,
    ArchiveOpener,
    ExportDecoder,
    ImageExporter,
)
from .package import (
    SlotRole,
    PackageSlot,
    Package,
    split_entry_name,
    normalize_package_path,
)
from .index import PackageIndex
from .loose import LooseArchive, open_loose_archive

__all__ = [
    "ArchiveEntry",
    "ArchiveReader",
    "ArchiveOpener",
    "ExportDecoder",
    "ImageExporter",
    "SlotRole",
    "PackageSlot",
    "Package",
    "split_entry_name",
    "normalize_package_path",
    "PackageIndex",
    "LooseArchive",
    "open_loose_archive",
]
