from .versions import (
    LocResVersion,
    LocMetaVersion,
    LOCRES_MAGIC,
    LOCMETA_MAGIC,
)
from .pool import PooledString, StringPool, UNTRACKED
from .locres import (
    TextKey,
    LocalizationTable,
    LocResDecoder,
    read_locres,
    load_locres,
    table_summary,
)
from .locmeta import MetaHeader, read_locmeta, load_locmeta

__all__ = [
    "LocResVersion",
    "LocMetaVersion",
    "LOCRES_MAGIC",
    "LOCMETA_MAGIC",
    "PooledString",
    "StringPool",
    "UNTRACKED",
    "TextKey",
    "LocalizationTable",
    "LocResDecoder",
    "read_locres",
    "load_locres",
    "table_summary",
    "MetaHeader",
    "read_locmeta",
    "load_locmeta",
]
