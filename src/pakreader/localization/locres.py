"""LocRes (localization resource) decoder.

Decodes all three on-disk generations through one reader:

- LEGACY: no magic, strings inline.
- COMPACT: magic + version, strings deduplicated into a pool.
- OPTIMIZED: hashed keys, entry count hint, pool with reference counts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, BinaryIO, Dict, Iterator, List, Mapping, Optional

from ..binary import BinaryReader, normalize_string
from ..errors import format_error, unsupported_version
from ..logging import get_logger
from .pool import PooledString, StringPool
from .versions import LAYOUTS, LOCRES_MAGIC, LocResLayout, LocResVersion

__all__ = [
    "TextKey",
    "LocalizationEntry",
    "LocalizationTable",
    "LocResDecoder",
    "read_locres",
    "load_locres",
    "table_summary",
]

_MAX_POOL_OFFSET = 0x7FFFFFFF
_NO_POOL = -1


@dataclass(frozen=True, slots=True)
class TextKey:
    text: str
    hash: Optional[int] = None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class LocalizationEntry:
    key: str
    text: str
    source_hash: int


@dataclass(frozen=True)
class LocalizationTable:
    """Immutable namespace -> key -> localized text mapping."""

    entries: Mapping[str, Mapping[str, str]]
    version: LocResVersion = LocResVersion.LEGACY

    def __getitem__(self, namespace: str) -> Mapping[str, str]:
        return self.entries[namespace]

    def __contains__(self, namespace: object) -> bool:
        return namespace in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def entry_count(self) -> int:
        return sum(len(keys) for keys in self.entries.values())

    def namespaces(self) -> List[str]:
        return list(self.entries)

    def get(
        self, namespace: str, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        keys = self.entries.get(namespace)
        if keys is None:
            return default
        return keys.get(key, default)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {ns: dict(keys) for ns, keys in self.entries.items()}


@dataclass(slots=True)
class LocResDecoder:
    """Single-shot decoder bound to one stream.

    Run `decode()` once; the pool stays available afterwards for
    inspection (steal/copy counters).
    """

    reader: BinaryReader
    start: int = 0
    version: LocResVersion = LocResVersion.LEGACY
    pool: StringPool = field(default_factory=StringPool)

    @classmethod
    def for_stream(cls, stream: BinaryIO) -> "LocResDecoder":
        return cls(reader=BinaryReader(stream), start=stream.tell())

    @property
    def layout(self) -> LocResLayout:
        return LAYOUTS[self.version]

    def decode(self) -> LocalizationTable:
        logger = get_logger()
        self.version = self._read_version()
        if self.layout.has_pool:
            self.pool = self._read_pool()
        if self.layout.has_entry_hint:
            # Preallocation hint only.
            self.reader.read_u32("entries_count")

        namespaces: Dict[str, Mapping[str, str]] = {}
        namespace_count = self.reader.read_u32("namespace_count")
        for _ in range(namespace_count):
            namespace = self._read_text_key("namespace")
            keys: Dict[str, str] = {}
            key_count = self.reader.read_u32("key_count")
            for _ in range(key_count):
                entry = self._read_entry(namespace)
                keys[entry.key] = entry.text
            if namespace.text in namespaces:
                logger.warning(
                    "LocRes namespace '%s' declared twice; later one wins",
                    namespace.text,
                )
            namespaces[namespace.text] = MappingProxyType(keys)

        logger.debug(
            "Decoded LocRes v%d: namespaces=%d pool=%d steals=%d",
            int(self.version),
            len(namespaces),
            len(self.pool),
            self.pool.steals,
        )
        return LocalizationTable(
            entries=MappingProxyType(namespaces), version=self.version
        )

    def _read_version(self) -> LocResVersion:
        magic = self.reader.try_read_guid()
        if magic != LOCRES_MAGIC:
            # Legacy files have no magic; rewind to where decoding began.
            self.reader.seek(self.start)
            return LocResVersion.LEGACY
        raw = self.reader.read_u8("version")
        latest = LocResVersion.latest()
        if raw > latest:
            raise unsupported_version("LocRes", raw, int(latest))
        return LocResVersion(raw)

    def _read_pool(self) -> StringPool:
        offset = self.reader.read_i64("pool_offset")
        if offset == _NO_POOL:
            return StringPool()
        if offset < 0 or offset > _MAX_POOL_OFFSET:
            raise format_error(
                f"LocRes localized string array offset out of range: {offset}",
                {"offset": offset},
            )
        resume = self.reader.tell()
        self.reader.seek(self.start + offset)
        if self.layout.pool_refcounts:
            items = self.reader.read_array(self._read_counted_string, "pool")
        else:
            items = self.reader.read_array(
                lambda: PooledString(self._read_clean_string("pool.string")),
                "pool",
            )
        self.reader.seek(resume)
        return StringPool(items)

    def _read_counted_string(self) -> PooledString:
        value = self._read_clean_string("pool.string")
        return PooledString(value, self.reader.read_i32("pool.ref_count"))

    def _read_clean_string(self, label: str) -> str:
        return normalize_string(self.reader.read_string(label))

    def _read_text_key(self, label: str) -> TextKey:
        if self.layout.hashed_keys:
            key_hash = self.reader.read_u32(f"{label}.hash")
            return TextKey(self._read_clean_string(label), key_hash)
        return TextKey(self._read_clean_string(label))

    def _read_entry(self, namespace: TextKey) -> LocalizationEntry:
        key = self._read_text_key("key")
        source_hash = self.reader.read_u32("source_hash")
        if self.layout.has_pool:
            index = self.reader.read_i32("string_index")
            text = self.pool.take(index, namespace.text, key.text)
        else:
            text = self._read_clean_string("localized_string")
        return LocalizationEntry(key.text, text, source_hash)


def read_locres(stream: BinaryIO) -> LocalizationTable:
    """Decode a LocRes table starting at the stream's current position."""
    return LocResDecoder.for_stream(stream).decode()


def load_locres(path: str | Path) -> LocalizationTable:
    with Path(path).open("rb") as f:
        return read_locres(f)


def table_summary(table: LocalizationTable) -> Dict[str, Any]:
    return {
        "version": table.version.name,
        "namespaces": len(table.entries),
        "entries": table.entry_count(),
    }

