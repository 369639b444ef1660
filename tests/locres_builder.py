from __future__ import annotations

"""Binary fixture builders for LocRes/LocMeta tests.

Usage:
    from locres_builder import build_locres, fstring
    data = build_locres([("Game", [("Hello", "Bonjour")])], version=2)

Namespace entries map a key to either a string (inline for LEGACY, pooled
automatically otherwise) or an int (explicit pool index).
"""
import struct
import zlib
from typing import Dict, List, Optional, Sequence, Tuple, Union

from pakreader.localization import LOCMETA_MAGIC, LOCRES_MAGIC

Value = Union[str, int]
Namespaces = Sequence[Tuple[str, Sequence[Tuple[str, Value]]]]


def fstring(text: str, *, wide: bool = False) -> bytes:
    if text == "":
        return struct.pack("<i", 0)
    if wide:
        raw = (text + "\x00").encode("utf-16-le")
        return struct.pack("<i", -(len(raw) // 2)) + raw
    raw = (text + "\x00").encode("utf-8")
    return struct.pack("<i", len(raw)) + raw


def _text_key(text: str, hashed: bool) -> bytes:
    if hashed:
        h = zlib.crc32(text.encode("utf-8")) & 0xFFFFFFFF
        return struct.pack("<I", h) + fstring(text)
    return fstring(text)


def _auto_pool(
    namespaces: Namespaces,
) -> Tuple[List[str], Dict[str, int], Dict[str, int]]:
    pool: List[str] = []
    index: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for _, keys in namespaces:
        for _, value in keys:
            if isinstance(value, str):
                if value not in index:
                    index[value] = len(pool)
                    pool.append(value)
                counts[value] = counts.get(value, 0) + 1
    return pool, index, counts


def build_locres(
    namespaces: Namespaces,
    version: int = 2,
    *,
    pool: Optional[Sequence[str]] = None,
    ref_counts: Optional[Sequence[int]] = None,
    pool_offset: Optional[int] = None,
    entries_hint: Optional[int] = None,
) -> bytes:
    """Build a LocRes payload; version 0 produces a LEGACY file (no magic)."""
    hashed = version >= 2
    pooled = version >= 1
    auto_pool, auto_index, auto_counts = _auto_pool(namespaces)
    if pool is None:
        pool = auto_pool
        if ref_counts is None:
            ref_counts = [auto_counts[s] for s in auto_pool]

    body = b""
    total = 0
    body += struct.pack("<I", len(namespaces))
    for ns, keys in namespaces:
        body += _text_key(ns, hashed)
        body += struct.pack("<I", len(keys))
        for key, value in keys:
            total += 1
            body += _text_key(key, hashed)
            body += struct.pack("<I", zlib.crc32(key.encode()) & 0xFFFFFFFF)
            if not pooled:
                body += fstring(str(value))
            elif isinstance(value, int):
                body += struct.pack("<i", value)
            else:
                body += struct.pack("<i", auto_index[value])

    if not pooled:
        return body

    header_size = 16 + 1 + 8 + (4 if hashed else 0)
    blob = struct.pack("<I", len(pool))
    for i, s in enumerate(pool):
        blob += fstring(s)
        if hashed:
            count = ref_counts[i] if ref_counts is not None else 1
            blob += struct.pack("<i", count)

    if pool_offset is None:
        pool_offset = header_size + len(body)
    header = LOCRES_MAGIC.to_bytes() + struct.pack("<B", version)
    header += struct.pack("<q", pool_offset)
    if hashed:
        header += struct.pack(
            "<I", total if entries_hint is None else entries_hint
        )
    out = header + body
    if pool_offset != -1:
        out += blob
    return out


def build_locres_header_only(version: int) -> bytes:
    return LOCRES_MAGIC.to_bytes() + struct.pack("<B", version)


def build_locmeta(
    culture: str,
    locres: str,
    *,
    version: int = 0,
    magic: Optional[bytes] = None,
) -> bytes:
    head = magic if magic is not None else LOCMETA_MAGIC.to_bytes()
    return head + struct.pack("<B", version) + fstring(culture) + fstring(locres)
