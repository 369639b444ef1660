"""Little-endian primitives shared by the LocRes and LocMeta decoders.

Public names:
- Guid: 128-bit value used as a magic discriminator.
- BinaryReader: struct-based reader over a seekable binary stream.
- normalize_string: strip one trailing NUL code point.
"""

from __future__ import annotations

from dataclasses import dataclass
import struct
from typing import BinaryIO, Callable, List, TypeVar

from .errors import format_error

__all__ = [
    "Guid",
    "BinaryReader",
    "normalize_string",
    "GUID_SIZE",
]

T = TypeVar("T")

GUID_SIZE = 16

_U8 = struct.Struct("<B")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_I64 = struct.Struct("<q")
_GUID = struct.Struct("<IIII")


@dataclass(frozen=True, slots=True)
class Guid:
    a: int
    b: int
    c: int
    d: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Guid":
        return cls(*_GUID.unpack(raw))

    def to_bytes(self) -> bytes:
        return _GUID.pack(self.a, self.b, self.c, self.d)

    def __str__(self) -> str:
        return f"{self.a:08X}{self.b:08X}{self.c:08X}{self.d:08X}"


def normalize_string(value: str) -> str:
    if value and value[-1] == "\x00":
        return value[:-1]
    return value


class BinaryReader:
    """Thin reader over a random-access stream.

    Every short read raises FormatError; nothing is returned partially.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def tell(self) -> int:
        return self.stream.tell()

    def seek(self, offset: int) -> None:
        self.stream.seek(offset)

    def read_exact(self, size: int, label: str) -> bytes:
        offset = self.stream.tell()
        raw = self.stream.read(size)
        if len(raw) != size:
            raise format_error(
                f"Out of range read for {label}: {offset}+{size}",
                {"offset": offset, "size": size, "read": len(raw)},
            )
        return raw

    def read_u8(self, label: str = "u8") -> int:
        return _U8.unpack(self.read_exact(1, label))[0]

    def read_i32(self, label: str = "i32") -> int:
        return _I32.unpack(self.read_exact(4, label))[0]

    def read_u32(self, label: str = "u32") -> int:
        return _U32.unpack(self.read_exact(4, label))[0]

    def read_i64(self, label: str = "i64") -> int:
        return _I64.unpack(self.read_exact(8, label))[0]

    def read_guid(self, label: str = "guid") -> Guid:
        return Guid.from_bytes(self.read_exact(GUID_SIZE, label))

    def try_read_guid(self) -> Guid | None:
        """Read a GUID, or return None when fewer than 16 bytes remain."""
        raw = self.stream.read(GUID_SIZE)
        if len(raw) != GUID_SIZE:
            return None
        return Guid.from_bytes(raw)

    def read_string(self, label: str = "string") -> str:
        # Positive lengths count 8-bit units, negative lengths UTF-16 units;
        # both include the terminator.
        length = self.read_i32(f"{label}.length")
        if length == 0:
            return ""
        if length > 0:
            raw = self.read_exact(length, label)[:-1]
            encoding = "utf-8"
        else:
            raw = self.read_exact(-length * 2, label)[:-2]
            encoding = "utf-16-le"
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise format_error(
                f"Undecodable {encoding} text for {label}: {e}",
                {"length": length},
            ) from e

    def read_array(self, read_item: Callable[[], T], label: str) -> List[T]:
        count = self.read_u32(f"{label}.count")
        return [read_item() for _ in range(count)]
