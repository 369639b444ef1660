"""Error definitions for pakreader."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_FORMAT = "E_FORMAT"
E_UNSUPPORTED_VERSION = "E_UNSUPPORTED_VERSION"
E_INVALID_MAGIC = "E_INVALID_MAGIC"
E_INVALID_REFERENCE = "E_INVALID_REFERENCE"
E_OVERFLOW_COLLISION = "E_OVERFLOW_COLLISION"
E_MISSING_SLOT = "E_MISSING_SLOT"
E_MISSING_CAPABILITY = "E_MISSING_CAPABILITY"
E_CONFIG = "E_CONFIG"


@dataclass
class ReaderError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class FormatError(ReaderError):
    pass


class UnsupportedVersion(ReaderError):
    pass


class InvalidMagic(ReaderError):
    pass


class InvalidReference(ReaderError):
    pass


class OverflowCollision(ReaderError):
    pass


class PackageError(ReaderError):
    pass


class ConfigError(ReaderError):
    pass


def format_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> FormatError:
    return FormatError(code=E_FORMAT, message=message, context=context)


def unsupported_version(
    what: str, file_version: int, loader_version: int
) -> UnsupportedVersion:
    return UnsupportedVersion(
        code=E_UNSUPPORTED_VERSION,
        message=(
            f"{what} file is too new to be loaded! "
            f"(File Version: {file_version}, Loader Version: {loader_version})"
        ),
        context={
            "file_version": file_version,
            "loader_version": loader_version,
        },
    )


__all__ = [
    "ReaderError",
    "FormatError",
    "UnsupportedVersion",
    "InvalidMagic",
    "InvalidReference",
    "OverflowCollision",
    "PackageError",
    "ConfigError",
    "format_error",
    "unsupported_version",
    "E_FORMAT",
    "E_UNSUPPORTED_VERSION",
    "E_INVALID_MAGIC",
    "E_INVALID_REFERENCE",
    "E_OVERFLOW_COLLISION",
    "E_MISSING_SLOT",
    "E_MISSING_CAPABILITY",
    "E_CONFIG",
]
