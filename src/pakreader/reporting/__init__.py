import sys

from .base import (
    IndexRun,
    Level,
    Reporter,
    RunStatus,
    get_reporter,
    get_verbosity,
    indexing,
    set_reporter,
    set_verbosity,
)
from .plain import PlainReporter
from .jsonl import JsonLinesReporter
from .silent import SilentReporter
from .rich_reporter import RichReporter

REPORTER_NAMES = ("plain", "rich", "json", "silent")

__all__ = [
    "IndexRun",
    "Level",
    "Reporter",
    "RunStatus",
    "get_reporter",
    "set_reporter",
    "get_verbosity",
    "set_verbosity",
    "indexing",
    "make_reporter",
    "REPORTER_NAMES",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
]


def make_reporter(name: str) -> Reporter:
    if name == "json":
        return JsonLinesReporter()
    if name == "silent":
        return SilentReporter()
    if name == "rich" and sys.stderr.isatty():
        return RichReporter()
    # rich falls back to plain without a TTY
    return PlainReporter()
