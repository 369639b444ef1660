"""Reporter events for decoding and index builds.

A reporter receives three kinds of events: messages (info, warnings,
errors and verbose detail, also used by the log handler), the progress of
an index run (one event per archive, indexed or skipped), and decode
summaries. Backends only render; the bookkeeping for an index run lives
in :class:`Reporter` itself.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from ..errors import ReaderError

__all__ = [
    "Level",
    "RunStatus",
    "IndexRun",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "indexing",
]


class Level(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    VERBOSE = "verbose"


class RunStatus(Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(slots=True)
class IndexRun:
    """Running totals of one index build."""

    archives: int
    done: int = 0
    entries: int = 0
    skipped: int = 0
    last_archive: str = ""
    status: RunStatus = RunStatus.RUNNING
    started: float = field(default_factory=time.monotonic)
    finished: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self.finished if self.finished is not None else time.monotonic()
        return end - self.started

    def totals(self) -> Dict[str, int]:
        return {"entries": self.entries, "skipped": self.skipped}


_VERBOSITY: int = 0  # set by CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    """Base reporter. Subclasses implement `message` and the `_on_*` hooks."""

    def __init__(self) -> None:
        self.run: Optional[IndexRun] = None

    # messages

    def message(self, level: Level, text: str, *, vlevel: int = 0) -> None:
        raise NotImplementedError

    def status(self, text: str) -> None:
        self.message(Level.INFO, text)

    def warning(self, text: str) -> None:
        self.message(Level.WARNING, text)

    def error(self, text: str) -> None:
        self.message(Level.ERROR, text)

    def verbose(self, text: str, *, level: int = 1) -> None:
        if get_verbosity() >= level:
            self.message(Level.VERBOSE, text, vlevel=level)

    # index runs

    def index_started(self, archives: int) -> None:
        self.run = IndexRun(archives)
        self._on_index_start(self.run)

    def archive_indexed(self, archive: str | Path, entries: int) -> None:
        run = self._current_run()
        run.done += 1
        run.entries += entries
        run.last_archive = Path(archive).name
        self._on_archive(run, entries=entries)

    def archive_skipped(self, archive: str | Path, error: ReaderError) -> None:
        run = self._current_run()
        run.done += 1
        run.skipped += 1
        run.last_archive = Path(archive).name
        self._on_archive(run, error=error)

    def index_finished(self, status: RunStatus = RunStatus.SUCCESS) -> None:
        run = self._current_run()
        run.status = status
        run.finished = time.monotonic()
        self.run = None
        self._on_index_end(run)

    def _current_run(self) -> IndexRun:
        if self.run is None:
            raise RuntimeError("no index run in progress")
        return self.run

    # summaries

    def summary(self, kind: str, **fields: Any) -> None:
        """Report the outcome of one command (locres, locmeta, index, extract)."""
        self._on_summary(kind, fields)

    # backend hooks

    def _on_index_start(self, run: IndexRun) -> None:
        pass

    def _on_archive(
        self,
        run: IndexRun,
        *,
        entries: int = 0,
        error: Optional[ReaderError] = None,
    ) -> None:
        pass

    def _on_index_end(self, run: IndexRun) -> None:
        pass

    def _on_summary(self, kind: str, fields: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass


def summary_line(kind: str, fields: Dict[str, Any]) -> str:
    pairs = " ".join(f"{key}={value}" for key, value in fields.items())
    label = {"locres": "LocRes", "locmeta": "LocMeta"}.get(kind, kind.title())
    return f"{label} summary: {pairs}"


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def indexing(archives: int) -> Iterator[Reporter]:
    """Bracket an index build; the run is marked failed if the body raises."""
    rep = get_reporter()
    rep.index_started(archives)
    try:
        yield rep
    except Exception:
        rep.index_finished(RunStatus.FAILED)
        raise
    else:
        rep.index_finished(RunStatus.SUCCESS)
