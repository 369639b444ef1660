from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from ..errors import ReaderError
from .base import IndexRun, Level, Reporter


class JsonLinesReporter(Reporter):
    """One JSON object per event, for tooling that consumes the CLI."""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, event: str, **payload: Any) -> None:
        self.stream.write(
            json.dumps({"event": event, **payload}, sort_keys=True, default=str)
            + "\n"
        )

    def message(self, level: Level, text: str, *, vlevel: int = 0) -> None:
        if level is Level.VERBOSE:
            self._emit("message", level=f"verbose{vlevel}", message=text)
        else:
            self._emit("message", level=level.value, message=text)

    def _on_index_start(self, run: IndexRun) -> None:
        self._emit("index_start", archives=run.archives)

    def _on_archive(
        self,
        run: IndexRun,
        *,
        entries: int = 0,
        error: Optional[ReaderError] = None,
    ) -> None:
        if error is not None:
            self._emit(
                "archive_skipped",
                archive=run.last_archive,
                done=run.done,
                error=error.to_dict(),
            )
        else:
            self._emit(
                "archive_indexed",
                archive=run.last_archive,
                done=run.done,
                entries=entries,
            )

    def _on_index_end(self, run: IndexRun) -> None:
        self._emit(
            "index_end",
            status=run.status.value,
            archives=run.archives,
            done=run.done,
            duration_seconds=run.elapsed,
            **run.totals(),
        )

    def _on_summary(self, kind: str, fields: Dict[str, Any]) -> None:
        self._emit("summary", kind=kind, **fields)
