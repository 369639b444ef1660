from __future__ import annotations

import sys
from typing import Any, Dict, Optional

from ..errors import ReaderError
from .base import IndexRun, Level, Reporter, RunStatus, summary_line

_LABELS = {
    Level.INFO: ("32", "INFO"),
    Level.WARNING: ("33", "WARN"),
    Level.ERROR: ("31", "ERROR"),
    Level.VERBOSE: ("36", "VERB"),
}


class PlainReporter(Reporter):
    """Line oriented text output, colored only on a TTY."""

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        self.use_color = (
            use_color
            if use_color is not None
            else getattr(self.stream, "isatty", lambda: False)()
        )

    def _c(self, code: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"\x1b[{code}m{text}\x1b[0m"

    def message(self, level: Level, text: str, *, vlevel: int = 0) -> None:
        code, label = _LABELS[level]
        if level is Level.VERBOSE:
            label = f"{label}{vlevel}"
        self.stream.write(f"{self._c(code, label)}: {text}\n")

    def _on_archive(
        self,
        run: IndexRun,
        *,
        entries: int = 0,
        error: Optional[ReaderError] = None,
    ) -> None:
        if error is not None:
            self.error(f"Skipping archive {run.last_archive}: {error}")
            return
        self.verbose(
            f"indexed {run.last_archive}: {entries} entries "
            f"({run.done}/{run.archives})"
        )

    def _on_index_end(self, run: IndexRun) -> None:
        icon = "✔" if run.status is RunStatus.SUCCESS else "✖"
        totals = " ".join(f"{k}={v}" for k, v in run.totals().items())
        self.stream.write(
            f" {icon} Index archives {run.done}/{run.archives} "
            f"({run.elapsed:.2f}s) [{totals}]\n"
        )

    def _on_summary(self, kind: str, fields: Dict[str, Any]) -> None:
        self.status(summary_line(kind, fields))
