from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from ..errors import ReaderError
from .base import IndexRun, Level, Reporter, RunStatus

_STYLES = {
    Level.INFO: "[green]INFO[/]",
    Level.WARNING: "[yellow]WARN[/]",
    Level.ERROR: "[bold red]ERROR[/]",
    Level.VERBOSE: "[cyan]VERB{vlevel}[/]",
}


def _transient_from_env() -> bool:
    return os.getenv("PAKREADER_PROGRESS_TRANSIENT", "0").lower() in (
        "1",
        "true",
        "yes",
    )


class RichReporter(Reporter):
    """Progress bar over the archives of an index run; tables for summaries."""

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )
        self._transient = _transient_from_env()
        self.progress: Progress | None = None
        self._bar: Optional[TaskID] = None
        # Skips reported while a transient bar is up are printed on flush.
        self._deferred: List[str] = []

    def message(self, level: Level, text: str, *, vlevel: int = 0) -> None:
        self.console.print(f"{_STYLES[level].format(vlevel=vlevel)}: {text}")

    def _on_index_start(self, run: IndexRun) -> None:
        self.progress = Progress(
            SpinnerColumn(spinner_name="dots"),
            TextColumn("Index archives"),
            BarColumn(bar_width=None),
            MofNCompleteColumn(),
            TextColumn("{task.fields[archive]}", style="dim"),
            TimeElapsedColumn(),
            transient=self._transient,
            console=self.console,
            expand=True,
        )
        self.progress.start()
        self._bar = self.progress.add_task(
            "index", total=run.archives, archive=""
        )

    def _on_archive(
        self,
        run: IndexRun,
        *,
        entries: int = 0,
        error: Optional[ReaderError] = None,
    ) -> None:
        if self.progress is not None and self._bar is not None:
            self.progress.update(
                self._bar, completed=run.done, archive=run.last_archive
            )
        if error is None:
            return
        line = f"[bold red]ERROR[/]: Skipping archive {run.last_archive}: {error}"
        if self._transient:
            self._deferred.append(line)
        else:
            self.console.print(line)

    def _on_index_end(self, run: IndexRun) -> None:
        icon = "[green]✔[/]" if run.status is RunStatus.SUCCESS else "[red]✖[/]"
        self.flush()
        self.console.print(
            f"{icon} Index archives {run.done}/{run.archives} "
            f"({run.elapsed:.2f}s) entries={run.entries} skipped={run.skipped}"
        )

    def _on_summary(self, kind: str, fields: Dict[str, Any]) -> None:
        table = Table(title=f"{kind} summary", show_header=False)
        table.add_column("field", style="cyan")
        table.add_column("value")
        for key, value in fields.items():
            table.add_row(key, str(value))
        self.console.print(table)

    def flush(self) -> None:
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
            self._bar = None
        for line in self._deferred:
            self.console.print(line)
        self._deferred.clear()
