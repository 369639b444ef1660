from __future__ import annotations

from .base import Level, Reporter


class SilentReporter(Reporter):
    """Keeps index run bookkeeping but prints nothing."""

    def message(self, level: Level, text: str, *, vlevel: int = 0) -> None:
        pass
