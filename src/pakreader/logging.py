"""Logging for pakreader.

Library modules log through the stdlib "pakreader" logger. The CLI calls
`configure_logging`, which forwards records to the active reporter.
"""

from __future__ import annotations

import logging
from typing import Optional

from .reporting import get_reporter

_LOGGER_NAME = "pakreader"
_STEP_PREFIX = "  ->"

__all__ = [
    "get_logger",
    "configure_logging",
    "step",
]


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


class _ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            rep = get_reporter()
            msg = self.format(record)
            lvl = record.levelno
            if lvl >= logging.ERROR:
                rep.error(msg)
            elif lvl >= logging.WARNING:
                rep.warning(msg)
            elif lvl >= logging.INFO:
                rep.status(msg)
            else:
                rep.verbose(msg)
        except Exception:
            self.handleError(record)


def configure_logging(
    verbosity: int = 0, *, handler: Optional[logging.Handler] = None
) -> None:
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = handler or _ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def step(message: str) -> None:
    get_reporter().status(f"{_STEP_PREFIX} {message}")
