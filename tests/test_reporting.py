import io
import json
import sys
from pathlib import Path

import pytest

from pakreader.errors import FormatError, E_FORMAT
from pakreader.logging import configure_logging, get_logger
from pakreader.reporting import (
    JsonLinesReporter,
    PlainReporter,
    SilentReporter,
    indexing,
    make_reporter,
    set_reporter,
    set_verbosity,
)

SHORT_READ = FormatError(code=E_FORMAT, message="short read")


def _events(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_jsonl_index_run_events():
    out = io.StringIO()
    rep = JsonLinesReporter(stream=out)
    rep.index_started(2)
    rep.archive_indexed(Path("paks/a.pak"), 4)
    rep.archive_skipped("paks/b.pak", SHORT_READ)
    rep.index_finished()
    start, indexed, skipped, end = _events(out)
    assert start == {"event": "index_start", "archives": 2}
    assert indexed == {
        "event": "archive_indexed",
        "archive": "a.pak",
        "done": 1,
        "entries": 4,
    }
    assert skipped["event"] == "archive_skipped"
    assert skipped["error"]["code"] == E_FORMAT
    assert end["status"] == "success"
    assert (end["done"], end["entries"], end["skipped"]) == (2, 4, 1)


def test_jsonl_summary_keeps_field_types():
    out = io.StringIO()
    JsonLinesReporter(stream=out).summary(
        "index", archives=2, entries=5, packages=3, skipped=0
    )
    assert _events(out) == [
        {
            "event": "summary",
            "kind": "index",
            "archives": 2,
            "entries": 5,
            "packages": 3,
            "skipped": 0,
        }
    ]


def test_plain_index_run_reports_skips_and_totals():
    out = io.StringIO()
    set_reporter(PlainReporter(stream=out, use_color=False))
    try:
        with indexing(2) as rep:
            rep.archive_indexed("paks/a.pak", 7)
            rep.archive_skipped("paks/b.pak", SHORT_READ)
    finally:
        set_reporter(SilentReporter())
    skip, done = out.getvalue().splitlines()
    assert skip == "ERROR: Skipping archive b.pak: E_FORMAT: short read"
    assert done.startswith(" ✔ Index archives 2/2")
    assert done.endswith("[entries=7 skipped=1]")


def test_plain_failed_index_run():
    out = io.StringIO()
    set_reporter(PlainReporter(stream=out, use_color=False))
    try:
        with pytest.raises(RuntimeError):
            with indexing(3):
                raise RuntimeError("boom")
    finally:
        set_reporter(SilentReporter())
    assert out.getvalue().startswith(" ✖ Index archives 0/3")


def test_plain_summary_line():
    out = io.StringIO()
    PlainReporter(stream=out, use_color=False).summary(
        "locres", file="Game.locres", version="OPTIMIZED", entries=2
    )
    assert out.getvalue() == (
        "INFO: LocRes summary: file=Game.locres version=OPTIMIZED entries=2\n"
    )


def test_archive_events_need_a_run():
    rep = SilentReporter()
    with pytest.raises(RuntimeError):
        rep.archive_indexed("a.pak", 1)
    rep.index_started(1)
    rep.archive_indexed("a.pak", 3)
    assert rep.run.entries == 3
    rep.index_finished()
    assert rep.run is None


def test_make_reporter_falls_back_to_plain_without_tty(monkeypatch):
    monkeypatch.setattr(sys, "stderr", io.StringIO())
    assert isinstance(make_reporter("rich"), PlainReporter)
    assert isinstance(make_reporter("json"), JsonLinesReporter)
    assert isinstance(make_reporter("silent"), SilentReporter)


def test_log_records_route_to_reporter():
    out = io.StringIO()
    set_reporter(PlainReporter(stream=out, use_color=False))
    set_verbosity(1)
    configure_logging(1)
    try:
        logger = get_logger()
        logger.warning("namespace %s twice", "Menu")
        logger.debug("decoded")
    finally:
        set_verbosity(0)
        configure_logging(0)
        set_reporter(SilentReporter())
    assert out.getvalue().splitlines() == [
        "WARN: namespace Menu twice",
        "VERB1: decoded",
    ]
