"""Command line interface for pakreader."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import (
    IndexOptions,
    build_index,
    inspect_locmeta,
    inspect_locres,
    package_summary,
)
from .errors import ReaderError
from .logging import configure_logging, step
from .reporting import (
    REPORTER_NAMES,
    get_reporter,
    make_reporter,
    set_reporter,
    set_verbosity,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _locres_cmd(args: argparse.Namespace) -> int:
    info = inspect_locres(args.file)
    get_reporter().summary(
        "locres",
        file=args.file.name,
        version=info["version"],
        namespaces=info["namespaces"],
        entries=info["entries"],
    )
    if args.json:
        print(json.dumps(info, indent=2, sort_keys=True, ensure_ascii=False))
    return EXIT_OK


def _locmeta_cmd(args: argparse.Namespace) -> int:
    info = inspect_locmeta(args.file)
    get_reporter().summary("locmeta", file=args.file.name, **info)
    print(json.dumps(info, indent=2, sort_keys=True, ensure_ascii=False))
    return EXIT_OK


def _index_options(args: argparse.Namespace) -> IndexOptions:
    return IndexOptions(
        archives=list(args.roots),
        key_file=args.keys,
        jobs=args.jobs,
        skip_errors=args.skip_errors,
    )


def _index_cmd(args: argparse.Namespace) -> int:
    result = build_index(_index_options(args))
    listing = sorted(
        (package_summary(pkg) for _, pkg in result.index),
        key=lambda s: s["path"],
    )
    if args.json:
        print(json.dumps(listing, indent=2, sort_keys=True))
    else:
        for summary in listing:
            exts = ",".join(sorted(summary["entries"]))
            print(f"{summary['path']} [{exts}]")
    return EXIT_ERROR if result.failures else EXIT_OK


def _extract_cmd(args: argparse.Namespace) -> int:
    result = build_index(_index_options(args))
    rep = get_reporter()
    package = result.index.get_package(args.name)
    if package is None:
        rep.error(f"Package not found: {args.name}")
        return EXIT_NOT_FOUND
    step(f"extracting {package.path}")
    written = package.extract(args.out_dir)
    rep.summary(
        "extract", package=package.path, files=len(written), out=args.out_dir
    )
    return EXIT_OK


def _add_index_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--keys",
        type=Path,
        help="JSON/YAML file mapping archive names to hex key material",
    )
    p.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of archives to index concurrently",
    )
    p.add_argument(
        "--skip-errors",
        action="store_true",
        dest="skip_errors",
        help="Report and skip archives that fail to index",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pakreader",
        description="Localization resource and package index reader",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=REPORTER_NAMES,
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    lr = sub.add_parser("locres", help="Decode a LocRes file")
    lr.add_argument("file", type=Path)
    lr.add_argument("--json", action="store_true", help="Emit the table as JSON")
    lr.set_defaults(func=_locres_cmd)

    lm = sub.add_parser("locmeta", help="Decode a LocMeta file")
    lm.add_argument("file", type=Path)
    lm.set_defaults(func=_locmeta_cmd)

    ix = sub.add_parser("index", help="Index loose archive directories")
    ix.add_argument("roots", type=Path, nargs="+")
    ix.add_argument("--json", action="store_true", help="Emit JSON listing")
    _add_index_arguments(ix)
    ix.set_defaults(func=_index_cmd)

    ex = sub.add_parser("extract", help="Write the raw entries of one package")
    ex.add_argument("roots", type=Path, nargs="+")
    ex.add_argument("name", help="Package path, e.g. game/content/foo")
    ex.add_argument("out_dir", type=Path)
    _add_index_arguments(ex)
    ex.set_defaults(func=_extract_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    set_reporter(make_reporter(args.reporter))
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except ReaderError as e:
        get_reporter().error(str(e))
        return EXIT_ERROR
    finally:
        get_reporter().flush()


if __name__ == "__main__":
    raise SystemExit(main())
