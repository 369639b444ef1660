"""High-level API for pakreader."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .archive import (
    ArchiveOpener,
    ExportDecoder,
    ImageExporter,
    Package,
    PackageIndex,
    open_loose_archive,
)
from .config import IndexOptions, KeyRing, load_keys
from .errors import ReaderError
from .localization import (
    LocalizationTable,
    MetaHeader,
    load_locmeta,
    load_locres,
    table_summary,
)
from .logging import get_logger
from .reporting import get_reporter, indexing

__all__ = [
    "IndexOptions",
    "IndexResult",
    "build_index",
    "inspect_locres",
    "inspect_locmeta",
    "package_summary",
    "load_locres",
    "load_locmeta",
]


@dataclass(slots=True)
class IndexResult:
    index: PackageIndex
    entries: int = 0
    # archive path -> error, only populated when skip_errors is set
    failures: Dict[str, ReaderError] = field(default_factory=dict)


def inspect_locres(path: str | Path) -> Dict[str, Any]:
    table: LocalizationTable = load_locres(path)
    return {**table_summary(table), "entries_by_namespace": table.to_dict()}


def inspect_locmeta(path: str | Path) -> Dict[str, Any]:
    meta: MetaHeader = load_locmeta(path)
    return {
        "native_culture": meta.native_culture,
        "native_locres": meta.native_locres,
    }


def package_summary(package: Package) -> Dict[str, Any]:
    return {
        "path": package.path,
        "decodable": package.decodable,
        "entries": {
            ext: slot.entry.name for ext, slot in package.slots().items()
        },
    }


def build_index(
    options: IndexOptions,
    opener: ArchiveOpener = open_loose_archive,
    export_decoder: Optional[ExportDecoder] = None,
    image_exporter: Optional[ImageExporter] = None,
    index: Optional[PackageIndex] = None,
) -> IndexResult:
    """Add every archive in `options` to a (new or given) index.

    Archives are added concurrently when `options.jobs > 1`. A failing
    archive aborts the build unless `options.skip_errors` is set, in which
    case it is reported and recorded in `IndexResult.failures`.
    """
    logger = get_logger()
    rep = get_reporter()
    keys = load_keys(options.key_file) if options.key_file else KeyRing()
    if index is None:
        index = PackageIndex(opener, export_decoder, image_exporter)
    result = IndexResult(index=index)
    archives: List[Path] = list(options.archives)

    def _add(archive: Path) -> int:
        return index.add_archive(archive, keys.key_for(archive))

    def _record(archive: Path, outcome: int | ReaderError) -> None:
        if isinstance(outcome, ReaderError):
            if not options.skip_errors:
                raise outcome
            result.failures[str(archive)] = outcome
            rep.archive_skipped(archive, outcome)
        else:
            result.entries += outcome
            rep.archive_indexed(archive, outcome)

    def _run(archive: Path) -> int | ReaderError:
        try:
            return _add(archive)
        except ReaderError as e:
            return e

    with indexing(len(archives)):
        if options.jobs > 1 and len(archives) > 1:
            with ThreadPoolExecutor(max_workers=options.jobs) as pool:
                futures = {pool.submit(_run, a): a for a in archives}
                for future in as_completed(futures):
                    _record(futures[future], future.result())
        else:
            for archive in archives:
                _record(archive, _run(archive))

    logger.debug(
        "Index built: archives=%d entries=%d packages=%d failures=%d",
        len(archives),
        result.entries,
        len(index),
        len(result.failures),
    )
    rep.summary(
        "index",
        archives=len(archives),
        entries=result.entries,
        packages=len(index),
        skipped=len(result.failures),
    )
    return result
