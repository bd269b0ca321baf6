"""Classpath orchestration: runtime lookup first, then entries in classpath order.

Matches are handed to a render callback one at a time as they are found. A
``Flow.STOP`` verdict ends the search immediately; open archives are closed
on the way out.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable, Iterable, Iterator
from contextlib import closing
from enum import Enum

from ..config import DisplayConfig
from ..errors import EntryScanError
from ..query import ClassQuery
from .archive import iter_archive_matches
from .directory import match_directory
from .runtime import RuntimeCatalog, match_runtime
from .types import ClasspathEntry, DirectoryEntry, Flow, JarArchiveEntry, Match

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Match], Flow]


class SearchOutcome(Enum):
    COMPLETED = "completed"
    RUNTIME_ONLY = "runtime-only"
    SOURCE_FOUND = "source-found"


def _directory_matches(entry: DirectoryEntry, query: ClassQuery, display: DisplayConfig) -> Iterator[Match]:
    """Scan an existing directory entry; unreadable subtrees are fatal."""
    logger.debug("Path: %s", entry.path)
    if not entry.path.exists():
        logger.debug("Skipping missing directory: %s", entry.path)
        return
    try:
        yield from match_directory(entry.path, query, display.source_mode)
    except OSError as exc:
        raise EntryScanError(f"Failed to scan directory {entry.path}: {exc}") from exc


def _archive_matches(entry: JarArchiveEntry, query: ClassQuery, display: DisplayConfig) -> Iterator[Match]:
    """Scan a jar, or its sources jar in source mode; corrupt archives are fatal."""
    logger.debug("Path: %s", entry.path)
    container = entry.path
    if display.source_mode:
        container = entry.source_archive_path
        if not container.exists():
            logger.warning("File does not exist: %s", container)
            return
        logger.debug("Source archive: %s", container)
    elif not container.exists():
        logger.debug("Skipping missing archive: %s", container)
        return
    try:
        yield from iter_archive_matches(container, query, display.source_mode)
    except (OSError, zipfile.BadZipFile) as exc:
        raise EntryScanError(f"Failed to read archive {container}: {exc}") from exc


def iter_entry_matches(entry: ClasspathEntry, query: ClassQuery, display: DisplayConfig) -> Iterator[Match]:
    """Dispatch one classpath entry to its matcher."""
    if isinstance(entry, JarArchiveEntry):
        return _archive_matches(entry, query, display)
    return _directory_matches(entry, query, display)


def run_search(
    query: ClassQuery,
    entries: Iterable[ClasspathEntry],
    display: DisplayConfig,
    catalog: RuntimeCatalog,
    render: RenderCallback,
) -> SearchOutcome:
    """Render every match for ``query`` until exhausted or told to stop.

    Runtime matches come first; in runtime-only mode the classpath is never
    touched.
    """
    for match in match_runtime(catalog, query):
        if render(match) is Flow.STOP:
            return SearchOutcome.SOURCE_FOUND
    if display.runtime_only:
        return SearchOutcome.RUNTIME_ONLY

    for entry in entries:
        with closing(iter_entry_matches(entry, query, display)) as matches:
            for match in matches:
                if render(match) is Flow.STOP:
                    return SearchOutcome.SOURCE_FOUND
    return SearchOutcome.COMPLETED


__all__ = [
    "RenderCallback",
    "SearchOutcome",
    "iter_entry_matches",
    "run_search",
]
