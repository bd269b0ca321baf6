"""Archive entry matching for jar classpath elements.

An entry qualifies when its name contains the slash form of the query and the
mode extension (``.class``, or ``.java`` for source jars) anywhere in it.
"""

from __future__ import annotations

import zipfile
from collections.abc import Iterator
from pathlib import Path

from ..query import ClassQuery
from .types import Match, MatchKind

CLASS_EXTENSION = ".class"
SOURCE_EXTENSION = ".java"


def mode_extension(source_mode: bool) -> str:
    """Extension an entry name must contain: ``.java`` for sources, else ``.class``."""
    return SOURCE_EXTENSION if source_mode else CLASS_EXTENSION


def is_candidate(entry_name: str, query: ClassQuery, source_mode: bool) -> bool:
    """Whether ``entry_name`` holds the query slash form and the mode extension."""
    return query.slash_form in entry_name and mode_extension(source_mode) in entry_name


def _entry_opener(archive: zipfile.ZipFile, info: zipfile.ZipInfo):
    """Return a callable opening the ``info`` entry stream of ``archive``."""
    def open_source():
        return archive.open(info)

    return open_source


def match_archive(
    archive: zipfile.ZipFile,
    container: Path,
    query: ClassQuery,
    source_mode: bool,
) -> Iterator[Match]:
    """Yield matches for ``archive`` entries in stored order.

    Only the first match carries ``first_in_container``. Source openers read
    from ``archive``, which must stay open while matches are consumed.
    """
    first = True
    for info in archive.infolist():
        name = info.filename
        if not is_candidate(name, query, source_mode):
            continue
        yield Match(
            kind=MatchKind.ARCHIVE,
            location=str(container),
            package=name,
            entry_name=name,
            open_source=_entry_opener(archive, info) if source_mode else None,
            first_in_container=first,
        )
        first = False


def iter_archive_matches(container: Path, query: ClassQuery, source_mode: bool) -> Iterator[Match]:
    """Open ``container`` and yield its matches, closing it when iteration ends.

    Closing the generator early (stop after a source body) also closes the
    archive.
    """
    with zipfile.ZipFile(container) as archive:
        yield from match_archive(archive, container, query, source_mode)


__all__ = [
    "CLASS_EXTENSION",
    "SOURCE_EXTENSION",
    "mode_extension",
    "is_candidate",
    "match_archive",
    "iter_archive_matches",
]
