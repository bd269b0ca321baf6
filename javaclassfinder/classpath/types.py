"""Datatypes for classpath entries and the matches found in them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO

JAR_MARKER = ".jar"
SOURCES_JAR_SUFFIX = "-sources.jar"

SourceOpener = Callable[[], BinaryIO]


@dataclass(frozen=True)
class DirectoryEntry:
    """Classpath element scanned as a file tree."""

    path: Path


@dataclass(frozen=True)
class JarArchiveEntry:
    """Classpath element read as a zip archive."""

    path: Path

    @property
    def source_archive_path(self) -> Path:
        """Companion sources jar, e.g. ``util.jar`` -> ``util-sources.jar``."""
        return Path(str(self.path).replace(JAR_MARKER, SOURCES_JAR_SUFFIX))


ClasspathEntry = DirectoryEntry | JarArchiveEntry


class MatchKind(Enum):
    RUNTIME = "runtime"
    DIRECTORY = "directory"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class Match:
    """One reportable hit.

    ``location`` is the path printed on the ``Path:`` line: a resource URL for
    runtime hits, the file path for directory hits and the container path for
    archive hits. ``package`` is the raw qualified name or relative path.
    ``entry_name`` is set for archive hits only. ``open_source`` is present
    only for hits that can supply a source body.
    """

    kind: MatchKind
    location: str
    package: str
    entry_name: str | None = None
    open_source: SourceOpener | None = None
    first_in_container: bool = True


class Flow(Enum):
    """Renderer verdict after a match: keep searching or end the run."""

    CONTINUE = "continue"
    STOP = "stop"


__all__ = [
    "Flow",
    "JAR_MARKER",
    "SOURCES_JAR_SUFFIX",
    "SourceOpener",
    "DirectoryEntry",
    "JarArchiveEntry",
    "ClasspathEntry",
    "MatchKind",
    "Match",
]
