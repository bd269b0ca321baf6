"""Directory-tree matching for classpath directories.

Walks every regular file below a root (symlinks are not followed) and keeps
the files whose name contains the query as a substring.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ..query import ClassQuery
from .types import Match, MatchKind

SOURCE_EXTENSION = ".java"


def _sorted_children(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        children = list(entries)
    children.sort(key=lambda item: item.name)
    return children


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under ``root`` in depth-first name order.

    A ``root`` that is itself a regular file yields just that file; any other
    non-directory (FIFO, device) yields nothing. Scan failures propagate as
    ``OSError``.
    """
    if root.is_file():
        yield root
        return
    if not root.is_dir():
        return

    stack: list[Iterator[os.DirEntry[str]]] = [iter(_sorted_children(root))]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        is_dir = child.is_dir(follow_symlinks=False)
        is_file = not is_dir and child.is_file(follow_symlinks=False)
        if is_dir:
            stack.append(iter(_sorted_children(Path(child.path))))
        elif is_file:
            yield Path(child.path)


def _relative_name(root: Path, file: Path) -> str:
    """Root-relative path of ``file``; empty when the root is the file itself."""
    if file == root:
        return ""
    return str(file.relative_to(root))


def _file_opener(path: Path):
    """Return a callable opening ``path`` for binary reads."""
    def open_source():
        return path.open("rb")

    return open_source


def match_directory(root: Path, query: ClassQuery, source_mode: bool) -> Iterator[Match]:
    """Yield a ``Match`` for each file under ``root`` whose name holds the query."""
    for file in walk_files(root):
        name = file.name
        if query.short_name not in name:
            continue
        opener = _file_opener(file) if source_mode and SOURCE_EXTENSION in name else None
        yield Match(
            kind=MatchKind.DIRECTORY,
            location=str(file),
            package=_relative_name(root, file),
            open_source=opener,
        )


__all__ = [
    "SOURCE_EXTENSION",
    "walk_files",
    "match_directory",
]
