"""Classpath model and class matching.

This package contains the non-rendering search primitives:
- classpath entry and match datatypes
- classpath string parsing and the optional JDK source entry
- directory-tree, jar-archive and runtime-image matchers
- the orchestrator that streams matches in classpath order
"""

from __future__ import annotations

from .types import (
    ClasspathEntry,
    DirectoryEntry,
    Flow,
    JarArchiveEntry,
    Match,
    MatchKind,
)
from .entries import build_classpath, classify_entry, default_classpath, jdk_source_directory, split_classpath
from .directory import match_directory, walk_files
from .archive import iter_archive_matches, match_archive
from .runtime import JimageCatalog, LoadedClass, RuntimeCatalog, RuntimeImage, match_runtime, parse_jimage_listing
from .search import SearchOutcome, iter_entry_matches, run_search

__all__ = [
    "ClasspathEntry",
    "DirectoryEntry",
    "Flow",
    "JarArchiveEntry",
    "Match",
    "MatchKind",
    "build_classpath",
    "classify_entry",
    "default_classpath",
    "jdk_source_directory",
    "split_classpath",
    "match_directory",
    "walk_files",
    "iter_archive_matches",
    "match_archive",
    "JimageCatalog",
    "LoadedClass",
    "RuntimeCatalog",
    "RuntimeImage",
    "match_runtime",
    "parse_jimage_listing",
    "SearchOutcome",
    "iter_entry_matches",
    "run_search",
]
