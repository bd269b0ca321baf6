"""Classpath parsing: environment default, entry classification, JDK source entry."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from .types import JAR_MARKER, ClasspathEntry, DirectoryEntry, JarArchiveEntry

# JVM default when CLASSPATH is unset.
DEFAULT_CLASSPATH = "."
JDK_SOURCE_SUBDIR = "src"


def default_classpath(environ: Mapping[str, str] | None = None) -> str:
    """Return the process classpath string from ``CLASSPATH``."""
    env = os.environ if environ is None else environ
    value = env.get("CLASSPATH")
    return DEFAULT_CLASSPATH if value is None else value


def split_classpath(classpath: str, separator: str = os.pathsep) -> list[str]:
    """Split a classpath string, dropping empty elements."""
    return [part for part in classpath.split(separator) if part]


def classify_entry(raw: str) -> ClasspathEntry:
    """Elements naming a jar are archives; everything else is a directory."""
    if JAR_MARKER in raw:
        return JarArchiveEntry(Path(raw))
    return DirectoryEntry(Path(raw))


def build_classpath(elements: Iterable[str], jdk_source: Path | None = None) -> list[ClasspathEntry]:
    """Classify elements in order, visiting each distinct element once.

    ``jdk_source`` is a validated ``<jdk-root>/src`` directory appended last.
    """
    seen: set[str] = set()
    entries: list[ClasspathEntry] = []
    for raw in elements:
        if raw in seen:
            continue
        seen.add(raw)
        entries.append(classify_entry(raw))
    if jdk_source is not None and str(jdk_source) not in seen:
        entries.append(DirectoryEntry(jdk_source))
    return entries


def jdk_source_directory(jdk_root: Path) -> Path:
    return jdk_root / JDK_SOURCE_SUBDIR


__all__ = [
    "DEFAULT_CLASSPATH",
    "JDK_SOURCE_SUBDIR",
    "default_classpath",
    "split_classpath",
    "classify_entry",
    "build_classpath",
    "jdk_source_directory",
]
