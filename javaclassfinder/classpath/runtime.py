"""Loaded-class resolution against the JDK runtime image.

The runtime's package set is read from ``<java_home>/lib/modules`` through the
JDK ``jimage list`` tool. Each package is checked for ``<package>.<query>`` the
way a class loader would; misses are the normal case and are skipped.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..query import ClassQuery
from .types import Match, MatchKind

MODULE_PREFIX = "Module: "
CLASS_SUFFIX = ".class"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedClass:
    """Fully-qualified class name plus the URL of its compiled form."""

    name: str
    location: str


class RuntimeCatalog(Protocol):
    def resolve(self, query: ClassQuery) -> Iterable[LoadedClass]:
        ...


@dataclass
class RuntimeImage:
    """Class resources of a runtime image keyed by path, valued by module."""

    classes: dict[str, str] = field(default_factory=dict)
    packages: set[str] = field(default_factory=set)

    def add(self, module: str, resource: str) -> None:
        """Record a packaged ``.class`` resource; other resources are ignored."""
        if not resource.endswith(CLASS_SUFFIX):
            return
        package, sep, _name = resource.rpartition("/")
        if not sep:
            return
        self.classes[resource] = module
        self.packages.add(package)

    def resolve(self, query: ClassQuery) -> Iterator[LoadedClass]:
        """Look up ``query`` in every package, in name order."""
        for package in sorted(self.packages):
            resource = f"{package}/{query.slash_form}{CLASS_SUFFIX}"
            module = self.classes.get(resource)
            if module is None:
                continue
            yield LoadedClass(
                name=f"{package.replace('/', '.')}.{query.dot_form}",
                location=f"jrt:/{module}/{resource}",
            )


def parse_jimage_listing(lines: Iterable[str]) -> RuntimeImage:
    """Parse ``jimage list`` output.

    Resource lines are indented below a ``Module: <name>`` header; anything
    before the first header is ignored.
    """
    image = RuntimeImage()
    module: str | None = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        if not stripped:
            continue
        if line.startswith(MODULE_PREFIX):
            module = line[len(MODULE_PREFIX):].strip()
            continue
        if module is None or line == stripped:
            continue
        image.add(module, stripped)
    return image


class JimageCatalog:
    """``RuntimeCatalog`` backed by the ``modules`` image of a JDK install.

    The listing is loaded on first use. A missing JDK, tool, or image yields
    an empty catalog.
    """

    def __init__(self, java_home: Path | None) -> None:
        self.java_home = java_home
        self._image: RuntimeImage | None = None

    def _jimage_tool(self) -> str | None:
        """Prefer the JDK-bundled ``jimage``, then one on PATH."""
        assert self.java_home is not None
        bundled = self.java_home / "bin" / "jimage"
        if bundled.is_file():
            return str(bundled)
        return shutil.which("jimage")

    def _load(self) -> RuntimeImage:
        """List the runtime image, or return an empty one when unavailable."""
        if self.java_home is None:
            logger.debug("No Java home found; runtime search skipped")
            return RuntimeImage()
        modules = self.java_home / "lib" / "modules"
        if not modules.is_file():
            logger.debug("No runtime image at %s", modules)
            return RuntimeImage()
        tool = self._jimage_tool()
        if tool is None:
            logger.debug("jimage not found; runtime search skipped")
            return RuntimeImage()

        cmd = [tool, "list", str(modules)]
        logger.debug(" ".join(cmd))
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.debug("Failed to run jimage: %s", exc)
            return RuntimeImage()

        try:
            assert proc.stdout is not None
            image = parse_jimage_listing(proc.stdout)
        finally:
            _stdout_unused, stderr_text = proc.communicate()

        if proc.returncode != 0:
            logger.debug("jimage exited with %s: %s", proc.returncode, (stderr_text or "").strip())
            if not image.classes:
                return RuntimeImage()
        return image

    def resolve(self, query: ClassQuery) -> Iterator[LoadedClass]:
        """Load the image listing on first call, then search it for ``query``."""
        if self._image is None:
            self._image = self._load()
        return self._image.resolve(query)


def match_runtime(catalog: RuntimeCatalog, query: ClassQuery) -> Iterator[Match]:
    """Wrap each loaded class resolved by ``catalog`` as a runtime ``Match``."""
    for loaded in catalog.resolve(query):
        yield Match(kind=MatchKind.RUNTIME, location=loaded.location, package=loaded.name)


__all__ = [
    "LoadedClass",
    "RuntimeCatalog",
    "RuntimeImage",
    "parse_jimage_listing",
    "JimageCatalog",
    "match_runtime",
]
