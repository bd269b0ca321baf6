"""Report rendering for matches.

Each match prints, in order and subject to the display toggles: a ``Path:``
line, a ``Package:`` line, the disassembler listing, and in source mode the
source body. Printing a source body ends the search.
"""

from __future__ import annotations

import sys
import zipfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

from .classpath.types import Flow, Match, MatchKind
from .config import DEFAULT_STYLE, DisplayConfig
from .disassembler import run_disassembler
from .errors import SourceReadError
from .syntax import colorize_source, decode_source, normalize_lines

CLASS_SUFFIX = ".class"
PACKAGE_INDENT = "    "


def from_path_to_package(path: str) -> str:
    """Turn a class file path into a dotted name.

    ``a/b/C.class`` becomes ``a.b.C``; strings without ``.class`` pass through
    unchanged.
    """
    if CLASS_SUFFIX not in path:
        return path
    return path.replace("\\", ".").replace("/", ".").replace(CLASS_SUFFIX, "")


def class_identifier(entry_name: str) -> str:
    """Disassembler identifier for an archive entry (``.class`` dropped)."""
    return entry_name.replace(CLASS_SUFFIX, "")


@dataclass
class ReportRenderer:
    """Callable render step for ``run_search``."""

    display: DisplayConfig
    disassembler: Sequence[str]
    out: TextIO | None = None
    highlight: bool = False
    style: str = DEFAULT_STYLE
    run_tool: Callable[..., int] = run_disassembler

    def _stream(self) -> TextIO:
        """Configured output stream, else the current ``sys.stdout``."""
        return self.out if self.out is not None else sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self._stream())

    def print_path(self, match: Match) -> None:
        """Print the ``Path:`` line once per container when path display is on."""
        if self.display.show_path and match.first_in_container:
            self._print(f"Path: {match.location}")

    def print_package(self, match: Match) -> None:
        """Print the dotted ``Package:`` line, indented under a path line."""
        if not self.display.show_package:
            return
        indent = PACKAGE_INDENT if self.display.show_path else ""
        self._print(f"{indent}Package: {from_path_to_package(match.package)}")

    def print_methods(self, match: Match) -> None:
        """Run the disassembler; the private listing wins over the public one."""
        if not self.display.lists_methods:
            return
        private = self.display.show_private_methods
        self._stream().flush()
        if match.kind is MatchKind.ARCHIVE:
            assert match.entry_name is not None
            self.run_tool(
                self.disassembler,
                class_identifier(match.entry_name),
                private=private,
                classpath=match.location,
            )
        else:
            self.run_tool(self.disassembler, match.location, private=private)

    def print_source(self, match: Match) -> Flow:
        """Print the source body and return ``Flow.STOP``, else ``Flow.CONTINUE``.

        Encrypted or unsupported archive entries are fatal like I/O failures.
        """
        if not self.display.source_mode or match.open_source is None:
            return Flow.CONTINUE
        name = match.entry_name or match.location
        try:
            with match.open_source() as stream:
                data = stream.read()
        except (OSError, zipfile.BadZipFile, RuntimeError, NotImplementedError) as exc:
            raise SourceReadError(f"Failed to read source {name}: {exc}") from exc

        text = normalize_lines(decode_source(data))
        stream_out = self._stream()
        if self.highlight and stream_out.isatty():
            text = colorize_source(text, name, self.style)
        stream_out.write(text)
        stream_out.flush()
        return Flow.STOP

    def __call__(self, match: Match) -> Flow:
        self.print_path(match)
        self.print_package(match)
        self.print_methods(match)
        return self.print_source(match)


__all__ = [
    "CLASS_SUFFIX",
    "PACKAGE_INDENT",
    "from_path_to_package",
    "class_identifier",
    "ReportRenderer",
]
