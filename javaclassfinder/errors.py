"""Exception types raised by the finder.

Expected absences (missing entries, unknown packages) are never errors; these
types cover usage failures and failures acting on a confirmed match.
"""

from __future__ import annotations


class FinderError(Exception):
    """Base class for failures that end a run with a non-zero status."""


class UsageError(FinderError):
    """Command-line arguments could not be turned into a search."""


class EntryScanError(FinderError):
    """A classpath entry exists but could not be scanned."""


class DisassemblerError(FinderError):
    """The external disassembler could not be started."""


class SourceReadError(FinderError):
    """A matched source body could not be read."""


__all__ = [
    "FinderError",
    "UsageError",
    "EntryScanError",
    "DisassemblerError",
    "SourceReadError",
]
