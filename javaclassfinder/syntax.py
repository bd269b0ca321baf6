"""Source body decoding and optional terminal highlighting."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_STYLE

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def decode_source(data: bytes) -> str:
    """Decode source bytes using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def normalize_lines(text: str) -> str:
    """Join lines with ``\\n`` and end with exactly one newline.

    Only ``\\r\\n``, ``\\r`` and ``\\n`` break lines; form feeds and other
    separators stay in the text.
    """
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"


def _normalize_style(style: str) -> str:
    """Validate requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def colorize_source(source: str, filename: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` for a terminal, picking the lexer from ``filename``."""
    try:
        lexer = get_lexer_for_filename(PurePosixPath(filename).name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, TerminalFormatter(style=_normalize_style(style)))


__all__ = ["decode_source", "normalize_lines", "colorize_source"]
