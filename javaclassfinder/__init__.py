"""Public package surface for javaclassfinder.

Exports ``main`` for programmatic CLI invocation.
Search primitives live in ``javaclassfinder.classpath``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
