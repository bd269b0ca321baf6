"""Search query value derived from the user-supplied class name."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassQuery:
    """Short class name plus the forms used for the different match sources.

    ``slash_form`` is compared against archive entry names, ``dot_form`` is
    appended to package names when probing the runtime.
    """

    short_name: str

    @property
    def slash_form(self) -> str:
        return self.short_name.replace(".", "/")

    @property
    def dot_form(self) -> str:
        return self.short_name.replace("/", ".")


__all__ = ["ClassQuery"]
