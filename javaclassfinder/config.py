"""Run configuration and persistent user settings.

``DisplayConfig`` holds the per-run flags parsed from the command line.
``FinderSettings`` comes from an optional JSON file in the platform config
directory. All settings access is defensive: malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
import os
import shlex
import shutil
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "javaclassfinder"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"
DEFAULT_DISASSEMBLER = "javap"


@dataclass(frozen=True)
class DisplayConfig:
    """Display and mode toggles, fixed once arguments are parsed."""

    show_methods: bool = False
    show_private_methods: bool = False
    show_path: bool = True
    show_package: bool = True
    source_mode: bool = False
    runtime_only: bool = False
    debug: bool = False

    @property
    def lists_methods(self) -> bool:
        return self.show_methods or self.show_private_methods


@dataclass(frozen=True)
class FinderSettings:
    """User settings loaded from ``CONFIG_PATH``."""

    javap: tuple[str, ...] | None = None
    java_home: Path | None = None
    highlight_source: bool = False
    style: str = DEFAULT_STYLE


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _command_value(value: object) -> tuple[str, ...] | None:
    """Accept a shell-style string or a list of strings as a command line."""
    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError:
            return None
        return tuple(parts) or None
    if isinstance(value, list) and value and all(isinstance(part, str) for part in value):
        return tuple(value)
    return None


def load_settings() -> FinderSettings:
    """Build ``FinderSettings`` from the config file, validating each key."""
    data = load_config()

    java_home_value = data.get("java_home")
    java_home = Path(java_home_value).expanduser() if isinstance(java_home_value, str) and java_home_value else None

    highlight = data.get("highlight_source")
    style = data.get("style")
    return FinderSettings(
        javap=_command_value(data.get("javap")),
        java_home=java_home,
        highlight_source=highlight if isinstance(highlight, bool) else False,
        style=style if isinstance(style, str) and style else DEFAULT_STYLE,
    )


def resolve_java_home(settings: FinderSettings) -> Path | None:
    """Locate the JDK root: config, then ``$JAVA_HOME``, then ``java`` on PATH."""
    if settings.java_home is not None:
        return settings.java_home
    env_home = os.environ.get("JAVA_HOME", "").strip()
    if env_home:
        return Path(env_home)
    java = shutil.which("java")
    if java is None:
        return None
    # <home>/bin/java
    return Path(java).resolve().parent.parent


def resolve_disassembler_command(settings: FinderSettings, java_home: Path | None) -> tuple[str, ...]:
    """Return the disassembler command prefix for this run."""
    if settings.javap is not None:
        return settings.javap
    if java_home is not None:
        candidate = java_home / "bin" / DEFAULT_DISASSEMBLER
        if candidate.is_file():
            return (str(candidate),)
    return (DEFAULT_DISASSEMBLER,)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_STYLE",
    "DisplayConfig",
    "FinderSettings",
    "load_config",
    "load_settings",
    "resolve_java_home",
    "resolve_disassembler_command",
]
