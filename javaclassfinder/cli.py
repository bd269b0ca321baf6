"""Command-line front door for javaclassfinder.

Parses the prefix-matched flags, builds the classpath and display
configuration, then streams matches through the report renderer.
"""

from __future__ import annotations

import sys
import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .classpath import (
    JimageCatalog,
    RuntimeCatalog,
    build_classpath,
    default_classpath,
    jdk_source_directory,
    run_search,
    split_classpath,
)
from .config import DisplayConfig, load_settings, resolve_disassembler_command, resolve_java_home
from .errors import FinderError, UsageError
from .log import configure_logging
from .query import ClassQuery
from .render import ReportRenderer

PROG = "jcf"

USAGE_LINES = (
    f"Usage: {PROG} ClassName [options]",
    "-m : Get the methods of the class",
    "-mp : Get the private methods of the class",
    "-path : Doesn't print the path of the class",
    "-package : Doesn't print the package of the class",
    "-rt : Only search for class in the runtime",
    "-s : Search for the source, only prints the first one",
    "-js <path-to-jdk-root-source-folder> : Also search <path>/src",
    "-debug : Print diagnostic lines",
    "-h : Print this help",
)


@dataclass(frozen=True)
class CliOptions:
    class_name: str
    display: DisplayConfig
    jdk_source: Path | None = None


def usage_text() -> str:
    return "\n".join(USAGE_LINES)


def _require_directory(path: Path) -> None:
    if not path.exists():
        raise UsageError(f"File path '{path}' does not exist")
    if not path.is_dir():
        raise UsageError(f"File path '{path}' is not a directory")


def resolve_jdk_source(jdk_root: Path) -> Path:
    """Validate ``<jdk_root>`` and ``<jdk_root>/src``; return the latter."""
    _require_directory(jdk_root)
    source_dir = jdk_source_directory(jdk_root)
    _require_directory(source_dir)
    return source_dir


def parse_args(argv: Sequence[str]) -> CliOptions:
    """Parse flags by prefix in a fixed order; any other argument is the class name.

    ``-mp`` is tested before ``-m`` and ``-package`` after ``-path``. The last
    non-flag argument wins.
    """
    class_name: str | None = None
    show_methods = False
    show_private_methods = False
    show_path = True
    show_package = True
    source_mode = False
    runtime_only = False
    debug = False
    jdk_source: Path | None = None

    idx = 0
    count = len(argv)
    while idx < count:
        arg = argv[idx]
        idx += 1
        if arg.startswith("-mp"):
            show_private_methods = True
        elif arg.startswith("-m"):
            show_methods = True
        elif arg.startswith("-debug"):
            debug = True
        elif arg.startswith("-path"):
            show_path = False
        elif arg.startswith("-package"):
            show_package = False
        elif arg.startswith("-rt"):
            runtime_only = True
        elif arg.startswith("-s"):
            source_mode = True
        elif arg.startswith("-js"):
            if idx >= count:
                raise UsageError("Missing jdk source location")
            jdk_source = resolve_jdk_source(Path(argv[idx]))
            idx += 1
        elif arg.startswith("-h"):
            raise UsageError("")
        else:
            class_name = arg

    if class_name is None:
        raise UsageError("A class name is required")

    display = DisplayConfig(
        show_methods=show_methods,
        show_private_methods=show_private_methods,
        show_path=show_path,
        show_package=show_package,
        source_mode=source_mode,
        runtime_only=runtime_only,
        debug=debug,
    )
    return CliOptions(class_name=class_name, display=display, jdk_source=jdk_source)


def main(argv: Sequence[str] | None = None, runtime_catalog: RuntimeCatalog | None = None) -> None:
    """Parse arguments and print every match for the requested class.

    Usage failures and fatal errors exit with status 1. ``runtime_catalog`` is
    primarily for tests; by default the JDK runtime image is consulted.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        options = parse_args(args)
    except UsageError as exc:
        message = str(exc)
        if message:
            print(message, file=sys.stderr)
        print(usage_text(), file=sys.stderr)
        raise SystemExit(1) from None

    display = options.display
    configure_logging(display.debug)

    settings = load_settings()
    java_home = resolve_java_home(settings)
    catalog = runtime_catalog if runtime_catalog is not None else JimageCatalog(java_home)
    entries = build_classpath(split_classpath(default_classpath()), options.jdk_source)
    renderer = ReportRenderer(
        display=display,
        disassembler=resolve_disassembler_command(settings, java_home),
        highlight=settings.highlight_source,
        style=settings.style,
    )

    try:
        run_search(ClassQuery(options.class_name), entries, display, catalog, renderer)
    except FinderError as exc:
        sys.stdout.flush()
        print(f"{PROG}: {exc}", file=sys.stderr)
        if display.debug:
            traceback.print_exception(exc, file=sys.stderr)
        raise SystemExit(1) from None
    sys.stdout.flush()


if __name__ == "__main__":
    main()
