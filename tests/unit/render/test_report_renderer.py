"""Tests for match report formatting, method listing dispatch and source output."""

from __future__ import annotations

import io
import unittest
from unittest import mock

from javaclassfinder.classpath import Flow, Match, MatchKind
from javaclassfinder.config import DisplayConfig
from javaclassfinder.errors import SourceReadError
from javaclassfinder.render import ReportRenderer, class_identifier, from_path_to_package


def _renderer(display: DisplayConfig, **kwargs) -> tuple[ReportRenderer, io.StringIO, mock.Mock]:
    out = io.StringIO()
    run_tool = mock.Mock(return_value=0)
    renderer = ReportRenderer(display=display, disassembler=("javap",), out=out, run_tool=run_tool, **kwargs)
    return renderer, out, run_tool


def _source(text: bytes):
    return lambda: io.BytesIO(text)


class _TerminalStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


DIRECTORY_MATCH = Match(kind=MatchKind.DIRECTORY, location="out/com/x/Foo.class", package="com/x/Foo.class")
ARCHIVE_MATCH = Match(
    kind=MatchKind.ARCHIVE,
    location="lib/util.jar",
    package="com/x/Foo.class",
    entry_name="com/x/Foo.class",
)


class PackageNameTests(unittest.TestCase):
    def test_class_paths_become_dotted_names(self) -> None:
        self.assertEqual(from_path_to_package("a/b/C.class"), "a.b.C")
        self.assertEqual(from_path_to_package("a\\b\\C.class"), "a.b.C")

    def test_strings_without_class_suffix_pass_through(self) -> None:
        self.assertEqual(from_path_to_package("already.a.Package"), "already.a.Package")
        self.assertEqual(from_path_to_package("com/x/Foo.java"), "com/x/Foo.java")

    def test_class_identifier_drops_class_suffix(self) -> None:
        self.assertEqual(class_identifier("com/x/Foo$Inner.class"), "com/x/Foo$Inner")


class ReportLinesTests(unittest.TestCase):
    def test_default_display_prints_path_and_indented_package(self) -> None:
        renderer, out, run_tool = _renderer(DisplayConfig())

        verdict = renderer(DIRECTORY_MATCH)

        self.assertIs(verdict, Flow.CONTINUE)
        self.assertEqual(out.getvalue(), "Path: out/com/x/Foo.class\n    Package: com.x.Foo\n")
        run_tool.assert_not_called()

    def test_container_path_is_printed_only_for_first_archive_match(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig())
        second = Match(
            kind=MatchKind.ARCHIVE,
            location="lib/util.jar",
            package="com/x/FooImpl.class",
            entry_name="com/x/FooImpl.class",
            first_in_container=False,
        )

        renderer(ARCHIVE_MATCH)
        renderer(second)

        self.assertEqual(
            out.getvalue(),
            "Path: lib/util.jar\n    Package: com.x.Foo\n    Package: com.x.FooImpl\n",
        )

    def test_suppressed_path_leaves_package_unindented(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig(show_path=False))
        renderer(DIRECTORY_MATCH)
        self.assertEqual(out.getvalue(), "Package: com.x.Foo\n")

    def test_suppressed_package_prints_only_path(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig(show_package=False))
        renderer(DIRECTORY_MATCH)
        self.assertEqual(out.getvalue(), "Path: out/com/x/Foo.class\n")

    def test_both_suppressed_prints_nothing(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig(show_path=False, show_package=False))
        renderer(DIRECTORY_MATCH)
        self.assertEqual(out.getvalue(), "")


class MethodListingTests(unittest.TestCase):
    def test_directory_match_disassembles_location(self) -> None:
        renderer, _out, run_tool = _renderer(DisplayConfig(show_methods=True))

        renderer(DIRECTORY_MATCH)

        run_tool.assert_called_once_with(("javap",), "out/com/x/Foo.class", private=False)

    def test_archive_match_disassembles_entry_against_container(self) -> None:
        renderer, _out, run_tool = _renderer(DisplayConfig(show_methods=True))

        renderer(ARCHIVE_MATCH)

        run_tool.assert_called_once_with(("javap",), "com/x/Foo", private=False, classpath="lib/util.jar")

    def test_private_listing_supersedes_public_listing(self) -> None:
        renderer, _out, run_tool = _renderer(DisplayConfig(show_methods=True, show_private_methods=True))

        renderer(DIRECTORY_MATCH)

        run_tool.assert_called_once_with(("javap",), "out/com/x/Foo.class", private=True)

    def test_runtime_match_disassembles_resource_url(self) -> None:
        renderer, _out, run_tool = _renderer(DisplayConfig(show_private_methods=True))
        match = Match(kind=MatchKind.RUNTIME, location="jrt:/java.base/java/util/List.class", package="java.util.List")

        renderer(match)

        run_tool.assert_called_once_with(("javap",), "jrt:/java.base/java/util/List.class", private=True)


class SourceOutputTests(unittest.TestCase):
    def test_source_body_is_printed_verbatim_and_stops(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig(source_mode=True, show_path=False, show_package=False))
        match = Match(
            kind=MatchKind.ARCHIVE,
            location="lib/util-sources.jar",
            package="com/x/Foo.java",
            entry_name="com/x/Foo.java",
            open_source=_source(b"class Foo {\r\n  int x;\r\n}"),
        )

        verdict = renderer(match)

        self.assertIs(verdict, Flow.STOP)
        self.assertEqual(out.getvalue(), "class Foo {\n  int x;\n}\n")

    def test_match_without_source_continues_in_source_mode(self) -> None:
        renderer, out, _run_tool = _renderer(DisplayConfig(source_mode=True))

        verdict = renderer(DIRECTORY_MATCH)

        self.assertIs(verdict, Flow.CONTINUE)
        self.assertEqual(out.getvalue(), "Path: out/com/x/Foo.class\n    Package: com.x.Foo\n")

    def test_source_read_failure_is_fatal(self) -> None:
        renderer, _out, _run_tool = _renderer(DisplayConfig(source_mode=True))

        def failing_open():
            raise PermissionError("denied")

        match = Match(kind=MatchKind.DIRECTORY, location="src/Foo.java", package="Foo.java", open_source=failing_open)

        with self.assertRaises(SourceReadError) as exc_info:
            renderer(match)
        self.assertIn("src/Foo.java", str(exc_info.exception))

    def test_unreadable_archive_entries_are_fatal(self) -> None:
        renderer, _out, _run_tool = _renderer(DisplayConfig(source_mode=True))
        failures = [
            RuntimeError("File com/a/Foo.java is encrypted, password required for extraction"),
            NotImplementedError("That compression method is not supported"),
        ]

        for failure in failures:
            with self.subTest(failure=type(failure).__name__):

                def failing_open(failure=failure):
                    raise failure

                match = Match(
                    kind=MatchKind.ARCHIVE,
                    location="a-sources.jar",
                    package="com/a/Foo.java",
                    entry_name="com/a/Foo.java",
                    open_source=failing_open,
                )
                with self.assertRaises(SourceReadError) as exc_info:
                    renderer(match)
                self.assertIn("Failed to read source com/a/Foo.java", str(exc_info.exception))

    def test_highlighting_is_skipped_when_output_is_not_a_terminal(self) -> None:
        renderer, out, _run_tool = _renderer(
            DisplayConfig(source_mode=True, show_path=False, show_package=False),
            highlight=True,
        )
        match = Match(kind=MatchKind.DIRECTORY, location="Foo.java", package="Foo.java", open_source=_source(b"class Foo {}\n"))

        with mock.patch("javaclassfinder.render.colorize_source") as colorize:
            renderer(match)

        colorize.assert_not_called()
        self.assertEqual(out.getvalue(), "class Foo {}\n")

    def test_highlighting_applies_on_terminal_output(self) -> None:
        out = _TerminalStringIO()
        renderer = ReportRenderer(
            display=DisplayConfig(source_mode=True, show_path=False, show_package=False),
            disassembler=("javap",),
            out=out,
            highlight=True,
            style="native",
        )
        match = Match(kind=MatchKind.DIRECTORY, location="Foo.java", package="Foo.java", open_source=_source(b"class Foo {}\n"))

        with mock.patch("javaclassfinder.render.colorize_source", return_value="<colored>") as colorize:
            renderer(match)

        colorize.assert_called_once_with("class Foo {}\n", "Foo.java", "native")
        self.assertEqual(out.getvalue(), "<colored>")


if __name__ == "__main__":
    unittest.main()
