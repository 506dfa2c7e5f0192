"""
Tests for lint rendering and byte offset resolution.
"""

from noirlint.diagnostics import Lint, Reporter, Severity, locate, render, resolve_position
from noirlint.utils.errors import Span


def unused(name: str, start: int) -> Lint:
    return Lint(
        "unused-function",
        Severity.WARNING,
        f"Function '{name}' is unused",
        Span(start, start + len(name)),
    )


class TestResolvePosition:
    """Byte offset to line/column resolution."""

    def test_first_line(self):
        assert resolve_position(b"fn foo() {}", 3) == (1, 4)

    def test_later_line(self):
        source = b"fn a() {}\nfn bar() {}\n"
        assert resolve_position(source, source.index(b"bar")) == (2, 4)

    def test_offset_of_newline_stays_on_its_line(self):
        assert resolve_position(b"ab\ncd", 2) == (1, 3)

    def test_columns_count_bytes(self):
        source = "// é\nfn x() {}".encode("utf-8")
        assert resolve_position(source, source.index(b"x")) == (2, 4)
        assert resolve_position("é x".encode("utf-8"), 3) == (1, 4)

    def test_offset_past_end_falls_back(self):
        assert resolve_position(b"abc", 100) == (1, 1)
        assert locate(b"abc", 100) is None

    def test_locate_returns_line_text(self):
        location = locate(b"one\ntwo\n", 5)
        assert location.line == 2
        assert location.column == 2
        assert location.text == b"two"


class TestRender:
    """Report rendering."""

    def test_single_lint(self, write_source):
        source = "fn foo() {}\n"
        path = write_source(source)
        report = render([unused("foo", 3)], path)
        assert report.splitlines() == [
            "warning[unused-function]: Function 'foo' is unused",
            f"  --> {path}:1:4",
            "   | fn foo() {}",
            "   |    ^",
        ]

    def test_caret_under_column_on_later_line(self, write_source):
        source = "pub fn main() {}\n\n    fn helper() {}   \n"
        path = write_source(source)
        report = render([unused("helper", source.index("helper"))], path)
        lines = report.splitlines()
        assert lines[1] == f"  --> {path}:3:8"
        assert lines[2] == "   |     fn helper() {}"
        assert lines[3] == "   |        ^"
        assert lines[3].index("^") == lines[2].index("helper")

    def test_caret_aligned_after_multibyte_text(self, write_source):
        source = 'fn f() { "é"; g() }'
        path = write_source(source)
        offset = len(source[: source.index("g()")].encode("utf-8"))
        lines = render([unused("g", offset)], path).splitlines()
        assert lines[1].endswith(f":1:{offset + 1}")
        assert lines[3].index("^") == lines[2].index("g()")

    def test_blocks_separated_by_one_blank_line(self, write_source):
        source = "fn a() {}\nfn b() {}\n"
        path = write_source(source)
        report = render([unused("a", 3), unused("b", source.index("b"))], path)
        blocks = report.split("\n\n")
        assert len(blocks) == 2
        assert blocks[1].startswith("warning[unused-function]: Function 'b' is unused")
        assert "\n\n\n" not in report

    def test_lint_without_span(self, write_source):
        path = write_source("fn a() {}")
        lint = Lint("custom", Severity.ERROR, "Something global")
        assert render([lint], path) == "error[custom]: Something global"

    def test_missing_file_falls_back(self, tmp_path):
        path = tmp_path / "gone.nr"
        report = render([unused("foo", 3)], path)
        assert report.splitlines() == [
            "warning[unused-function]: Function 'foo' is unused",
            f"  --> {path}:1:1",
        ]

    def test_offset_outside_file_falls_back(self, write_source):
        path = write_source("fn a() {}")
        report = render([unused("zzz", 500)], path)
        assert report.splitlines()[1] == f"  --> {path}:1:1"
        assert len(report.splitlines()) == 2

    def test_empty_input(self, tmp_path):
        assert render([], tmp_path / "main.nr") == ""

    def test_order_is_preserved(self, write_source):
        source = "fn a() {}\nfn b() {}\n"
        path = write_source(source)
        report = render([unused("b", source.index("b")), unused("a", 3)], path)
        assert report.index("'b'") < report.index("'a'")


class TestColor:
    """ANSI colors."""

    def test_color_output_contains_escape_codes(self, write_source):
        path = write_source("fn foo() {}")
        report = Reporter(use_color=True).render([unused("foo", 3)], path)
        assert "\033[93m" in report
        assert "\033[0m" in report

    def test_plain_output_has_no_escape_codes(self, write_source):
        path = write_source("fn foo() {}")
        report = Reporter(use_color=False).render([unused("foo", 3)], path)
        assert "\033[" not in report

    def test_error_severity_color(self, write_source):
        path = write_source("fn foo() {}")
        lint = Lint("x", Severity.ERROR, "bad", Span(0, 2))
        assert "\033[91m" in Reporter(use_color=True).render([lint], path)
