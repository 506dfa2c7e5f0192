"""
Human-readable rendering of lints.

Example output:
    warning[unused-function]: Function 'foo' is unused
      --> src/main.nr:3:4
       | fn foo() {}
       |    ^

Byte offsets are resolved to 1-based line and column numbers by re-reading
the source file. If the file cannot be read, or an offset lies outside it,
the location falls back to 1:1 and the snippet is left out.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union

from noirlint.diagnostics.lint import Lint

logger = logging.getLogger(__name__)

RESET = "\033[0m"
BOLD = "\033[1m"
BLUE = "\033[94m"


class SourceLocation(NamedTuple):
    """
    A resolved byte offset.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed byte column within the line
        text: The raw bytes of the line, without its newline
    """

    line: int
    column: int
    text: bytes


def locate(source: bytes, offset: int) -> Optional[SourceLocation]:
    """
    Resolve a byte offset to its line and column.

    Lines are scanned in order, each contributing its length plus one newline
    byte, until the cumulative length passes the offset.

    Returns:
        The location, or None if the offset lies outside the source
    """
    if offset < 0:
        return None
    consumed = 0
    for number, text in enumerate(source.split(b"\n"), start=1):
        line_end = consumed + len(text) + 1
        if line_end > offset:
            return SourceLocation(number, offset - consumed + 1, text)
        consumed = line_end
    return None


def resolve_position(source: bytes, offset: int) -> tuple[int, int]:
    """Resolve a byte offset to (line, column), falling back to (1, 1)."""
    location = locate(source, offset)
    if location is None:
        return 1, 1
    return location.line, location.column


class Reporter:
    """
    Renders lints against the file they were found in.

    Usage:
        reporter = Reporter(use_color=False)
        print(reporter.render(lints, "src/main.nr"))
    """

    def __init__(self, use_color: bool = True) -> None:
        self.use_color = use_color

    def _style(self, text: str, *codes: str) -> str:
        if not self.use_color or not codes:
            return text
        return "".join(codes) + text + RESET

    def _read_source(self, source_path: Path) -> Optional[bytes]:
        try:
            return source_path.read_bytes()
        except OSError as e:
            logger.warning("Could not re-read %s for snippets: %s", source_path, e)
            return None

    def render(self, lints: Sequence[Lint], source_path: Union[str, Path]) -> str:
        """
        Render lints in input order, one block per lint.

        Args:
            lints: Lints to render
            source_path: Path of the analyzed file, re-read for snippets

        Returns:
            The report; blocks are separated by one blank line
        """
        path = Path(source_path)
        source: Optional[bytes] = None
        if any(lint.span is not None for lint in lints):
            source = self._read_source(path)
        return "\n\n".join(self._render_lint(lint, path, source) for lint in lints)

    def _render_lint(self, lint: Lint, path: Path, source: Optional[bytes]) -> str:
        header = (
            self._style(f"{lint.severity.label}[{lint.name}]", lint.severity.color_code(), BOLD)
            + ": "
            + self._style(lint.description, BOLD)
        )
        lines = [header]
        if lint.span is None:
            return header

        location = locate(source, lint.span.start) if source is not None else None
        line, column = (location.line, location.column) if location else (1, 1)
        lines.append(f"  {self._style('-->', BLUE)} {path}:{line}:{column}")

        if location is not None:
            marker = self._style("   |", BLUE)
            text = location.text.decode("utf-8", errors="replace").rstrip()
            # Pad by characters so the caret sits under multi-byte text too
            prefix = location.text[: location.column - 1].decode("utf-8", errors="replace")
            lines.append(f"{marker} {text}".rstrip())
            lines.append(
                f"{marker} {' ' * len(prefix)}"
                + self._style("^", lint.severity.color_code(), BOLD)
            )
        return "\n".join(lines)


def render(
    lints: Sequence[Lint], source_path: Union[str, Path], use_color: bool = False
) -> str:
    """Render lints as plain text (or ANSI-colored text when use_color is set)."""
    return Reporter(use_color=use_color).render(lints, source_path)
