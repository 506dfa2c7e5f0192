"""
Error types and source span tracking for noirlint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """
    A half-open byte range into the analyzed source.

    Attributes:
        start: 0-indexed byte offset of the first byte
        end: 0-indexed byte offset one past the last byte
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def merge(self, other: "Span") -> "Span":
        """Return the smallest span covering both spans."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class NoirLintError(Exception):
    """Base exception for all noirlint errors."""

    def __init__(self, message: str, span: Optional[Span] = None) -> None:
        self.message = message
        self.span = span
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.span is not None:
            return f"[{self.span}] {self.message}"
        return self.message


class LexerError(NoirLintError):
    """Raised when the lexer encounters an invalid character or literal."""

    pass


class ParserError(NoirLintError):
    """Raised when the parser encounters a syntax error."""

    pass


class AnalyzerError(NoirLintError):
    """Base class for errors surfaced by the analysis entry points."""

    pass


class ParsingError(AnalyzerError):
    """
    Raised when the source could not be parsed.

    Carries every error the parser reported so callers can print them all.
    """

    def __init__(self, errors: Sequence[NoirLintError]) -> None:
        self.errors: tuple[NoirLintError, ...] = tuple(errors)
        count = len(self.errors)
        super().__init__(f"Parsing failed with {count} error{'s' if count != 1 else ''}")

    def _format_message(self) -> str:
        lines = [self.message]
        for error in self.errors:
            lines.append(f"  - {error}")
        return "\n".join(lines)


class TraversalFailed(AnalyzerError):
    """
    Raised when an internal invariant of the traversal engine is violated.

    This signals an engine bug, never bad user input.
    """

    pass


class FileReadError(AnalyzerError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Opening {self.path} failed: {reason}")


class ManifestError(NoirLintError):
    """Raised when a Nargo.toml manifest is missing or malformed."""

    def __init__(self, message: str, manifest_path: Optional[Path] = None) -> None:
        self.manifest_path = manifest_path
        super().__init__(message)

    def _format_message(self) -> str:
        if self.manifest_path is not None:
            return f"{self.manifest_path}: {self.message}"
        return self.message


class UnknownRuleError(NoirLintError):
    """Raised when a lint rule name is not present in the registry."""

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)
        message = f"Unknown lint rule '{name}'"
        if self.known:
            message += f" (known rules: {', '.join(self.known)})"
        super().__init__(message)
