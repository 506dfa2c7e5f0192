"""
Diagnostic generation for the noirlint language server.

This module converts syntax errors and lints into LSP diagnostics. Spans are
byte offsets into the UTF-8 source while LSP positions count UTF-16 code
units, so every offset goes through `offset_to_position`.
"""

from typing import Optional

from lsprotocol import types

from noirlint.analysis import Analyzer
from noirlint.diagnostics import Lint, Severity, locate
from noirlint.frontend import parse_program
from noirlint.lints import LintRule
from noirlint.utils.errors import NoirLintError, Span

SOURCE_NAME = "noirlint"

SEVERITY_MAP = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
}

# Rules whose findings mark code that can be removed
UNNECESSARY_RULES = frozenset({"unused-function"})


def offset_to_position(source: bytes, offset: int) -> types.Position:
    """
    Convert a byte offset to a 0-based LSP position.

    Offsets outside the source map to the start of the document.
    """
    location = locate(source, offset)
    if location is None:
        return types.Position(line=0, character=0)
    prefix = location.text[: location.column - 1].decode("utf-8", errors="replace")
    character = len(prefix.encode("utf-16-le")) // 2
    return types.Position(line=location.line - 1, character=character)


def span_to_range(source: bytes, span: Optional[Span]) -> types.Range:
    """Convert a byte span to an LSP range (the first character if span is None)."""
    if span is None:
        return types.Range(
            start=types.Position(line=0, character=0),
            end=types.Position(line=0, character=1),
        )
    start = offset_to_position(source, span.start)
    end = offset_to_position(source, span.end)
    if (end.line, end.character) <= (start.line, start.character):
        end = types.Position(line=start.line, character=start.character + 1)
    return types.Range(start=start, end=end)


class DiagnosticProvider:
    """
    Generates LSP diagnostics from Noir source code.

    Syntax errors are reported as errors and stop analysis. Otherwise every
    lint becomes one diagnostic.
    """

    def __init__(
        self, source: str, uri: str, rules: Optional[list[LintRule]] = None
    ) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The Noir source code to analyze
            uri: The document URI, used as filename in error messages
            rules: Rules to run (default: all registered rules)
        """
        self.source = source
        self.uri = uri
        self.rules = rules
        self._encoded = source.encode("utf-8")
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects
        """
        self._diagnostics = []

        module, errors = parse_program(self.source, filename=self.uri)
        if errors:
            for error in errors:
                self._add_error(error)
            return self._diagnostics

        try:
            lints = Analyzer(self.rules).analyze(module)
        except NoirLintError as e:
            self._add_error(e)
            return self._diagnostics

        for lint in lints:
            self._add_lint(lint)
        return self._diagnostics

    def _add_error(self, error: NoirLintError) -> None:
        self._diagnostics.append(
            types.Diagnostic(
                range=span_to_range(self._encoded, error.span),
                message=error.message,
                severity=types.DiagnosticSeverity.Error,
                source=SOURCE_NAME,
            )
        )

    def _add_lint(self, lint: Lint) -> None:
        tags: list[types.DiagnosticTag] = []
        if lint.name in UNNECESSARY_RULES:
            tags.append(types.DiagnosticTag.Unnecessary)

        self._diagnostics.append(
            types.Diagnostic(
                range=span_to_range(self._encoded, lint.span),
                message=lint.description,
                severity=SEVERITY_MAP[lint.severity],
                source=SOURCE_NAME,
                code=lint.name,
                tags=tags or None,
            )
        )


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The Noir source code
        uri: The document URI

    Returns:
        List of LSP diagnostics
    """
    return DiagnosticProvider(source, uri).get_diagnostics()
