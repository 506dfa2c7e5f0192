"""
noirlint Utilities Package.

Common utilities for error handling and source spans.
"""

from noirlint.utils.errors import (
    AnalyzerError,
    FileReadError,
    LexerError,
    ManifestError,
    NoirLintError,
    ParserError,
    ParsingError,
    Span,
    TraversalFailed,
    UnknownRuleError,
)

__all__ = [
    "NoirLintError",
    "LexerError",
    "ParserError",
    "AnalyzerError",
    "ParsingError",
    "TraversalFailed",
    "FileReadError",
    "ManifestError",
    "UnknownRuleError",
    "Span",
]
