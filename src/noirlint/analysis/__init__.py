"""
noirlint analysis engine.

Traverses a parsed module, collects facts into an AnalysisContext and runs
lint rules against it.
"""

from noirlint.analysis.analyzer import (
    Analyzer,
    FrameKind,
    StackFrame,
    analyze,
    lint_file,
    lint_source,
    parse_file,
    parse_source,
)
from noirlint.analysis.context import AnalysisContext

__all__ = [
    "AnalysisContext",
    "Analyzer",
    "FrameKind",
    "StackFrame",
    "analyze",
    "lint_file",
    "lint_source",
    "parse_file",
    "parse_source",
]
