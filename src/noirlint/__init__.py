"""
noirlint - static analysis for the Noir language.

noirlint parses a Noir source file, walks its syntax tree once to collect
function definitions and call sites, and runs a set of lint rules over the
collected facts.
"""

from noirlint.analysis import Analyzer, analyze, lint_file, lint_source, parse_file, parse_source
from noirlint.diagnostics import Lint, Reporter, Severity, render

__version__ = "0.1.0"
__all__ = [
    "Analyzer",
    "Lint",
    "Reporter",
    "Severity",
    "analyze",
    "lint_file",
    "lint_source",
    "parse_file",
    "parse_source",
    "render",
]
