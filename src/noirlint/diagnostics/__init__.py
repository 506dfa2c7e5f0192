"""
Lint diagnostics and their rendering.
"""

from noirlint.diagnostics.lint import Lint, Severity
from noirlint.diagnostics.reporter import (
    Reporter,
    SourceLocation,
    locate,
    render,
    resolve_position,
)

__all__ = [
    "Lint",
    "Reporter",
    "Severity",
    "SourceLocation",
    "locate",
    "render",
    "resolve_position",
]
