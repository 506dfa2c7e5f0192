"""
Lint diagnostics produced by lint rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from noirlint.utils.errors import Span


class Severity(Enum):
    """Severity of a lint."""

    WARNING = "warning"
    ERROR = "error"

    def color_code(self) -> str:
        """Get ANSI color code for this severity."""
        colors = {
            Severity.ERROR: "\033[91m",  # Red
            Severity.WARNING: "\033[93m",  # Yellow
        }
        return colors.get(self, "")

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Lint:
    """
    A single finding emitted by a lint rule.

    Attributes:
        name: Identifier of the rule that produced it (e.g. "unused-function")
        severity: WARNING or ERROR
        description: Human-readable message
        span: Byte span of the offending code, if the rule could locate it
    """

    name: str
    severity: Severity
    description: str
    span: Optional[Span] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        location = f" at {self.span}" if self.span is not None else ""
        return f"{self.severity.label}[{self.name}]: {self.description}{location}"
