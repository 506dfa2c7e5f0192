"""
The lint rule contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from noirlint.analysis.context import AnalysisContext
    from noirlint.diagnostics.lint import Lint


class LintRule(ABC):
    """
    Base class for lint rules.

    A rule inspects a completed, read-only AnalysisContext and returns its
    findings. Rules never see the syntax tree directly and never modify the
    context.

    Subclasses set `name` and `description` and implement `lint`.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def lint(self, context: AnalysisContext) -> list[Lint]:
        """Return the lints this rule finds in the context."""

    def clone(self) -> LintRule:
        """Return a new, independent instance of this rule."""
        return type(self)()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
