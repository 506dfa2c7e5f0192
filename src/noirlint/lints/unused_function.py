"""
unused-function: private and crate-visible functions that are never called.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from noirlint.diagnostics.lint import Lint, Severity
from noirlint.lints.lint_rule import LintRule

if TYPE_CHECKING:
    from noirlint.analysis.context import AnalysisContext

logger = logging.getLogger(__name__)


class UnusedFunction(LintRule):
    """
    Flags every top-level function that is not `pub` and whose name never
    appears as a callee key.

    `pub(crate)` functions are not exempt. Matching is by name only, so a
    call to `other::foo` does not mark `foo` as used, while any call keyed
    `foo` does.

    Example:
        fn helper() {}          // warning: Function 'helper' is unused
        pub fn main() {}        // exempt
    """

    name = "unused-function"
    description = "Detects functions that are not public and never called"

    def lint(self, context: AnalysisContext) -> list[Lint]:
        lints: list[Lint] = []
        for name, definition in context.function_definitions.items():
            if definition.is_public:
                continue
            if name in context.function_calls:
                continue
            logger.debug("Function '%s' has no call sites", name)
            lints.append(
                Lint(
                    name=self.name,
                    severity=Severity.WARNING,
                    description=f"Function '{name}' is unused",
                    span=definition.name.span,
                )
            )
        return lints
