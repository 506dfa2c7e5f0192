"""
Lint rule registry.

Rules are listed in the order they run. Add new rules to ALL_RULES.
"""

from __future__ import annotations

from noirlint.lints.lint_rule import LintRule
from noirlint.lints.unused_function import UnusedFunction
from noirlint.utils.errors import UnknownRuleError

ALL_RULES: dict[str, type[LintRule]] = {
    UnusedFunction.name: UnusedFunction,
}


def default_rules() -> list[LintRule]:
    """Return a fresh instance of every registered rule, in registration order."""
    return [rule_class() for rule_class in ALL_RULES.values()]


def get_rule_by_name(name: str) -> LintRule:
    """
    Instantiate a registered rule by name.

    Raises:
        UnknownRuleError: If no rule with that name is registered
    """
    rule_class = ALL_RULES.get(name)
    if rule_class is None:
        raise UnknownRuleError(name, known=list(ALL_RULES))
    return rule_class()


__all__ = [
    "ALL_RULES",
    "LintRule",
    "UnusedFunction",
    "default_rules",
    "get_rule_by_name",
]
