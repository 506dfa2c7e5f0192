"""
Analysis context: the facts collected by one traversal of a module.

The traversal engine fills the context; lint rules only read it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from noirlint.frontend.ast_nodes import CallExpression, FunctionDef
from noirlint.utils.errors import TraversalFailed


class AnalysisContext:
    """
    Function definitions and call sites of a single module.

    Attributes:
        function_definitions: Top-level function name -> its definition.
            A later definition with the same name replaces an earlier one.
        function_calls: Callee key -> every call site with that callee, in
            traversal order. The key is the callee path's segment names
            joined with no separator, so `a::b` and `ab` share a key.

    Once `freeze()` has been called both mappings are read-only and any
    further write raises TraversalFailed.
    """

    def __init__(self) -> None:
        self._function_definitions: dict[str, FunctionDef] = {}
        self._function_calls: dict[str, list[CallExpression]] = {}
        self._frozen = False
        self.function_definitions: Mapping[str, FunctionDef] = self._function_definitions
        self.function_calls: Mapping[str, Sequence[CallExpression]] = self._function_calls

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise TraversalFailed("Analysis context is frozen and cannot be modified")

    def add_function_definition(self, name: str, definition: FunctionDef) -> None:
        """Record a top-level function; overwrites an earlier one of the same name."""
        self._check_writable()
        self._function_definitions[name] = definition

    def add_function_call(self, callee: str, call: CallExpression) -> None:
        """Append a call site under its callee key."""
        self._check_writable()
        self._function_calls.setdefault(callee, []).append(call)

    def is_called(self, name: str) -> bool:
        return name in self.function_calls

    def freeze(self) -> None:
        """Make the collected facts read-only."""
        if self._frozen:
            return
        self._frozen = True
        self.function_definitions = MappingProxyType(dict(self._function_definitions))
        self.function_calls = MappingProxyType(
            {callee: tuple(calls) for callee, calls in self._function_calls.items()}
        )

    def __repr__(self) -> str:
        return (
            f"AnalysisContext(functions={list(self.function_definitions)}, "
            f"calls={list(self.function_calls)}, frozen={self._frozen})"
        )
