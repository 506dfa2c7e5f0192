"""
noirlint Analyzer - single-pass traversal and rule execution.

The analyzer walks a parsed module once, collecting function definitions and
call sites into an AnalysisContext, then runs each lint rule against the
frozen context.

Example:
    analyzer = Analyzer()
    lints = analyzer.analyze(parse_source(source))
    for lint in lints:
        print(lint)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from noirlint.analysis.context import AnalysisContext
from noirlint.diagnostics.lint import Lint
from noirlint.frontend import parse_program
from noirlint.frontend.ast_nodes import (
    ASTNode,
    BaseASTVisitor,
    CallExpression,
    EnumDef,
    FunctionDef,
    GlobalDef,
    ImplBlock,
    LambdaExpression,
    MethodCallExpression,
    ModuleDecl,
    ParsedModule,
    PathExpression,
    QuoteExpression,
    StructDef,
    TraitDef,
    TypeAlias,
    UseDecl,
)
from noirlint.lints import LintRule, default_rules
from noirlint.utils.errors import FileReadError, ParsingError, TraversalFailed

logger = logging.getLogger(__name__)


# =============================================================================
# Frame Stack
# =============================================================================


class FrameKind(Enum):
    """The construct a stack frame was pushed for."""

    MODULE = auto()
    FUNCTION = auto()
    CALL_SITE = auto()
    IDENTIFIER_PATH = auto()


@dataclass(frozen=True, slots=True)
class StackFrame:
    kind: FrameKind
    names: tuple[str, ...] = ()


# =============================================================================
# Analyzer
# =============================================================================


class Analyzer(BaseASTVisitor):
    """
    Traverses a module and runs lint rules over the collected facts.

    Only call expressions whose callee is a plain path are recorded. Macro
    calls, lambdas, quoted token streams and declarations other than
    functions, impls, traits and globals are skipped without descending into
    them.

    Attributes:
        rules: The analyzer's own copies of the rules it runs, in order
        context: The context built by the most recent pass, or None
    """

    def __init__(self, rules: Optional[Iterable[LintRule]] = None) -> None:
        """
        Initialize the analyzer.

        Args:
            rules: Rules to run, in order. Each one is cloned. Defaults to
                every registered rule.
        """
        source_rules = default_rules() if rules is None else rules
        self.rules: list[LintRule] = [rule.clone() for rule in source_rules]
        self.context: Optional[AnalysisContext] = None
        self._stack: list[StackFrame] = []

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def build_context(self, module: ParsedModule) -> AnalysisContext:
        """
        Traverse the module and return the frozen context.

        Raises:
            TraversalFailed: If the frame stack invariants are violated
        """
        self.context = AnalysisContext()
        self._stack = []

        self.visit(module)

        if self._stack:
            raise TraversalFailed(
                f"Frame stack not empty after traversal: {[f.kind.name for f in self._stack]}"
            )
        self.context.freeze()
        logger.debug(
            "Collected %d function definition(s) and %d callee key(s)",
            len(self.context.function_definitions),
            len(self.context.function_calls),
        )
        return self.context

    def analyze(self, module: ParsedModule) -> list[Lint]:
        """
        Traverse the module, then run every rule once, in order.

        Returns:
            The concatenation of every rule's lints, in rule order
        """
        context = self.build_context(module)
        lints: list[Lint] = []
        for rule in self.rules:
            found = rule.lint(context)
            logger.debug("Rule '%s' produced %d lint(s)", rule.name, len(found))
            lints.extend(found)
        return lints

    # -------------------------------------------------------------------------
    # Frame helpers
    # -------------------------------------------------------------------------

    @contextmanager
    def _frame(self, frame: StackFrame) -> Iterator[int]:
        """Push a frame and truncate the stack back to its prior depth on exit."""
        depth = len(self._stack)
        self._stack.append(frame)
        yield depth
        if len(self._stack) <= depth:
            raise TraversalFailed(
                f"{frame.kind.name} frame was unwound below depth {depth}"
            )
        del self._stack[depth:]

    def _require_module(self, construct: str) -> None:
        if not any(frame.kind == FrameKind.MODULE for frame in self._stack):
            raise TraversalFailed(f"{construct} visited outside of a module")

    def _require_context(self) -> AnalysisContext:
        if self.context is None:
            raise TraversalFailed("Traversal started without an analysis context")
        return self.context

    def _skip(self, node: ASTNode) -> None:
        logger.debug("Skipping %s", type(node).__name__)

    # -------------------------------------------------------------------------
    # Module and items
    # -------------------------------------------------------------------------

    def visit_parsed_module(self, node: ParsedModule) -> None:
        with self._frame(StackFrame(FrameKind.MODULE)):
            for item in node.items:
                self.visit(item)

    def visit_function_def(self, node: FunctionDef) -> None:
        self._require_module(f"Function '{node.name.name}'")
        self._require_context().add_function_definition(node.name.name, node)
        logger.debug("Recorded function '%s'", node.name.name)
        self._visit_function_body(node)

    def _visit_function_body(self, node: FunctionDef) -> None:
        if node.body is None:
            return
        with self._frame(StackFrame(FrameKind.FUNCTION, (node.name.name,))):
            for statement in node.body.statements:
                self.visit(statement)

    def visit_impl_block(self, node: ImplBlock) -> None:
        # Method bodies are searched for calls but methods are not definitions
        self._require_module(f"impl {node.self_type}")
        for method in node.methods:
            self._visit_function_body(method)

    def visit_trait_def(self, node: TraitDef) -> None:
        # Only default methods have bodies
        self._require_module(f"Trait '{node.name.name}'")
        for method in node.methods:
            self._visit_function_body(method)

    def visit_global_def(self, node: GlobalDef) -> None:
        self._require_module(f"Global '{node.name.name}'")
        self.visit(node.value)

    def visit_struct_def(self, node: StructDef) -> None:
        self._skip(node)

    def visit_enum_def(self, node: EnumDef) -> None:
        self._skip(node)

    def visit_use_decl(self, node: UseDecl) -> None:
        self._skip(node)

    def visit_module_decl(self, node: ModuleDecl) -> None:
        self._skip(node)

    def visit_type_alias(self, node: TypeAlias) -> None:
        self._skip(node)

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def visit_call_expression(self, node: CallExpression) -> None:
        if node.is_macro_call:
            self._skip(node)
            return
        if not isinstance(node.func, PathExpression):
            # Not tracked as a call, but the callee and arguments may hold calls
            logger.debug("Call with %s callee not recorded", type(node.func).__name__)
            super().visit_call_expression(node)
            return

        self._require_module("Call site")
        with self._frame(StackFrame(FrameKind.CALL_SITE)):
            names = self.visit_path_expression(node.func)
            callee = "".join(names)
            self._require_context().add_function_call(callee, node)
            logger.debug("Recorded call to '%s'", callee)
            for argument in node.arguments:
                self.visit(argument)

    def visit_path_expression(self, node: PathExpression) -> tuple[str, ...]:
        names = node.path.names
        with self._frame(StackFrame(FrameKind.IDENTIFIER_PATH, names)):
            return names

    def visit_method_call_expression(self, node: MethodCallExpression) -> None:
        if node.is_macro_call:
            self._skip(node)
            return
        super().visit_method_call_expression(node)

    def visit_lambda_expression(self, node: LambdaExpression) -> None:
        self._skip(node)

    def visit_quote_expression(self, node: QuoteExpression) -> None:
        self._skip(node)


# =============================================================================
# Utility Functions
# =============================================================================


def parse_source(source: str, filename: Optional[str] = None) -> ParsedModule:
    """
    Parse Noir source code.

    Raises:
        ParsingError: Carrying every error the parser reported
    """
    module, errors = parse_program(source, filename)
    if errors:
        raise ParsingError(errors)
    return module


def parse_file(path: Union[str, Path]) -> ParsedModule:
    """
    Read and parse a Noir source file.

    Raises:
        FileReadError: If the file cannot be read as UTF-8 text
        ParsingError: If the file does not parse
    """
    path = Path(path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"not valid UTF-8 ({e.reason})") from e
    return parse_source(source, filename=str(path))


def analyze(module: ParsedModule, rules: Optional[Iterable[LintRule]] = None) -> list[Lint]:
    """Analyze an already-parsed module."""
    return Analyzer(rules).analyze(module)


def lint_source(
    source: str,
    rules: Optional[Iterable[LintRule]] = None,
    filename: Optional[str] = None,
) -> list[Lint]:
    """
    Lint Noir source code.

    This is a convenience function that parses and analyzes in one step.

    Raises:
        ParsingError: If the source code cannot be parsed
    """
    return analyze(parse_source(source, filename), rules)


def lint_file(path: Union[str, Path], rules: Optional[Iterable[LintRule]] = None) -> list[Lint]:
    """Read, parse and lint a Noir source file."""
    return analyze(parse_file(path), rules)
