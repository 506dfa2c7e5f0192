"""
Abstract Syntax Tree (AST) node definitions for Noir.

This module defines the node types the parser produces for the subset of
Noir the analysis engine consumes. Each node is immutable and carries a byte
span into the source for diagnostics.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from noirlint.utils.errors import Span


class ASTNode(ABC):
    """Base class for all AST nodes."""

    span: Optional[Span]

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Implement this to create custom AST processors (analyzers, printers,
    symbol collectors, etc.).
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)


# -----------------------------------------------------------------------------
# Shared building blocks
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ident:
    """An identifier together with the span of its token."""

    name: str
    span: Optional[Span] = None

    def __str__(self) -> str:
        return self.name


class Visibility(Enum):
    """Item visibility: `fn`, `pub(crate) fn`, `pub fn`."""

    PRIVATE = "private"
    PUBLIC_CRATE = "pub(crate)"
    PUBLIC = "pub"


class PathKind(Enum):
    """The leading keyword of a path; it is never one of the segments."""

    PLAIN = "plain"
    CRATE = "crate"
    DEP = "dep"
    SUPER = "super"


@dataclass(frozen=True, slots=True)
class UnresolvedType:
    """
    A type as written in the source, kept as normalized text.

    Examples:
        Field, u32, [Field; 3], BoundedVec<u8, 10>, &mut [u8]
    """

    text: str
    span: Optional[Span] = None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Path:
    """
    A `::`-separated path such as `foo`, `crate::utils::hash` or
    `dep::std::hash::pedersen_hash`.

    Attributes:
        segments: The identifier segments, excluding the leading kind keyword
        kind: Whether the path starts with `crate`, `dep`, `super` or nothing
        generics: Turbofish type arguments on the last segment (`foo::<T>`)
    """

    segments: tuple[Ident, ...]
    kind: PathKind = PathKind.PLAIN
    generics: tuple[UnresolvedType, ...] = ()
    span: Optional[Span] = None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(segment.name for segment in self.segments)

    @property
    def last(self) -> Ident:
        return self.segments[-1]

    def __str__(self) -> str:
        prefix = "" if self.kind == PathKind.PLAIN else f"{self.kind.value}::"
        return prefix + "::".join(self.names)


@dataclass(frozen=True, slots=True)
class Attribute:
    """A `#[...]` attribute, kept as its inner text (e.g. `test`)."""

    text: str
    span: Optional[Span] = None


# -----------------------------------------------------------------------------
# Patterns
# -----------------------------------------------------------------------------


class Pattern(ABC):
    """Base class for binding patterns in `let`, parameters and lambdas."""

    span: Optional[Span]


@dataclass(frozen=True, slots=True)
class IdentifierPattern(Pattern):
    """A single binding, optionally `mut`. `_` is an identifier pattern too."""

    name: Ident
    mutable: bool = False
    span: Optional[Span] = None


@dataclass(frozen=True, slots=True)
class TuplePattern(Pattern):
    """A tuple destructuring pattern: `(a, mut b)`."""

    elements: tuple[Pattern, ...]
    span: Optional[Span] = None


@dataclass(frozen=True, slots=True)
class StructPattern(Pattern):
    """A struct destructuring pattern: `Point { x, y: other }`."""

    path: Path
    fields: tuple[tuple[Ident, Pattern], ...]
    span: Optional[Span] = None


# -----------------------------------------------------------------------------
# Expressions
# -----------------------------------------------------------------------------


class Expression(ASTNode):
    """Base class for all expressions."""

    pass


@dataclass(frozen=True, slots=True)
class IntegerLiteral(Expression):
    value: int
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_literal(self)


@dataclass(frozen=True, slots=True)
class BoolLiteral(Expression):
    value: bool
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_bool_literal(self)


class StringKind(Enum):
    PLAIN = "plain"
    RAW = "raw"
    FORMAT = "format"


@dataclass(frozen=True, slots=True)
class StringLiteral(Expression):
    """A string literal: `"..."`, `r"..."` or `f"..."`."""

    value: str
    kind: StringKind = StringKind.PLAIN
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_string_literal(self)


@dataclass(frozen=True, slots=True)
class UnitLiteral(Expression):
    """The unit value `()`."""

    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unit_literal(self)


@dataclass(frozen=True, slots=True)
class PathExpression(Expression):
    """A variable or function reference by path."""

    path: Path
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_path_expression(self)


@dataclass(frozen=True, slots=True)
class CallExpression(Expression):
    """
    A call `f(args)` or a macro invocation `f!(args)`.

    Example:
        hash::pedersen([a, b])
    """

    func: Expression
    arguments: tuple[Expression, ...]
    is_macro_call: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_call_expression(self)


@dataclass(frozen=True, slots=True)
class MethodCallExpression(Expression):
    """A method call `receiver.method(args)`."""

    receiver: Expression
    method_name: Ident
    arguments: tuple[Expression, ...]
    generics: tuple[UnresolvedType, ...] = ()
    is_macro_call: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_method_call_expression(self)


@dataclass(frozen=True, slots=True)
class MemberAccess(Expression):
    """A field access `target.member` (tuple fields use their index as name)."""

    target: Expression
    member: Ident
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_member_access(self)


@dataclass(frozen=True, slots=True)
class IndexExpression(Expression):
    collection: Expression
    index: Expression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_index_expression(self)


@dataclass(frozen=True, slots=True)
class PrefixExpression(Expression):
    """A unary operation: `-x`, `!x`, `&mut x`, `*x`."""

    operator: str
    operand: Expression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_prefix_expression(self)


@dataclass(frozen=True, slots=True)
class InfixExpression(Expression):
    """A binary operation such as `a + b` or `x == y`."""

    lhs: Expression
    operator: str
    rhs: Expression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_infix_expression(self)


@dataclass(frozen=True, slots=True)
class RangeExpression(Expression):
    """A range `start..end` or `start..=end`, as used by `for` loops."""

    start: Expression
    end: Expression
    inclusive: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_range_expression(self)


@dataclass(frozen=True, slots=True)
class CastExpression(Expression):
    operand: Expression
    target_type: UnresolvedType
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_cast_expression(self)


@dataclass(frozen=True, slots=True)
class ArrayLiteral(Expression):
    """`[a, b, c]`, or the slice form `&[a, b, c]`."""

    elements: tuple[Expression, ...]
    is_slice: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_array_literal(self)


@dataclass(frozen=True, slots=True)
class RepeatedArrayLiteral(Expression):
    """`[element; length]`, or the slice form `&[element; length]`."""

    element: Expression
    length: Expression
    is_slice: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_repeated_array_literal(self)


@dataclass(frozen=True, slots=True)
class TupleExpression(Expression):
    elements: tuple[Expression, ...]
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_tuple_expression(self)


@dataclass(frozen=True, slots=True)
class ParenthesizedExpression(Expression):
    inner: Expression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_parenthesized_expression(self)


@dataclass(frozen=True, slots=True)
class BlockExpression(Expression):
    """A `{ ... }` block; its value is the trailing expression statement."""

    statements: tuple["Statement", ...]
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block_expression(self)


@dataclass(frozen=True, slots=True)
class IfExpression(Expression):
    """
    An `if` expression.

    Example:
        if x == 0 { a } else if x == 1 { b } else { c }
    """

    condition: Expression
    consequence: BlockExpression
    alternative: Optional[Expression] = None
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if_expression(self)


@dataclass(frozen=True, slots=True)
class MatchArm:
    """One `pattern => body` arm; the pattern is kept as source text."""

    pattern: str
    body: Expression
    span: Optional[Span] = None


@dataclass(frozen=True, slots=True)
class MatchExpression(Expression):
    """
    A `match` expression.

    Example:
        match x { 1 => a(), Option::Some(v) => v, _ => 0 }
    """

    scrutinee: Expression
    arms: tuple[MatchArm, ...]
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_match_expression(self)


@dataclass(frozen=True, slots=True)
class ConstrainExpression(Expression):
    """A built-in constraint: `assert(cond, msg)` or `assert_eq(a, b, msg)`."""

    kind: str
    arguments: tuple[Expression, ...]
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_constrain_expression(self)


@dataclass(frozen=True, slots=True)
class ConstructorExpression(Expression):
    """A struct literal: `Point { x: 1, y }`."""

    type_path: Path
    fields: tuple[tuple[Ident, Expression], ...]
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_constructor_expression(self)


@dataclass(frozen=True, slots=True)
class LambdaParameter:
    pattern: Pattern
    typ: Optional[UnresolvedType] = None


@dataclass(frozen=True, slots=True)
class LambdaExpression(Expression):
    """A closure: `|a, b: Field| a + b`."""

    parameters: tuple[LambdaParameter, ...]
    body: Expression
    return_type: Optional[UnresolvedType] = None
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_lambda_expression(self)


@dataclass(frozen=True, slots=True)
class UnsafeExpression(Expression):
    block: BlockExpression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unsafe_expression(self)


@dataclass(frozen=True, slots=True)
class ComptimeExpression(Expression):
    block: BlockExpression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_comptime_expression(self)


@dataclass(frozen=True, slots=True)
class QuoteExpression(Expression):
    """A `quote { ... }` token stream, kept as raw source text."""

    text: str
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_quote_expression(self)


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


class Statement(ASTNode):
    """Base class for all statements."""

    pass


@dataclass(frozen=True, slots=True)
class LetStatement(Statement):
    """
    A binding.

    Example:
        let mut total: Field = 0;
    """

    pattern: Pattern
    value: Expression
    typ: Optional[UnresolvedType] = None
    is_comptime: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_let_statement(self)


@dataclass(frozen=True, slots=True)
class AssignStatement(Statement):
    """An assignment `target = value` or compound `target += value`."""

    target: Expression
    operator: str
    value: Expression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assign_statement(self)


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Statement):
    expression: Expression
    has_semicolon: bool = False
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_expression_statement(self)


@dataclass(frozen=True, slots=True)
class ForStatement(Statement):
    """
    A `for` loop over a range or an array.

    Example:
        for i in 0..N { sum += arr[i]; }
    """

    identifier: Ident
    iterable: Expression
    body: BlockExpression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_for_statement(self)


@dataclass(frozen=True, slots=True)
class WhileStatement(Statement):
    condition: Expression
    body: BlockExpression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_while_statement(self)


@dataclass(frozen=True, slots=True)
class LoopStatement(Statement):
    body: BlockExpression
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_loop_statement(self)


@dataclass(frozen=True, slots=True)
class BreakStatement(Statement):
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_break_statement(self)


@dataclass(frozen=True, slots=True)
class ContinueStatement(Statement):
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_continue_statement(self)


@dataclass(frozen=True, slots=True)
class ReturnStatement(Statement):
    value: Optional[Expression] = None
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_return_statement(self)


# -----------------------------------------------------------------------------
# Items
# -----------------------------------------------------------------------------


class Item(ASTNode):
    """Base class for module-level declarations."""

    pass


@dataclass(frozen=True, slots=True)
class Parameter:
    """
    A function parameter.

    Example:
        x: pub Field
    """

    pattern: Pattern
    typ: UnresolvedType
    visibility: Visibility = Visibility.PRIVATE


@dataclass(frozen=True, slots=True)
class FunctionDef(Item):
    """
    A function definition.

    Example:
        pub(crate) unconstrained fn helper<T>(x: T) -> pub Field {
            ...
        }

    Attributes:
        name: The function name and the span of its token
        visibility: `fn`, `pub(crate) fn` or `pub fn`
        parameters: Declared parameters, in order
        body: The function body; None for trait method signatures
        return_type: Declared return type, if any
        return_visibility: `pub` on the return type of entry points
        generics: Names of generic parameters
        modifiers: Any of `unconstrained`, `comptime`, `unsafe`
        attributes: `#[...]` attributes preceding the definition
    """

    name: Ident
    visibility: Visibility
    parameters: tuple[Parameter, ...]
    body: Optional[BlockExpression]
    return_type: Optional[UnresolvedType] = None
    return_visibility: Visibility = Visibility.PRIVATE
    generics: tuple[str, ...] = ()
    modifiers: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    span: Optional[Span] = None

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_def(self)


@dataclass(frozen=True, slots=True)
class StructDef(Item):
    name: Ident
    visibility: Visibility
    fields: tuple[tuple[Ident, UnresolvedType], ...]
    generics: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_struct_def(self)


@dataclass(frozen=True, slots=True)
class EnumDef(Item):
    """An `enum` with unit and tuple variants: `enum Op { Add, Push(Field) }`."""

    name: Ident
    visibility: Visibility
    variants: tuple[tuple[Ident, tuple[UnresolvedType, ...]], ...]
    generics: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_enum_def(self)


@dataclass(frozen=True, slots=True)
class GlobalDef(Item):
    """A `global` constant: `global N: u32 = 3;`."""

    name: Ident
    visibility: Visibility
    value: Expression
    typ: Optional[UnresolvedType] = None
    is_comptime: bool = False
    is_mutable: bool = False
    attributes: tuple[Attribute, ...] = ()
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_global_def(self)


@dataclass(frozen=True, slots=True)
class UseDecl(Item):
    """A `use` declaration, kept as the text of its use tree."""

    tree: str
    visibility: Visibility = Visibility.PRIVATE
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_use_decl(self)


@dataclass(frozen=True, slots=True)
class ModuleDecl(Item):
    """`mod name;` (items is None) or an inline `mod name { ... }`."""

    name: Ident
    visibility: Visibility = Visibility.PRIVATE
    items: Optional[tuple[Item, ...]] = None
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_module_decl(self)


@dataclass(frozen=True, slots=True)
class ImplBlock(Item):
    """
    An inherent or trait implementation.

    Examples:
        impl Point { fn norm(self) -> Field { ... } }
        impl Eq for Point { fn eq(self, other: Self) -> bool { ... } }
    """

    self_type: UnresolvedType
    methods: tuple[FunctionDef, ...]
    trait_type: Optional[UnresolvedType] = None
    generics: tuple[str, ...] = ()
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_impl_block(self)


@dataclass(frozen=True, slots=True)
class TraitDef(Item):
    name: Ident
    visibility: Visibility
    methods: tuple[FunctionDef, ...]
    generics: tuple[str, ...] = ()
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_trait_def(self)


@dataclass(frozen=True, slots=True)
class TypeAlias(Item):
    name: Ident
    visibility: Visibility
    typ: UnresolvedType
    span: Optional[Span] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_type_alias(self)


@dataclass(frozen=True, slots=True)
class ParsedModule(ASTNode):
    """The root node: every item of one source file, in source order."""

    items: tuple[Item, ...]
    span: Optional[Span] = None

    @property
    def functions(self) -> tuple[FunctionDef, ...]:
        return tuple(item for item in self.items if isinstance(item, FunctionDef))

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_parsed_module(self)


AnyNode = Union[Item, Statement, Expression]


# -----------------------------------------------------------------------------
# Default traversal
# -----------------------------------------------------------------------------


class BaseASTVisitor(ASTVisitor):
    """
    Base visitor with default implementations that traverse children.

    Subclass this and override specific visit_* methods as needed.
    """

    def visit_parsed_module(self, node: ParsedModule) -> Any:
        for item in node.items:
            self.visit(item)

    # Items
    def visit_function_def(self, node: FunctionDef) -> Any:
        if node.body is not None:
            self.visit(node.body)

    def visit_struct_def(self, node: StructDef) -> Any:
        pass

    def visit_enum_def(self, node: EnumDef) -> Any:
        pass

    def visit_global_def(self, node: GlobalDef) -> Any:
        self.visit(node.value)

    def visit_use_decl(self, node: UseDecl) -> Any:
        pass

    def visit_module_decl(self, node: ModuleDecl) -> Any:
        for item in node.items or ():
            self.visit(item)

    def visit_impl_block(self, node: ImplBlock) -> Any:
        for method in node.methods:
            self.visit(method)

    def visit_trait_def(self, node: TraitDef) -> Any:
        for method in node.methods:
            self.visit(method)

    def visit_type_alias(self, node: TypeAlias) -> Any:
        pass

    # Statements
    def visit_let_statement(self, node: LetStatement) -> Any:
        self.visit(node.value)

    def visit_assign_statement(self, node: AssignStatement) -> Any:
        self.visit(node.target)
        self.visit(node.value)

    def visit_expression_statement(self, node: ExpressionStatement) -> Any:
        self.visit(node.expression)

    def visit_for_statement(self, node: ForStatement) -> Any:
        self.visit(node.iterable)
        self.visit(node.body)

    def visit_while_statement(self, node: WhileStatement) -> Any:
        self.visit(node.condition)
        self.visit(node.body)

    def visit_loop_statement(self, node: LoopStatement) -> Any:
        self.visit(node.body)

    def visit_break_statement(self, node: BreakStatement) -> Any:
        pass

    def visit_continue_statement(self, node: ContinueStatement) -> Any:
        pass

    def visit_return_statement(self, node: ReturnStatement) -> Any:
        if node.value is not None:
            self.visit(node.value)

    # Literals
    def visit_integer_literal(self, node: IntegerLiteral) -> Any:
        pass

    def visit_bool_literal(self, node: BoolLiteral) -> Any:
        pass

    def visit_string_literal(self, node: StringLiteral) -> Any:
        pass

    def visit_unit_literal(self, node: UnitLiteral) -> Any:
        pass

    # Expressions
    def visit_path_expression(self, node: PathExpression) -> Any:
        pass

    def visit_call_expression(self, node: CallExpression) -> Any:
        self.visit(node.func)
        for arg in node.arguments:
            self.visit(arg)

    def visit_method_call_expression(self, node: MethodCallExpression) -> Any:
        self.visit(node.receiver)
        for arg in node.arguments:
            self.visit(arg)

    def visit_member_access(self, node: MemberAccess) -> Any:
        self.visit(node.target)

    def visit_index_expression(self, node: IndexExpression) -> Any:
        self.visit(node.collection)
        self.visit(node.index)

    def visit_prefix_expression(self, node: PrefixExpression) -> Any:
        self.visit(node.operand)

    def visit_infix_expression(self, node: InfixExpression) -> Any:
        self.visit(node.lhs)
        self.visit(node.rhs)

    def visit_range_expression(self, node: RangeExpression) -> Any:
        self.visit(node.start)
        self.visit(node.end)

    def visit_cast_expression(self, node: CastExpression) -> Any:
        self.visit(node.operand)

    def visit_array_literal(self, node: ArrayLiteral) -> Any:
        for elem in node.elements:
            self.visit(elem)

    def visit_repeated_array_literal(self, node: RepeatedArrayLiteral) -> Any:
        self.visit(node.element)
        self.visit(node.length)

    def visit_tuple_expression(self, node: TupleExpression) -> Any:
        for elem in node.elements:
            self.visit(elem)

    def visit_parenthesized_expression(self, node: ParenthesizedExpression) -> Any:
        self.visit(node.inner)

    def visit_block_expression(self, node: BlockExpression) -> Any:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_if_expression(self, node: IfExpression) -> Any:
        self.visit(node.condition)
        self.visit(node.consequence)
        if node.alternative is not None:
            self.visit(node.alternative)

    def visit_match_expression(self, node: MatchExpression) -> Any:
        self.visit(node.scrutinee)
        for arm in node.arms:
            self.visit(arm.body)

    def visit_constrain_expression(self, node: ConstrainExpression) -> Any:
        for arg in node.arguments:
            self.visit(arg)

    def visit_constructor_expression(self, node: ConstructorExpression) -> Any:
        for _, value in node.fields:
            self.visit(value)

    def visit_lambda_expression(self, node: LambdaExpression) -> Any:
        self.visit(node.body)

    def visit_unsafe_expression(self, node: UnsafeExpression) -> Any:
        self.visit(node.block)

    def visit_comptime_expression(self, node: ComptimeExpression) -> Any:
        self.visit(node.block)

    def visit_quote_expression(self, node: QuoteExpression) -> Any:
        pass
