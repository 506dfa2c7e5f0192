"""
Noir Parser.

A recursive descent parser that transforms a token stream into an Abstract
Syntax Tree (AST). Implements operator precedence parsing for expressions
and recovers at item boundaries so that one malformed function does not
hide the errors of the next one.
"""

from typing import Callable, Optional, TypeVar

from noirlint.frontend.ast_nodes import (
    ArrayLiteral,
    AssignStatement,
    Attribute,
    BlockExpression,
    BoolLiteral,
    BreakStatement,
    CallExpression,
    CastExpression,
    ComptimeExpression,
    ConstrainExpression,
    ConstructorExpression,
    ContinueStatement,
    EnumDef,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDef,
    GlobalDef,
    Ident,
    IdentifierPattern,
    IfExpression,
    ImplBlock,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    Item,
    LambdaExpression,
    LambdaParameter,
    LetStatement,
    LoopStatement,
    MatchArm,
    MatchExpression,
    MemberAccess,
    MethodCallExpression,
    ModuleDecl,
    Parameter,
    ParenthesizedExpression,
    ParsedModule,
    Path,
    PathExpression,
    PathKind,
    Pattern,
    PrefixExpression,
    QuoteExpression,
    RangeExpression,
    RepeatedArrayLiteral,
    ReturnStatement,
    Statement,
    StringKind,
    StringLiteral,
    StructDef,
    StructPattern,
    TraitDef,
    TupleExpression,
    TuplePattern,
    TypeAlias,
    UnitLiteral,
    UnresolvedType,
    UnsafeExpression,
    UseDecl,
    Visibility,
    WhileStatement,
)
from noirlint.frontend.tokens import Token, TokenType
from noirlint.utils.errors import NoirLintError, ParserError, Span

T = TypeVar("T")


# Operator precedence levels (higher = tighter binding)
class Precedence:
    """Operator precedence levels."""

    NONE = 0
    LOGICAL_OR = 1  # ||
    LOGICAL_AND = 2  # &&
    COMPARISON = 3  # == != < <= > >=
    BITWISE_OR = 4  # |
    BITWISE_XOR = 5  # ^
    BITWISE_AND = 6  # &
    SHIFT = 7  # << >>
    ADDITIVE = 8  # + -
    MULTIPLICATIVE = 9  # * / %


BINARY_OPERATORS: dict[TokenType, tuple[str, int]] = {
    TokenType.OR_OR: ("||", Precedence.LOGICAL_OR),
    TokenType.AND_AND: ("&&", Precedence.LOGICAL_AND),
    TokenType.EQ: ("==", Precedence.COMPARISON),
    TokenType.NE: ("!=", Precedence.COMPARISON),
    TokenType.LT: ("<", Precedence.COMPARISON),
    TokenType.LE: ("<=", Precedence.COMPARISON),
    TokenType.GT: (">", Precedence.COMPARISON),
    TokenType.GE: (">=", Precedence.COMPARISON),
    TokenType.PIPE: ("|", Precedence.BITWISE_OR),
    TokenType.CARET: ("^", Precedence.BITWISE_XOR),
    TokenType.AMPERSAND: ("&", Precedence.BITWISE_AND),
    TokenType.SHL: ("<<", Precedence.SHIFT),
    TokenType.PLUS: ("+", Precedence.ADDITIVE),
    TokenType.MINUS: ("-", Precedence.ADDITIVE),
    TokenType.STAR: ("*", Precedence.MULTIPLICATIVE),
    TokenType.SLASH: ("/", Precedence.MULTIPLICATIVE),
    TokenType.PERCENT: ("%", Precedence.MULTIPLICATIVE),
}

ASSIGNMENT_OPERATORS: dict[TokenType, str] = {
    TokenType.ASSIGN: "=",
    TokenType.PLUS_ASSIGN: "+=",
    TokenType.MINUS_ASSIGN: "-=",
    TokenType.STAR_ASSIGN: "*=",
    TokenType.SLASH_ASSIGN: "/=",
    TokenType.PERCENT_ASSIGN: "%=",
    TokenType.CARET_ASSIGN: "^=",
    TokenType.AMPERSAND_ASSIGN: "&=",
    TokenType.PIPE_ASSIGN: "|=",
    TokenType.SHL_ASSIGN: "<<=",
    TokenType.SHR_ASSIGN: ">>=",
}

# Tokens that may start a module-level item; used for error recovery
ITEM_START: frozenset[TokenType] = frozenset({
    TokenType.FN,
    TokenType.PUB,
    TokenType.STRUCT,
    TokenType.ENUM,
    TokenType.GLOBAL,
    TokenType.USE,
    TokenType.MOD,
    TokenType.IMPL,
    TokenType.TRAIT,
    TokenType.TYPE,
    TokenType.POUND,
    TokenType.UNCONSTRAINED,
    TokenType.COMPTIME,
})

FUNCTION_MODIFIERS: frozenset[TokenType] = frozenset({
    TokenType.UNCONSTRAINED,
    TokenType.COMPTIME,
    TokenType.UNSAFE,
})

PATH_KIND_KEYWORDS: dict[TokenType, PathKind] = {
    TokenType.CRATE: PathKind.CRATE,
    TokenType.DEP: PathKind.DEP,
    TokenType.SUPER: PathKind.SUPER,
}

# Expressions that end a statement without a trailing semicolon
BLOCK_LIKE = (
    BlockExpression,
    IfExpression,
    MatchExpression,
    UnsafeExpression,
    ComptimeExpression,
)


class Parser:
    """
    Recursive descent parser for Noir.

    Parses a list of tokens into a ParsedModule. Syntax errors inside an
    item are collected in `errors` and parsing resumes at the next item.

    Usage:
        parser = Parser(tokens)
        module = parser.parse()
        if parser.errors:
            ...
    """

    def __init__(self, tokens: list[Token], filename: Optional[str] = None) -> None:
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer, terminated by EOF
            filename: Optional filename for error reporting
        """
        self.tokens = tokens
        self.filename = filename
        self.pos = 0
        self.errors: list[NoirLintError] = []
        self._allow_struct_literal = True

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    @property
    def _current(self) -> Token:
        """Get the current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    @property
    def _previous(self) -> Token:
        """Get the previous token."""
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def _peek(self, offset: int = 1) -> Token:
        """Peek at a token ahead of the current position."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _is_at_end(self) -> bool:
        return self._current.type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self._current.type in types

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._current
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match(self, *types: TokenType) -> bool:
        """Consume current token if it matches one of the given types."""
        if self._check(*types):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume current token if it matches, else raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(message)

    def _error(self, message: str) -> ParserError:
        """Create a parser error pointing at the current token."""
        token = self._current
        found = "end of file" if token.type == TokenType.EOF else repr(str(token.value))
        return ParserError(f"{message}, found {found}", token.span)

    def _span_from(self, start: int) -> Span:
        """Span from a start offset to the end of the last consumed token."""
        return Span(start, max(start, self._previous.span.end))

    def _with_struct_literals(self, allowed: bool, parse: Callable[[], T]) -> T:
        saved = self._allow_struct_literal
        self._allow_struct_literal = allowed
        try:
            return parse()
        finally:
            self._allow_struct_literal = saved

    def _parse_ident(self, message: str) -> Ident:
        token = self._expect(TokenType.IDENTIFIER, message)
        return Ident(token.value, token.span)

    def _parse_comma_separated(
        self, close: TokenType, parse_element: Callable[[], T]
    ) -> tuple[T, ...]:
        """Parse `elem, elem, ...` up to (and including) the closing token."""
        elements: list[T] = []
        while not self._check(close):
            elements.append(parse_element())
            if not self._match(TokenType.COMMA):
                break
        self._expect(close, f"Expected '{_delimiter_text(close)}'")
        return tuple(elements)

    def _skip_balanced(self, open_type: TokenType, close_type: TokenType) -> list[Token]:
        """Consume a balanced group starting at `open_type`; return inner tokens."""
        self._expect(open_type, f"Expected '{_delimiter_text(open_type)}'")
        depth = 1
        inner: list[Token] = []
        while depth > 0:
            if self._is_at_end():
                raise self._error(f"Unclosed delimiter, expected '{_delimiter_text(close_type)}'")
            token = self._advance()
            if token.type == open_type:
                depth += 1
            elif token.type == close_type:
                depth -= 1
                if depth == 0:
                    break
            inner.append(token)
        return inner

    def _synchronize(self) -> None:
        """Skip tokens until the start of the next top-level item."""
        self._advance()
        depth = 0
        while not self._is_at_end():
            if self._check(TokenType.LBRACE):
                depth += 1
            elif self._check(TokenType.RBRACE):
                depth = max(0, depth - 1)
            elif depth == 0 and self._current.type in ITEM_START:
                return
            self._advance()

    # -------------------------------------------------------------------------
    # Module and items
    # -------------------------------------------------------------------------

    def parse(self) -> ParsedModule:
        """
        Parse the token stream into a module.

        Returns:
            The parsed module; items that failed to parse are left out and
            their errors are recorded in `self.errors`
        """
        items: list[Item] = []
        while not self._is_at_end():
            try:
                if self._check(TokenType.POUND) and self._peek().type == TokenType.BANG:
                    self._parse_inner_attribute()
                    continue
                items.append(self._parse_item())
            except ParserError as e:
                self.errors.append(e)
                self._synchronize()
        end = self._current.span.end
        return ParsedModule(tuple(items), Span(0, end))

    def _parse_inner_attribute(self) -> None:
        self._expect(TokenType.POUND, "Expected '#'")
        self._expect(TokenType.BANG, "Expected '!'")
        self._skip_balanced(TokenType.LBRACKET, TokenType.RBRACKET)

    def _parse_attributes(self) -> tuple[Attribute, ...]:
        attributes: list[Attribute] = []
        while self._check(TokenType.POUND) and self._peek().type == TokenType.LBRACKET:
            start = self._advance().span.start
            inner = self._skip_balanced(TokenType.LBRACKET, TokenType.RBRACKET)
            attributes.append(Attribute(_tokens_text(inner), self._span_from(start)))
        return tuple(attributes)

    def _parse_visibility(self) -> Visibility:
        if not self._match(TokenType.PUB):
            return Visibility.PRIVATE
        if self._check(TokenType.LPAREN) and self._peek().type == TokenType.CRATE:
            self._advance()
            self._advance()
            self._expect(TokenType.RPAREN, "Expected ')' after 'pub(crate'")
            return Visibility.PUBLIC_CRATE
        return Visibility.PUBLIC

    def _parse_item(self) -> Item:
        start = self._current.span.start
        attributes = self._parse_attributes()
        visibility = self._parse_visibility()

        modifiers: list[str] = []
        while self._current.type in FUNCTION_MODIFIERS and self._peek().type != TokenType.LBRACE:
            modifiers.append(self._advance().value)

        if self._check(TokenType.FN):
            return self._parse_function(start, visibility, tuple(modifiers), attributes)
        if self._check(TokenType.GLOBAL) or (
            self._check(TokenType.MUT) and self._peek().type == TokenType.GLOBAL
        ):
            return self._parse_global(start, visibility, "comptime" in modifiers, attributes)
        if modifiers:
            raise self._error(f"Expected 'fn' after '{modifiers[-1]}'")
        if self._check(TokenType.STRUCT):
            return self._parse_struct(start, visibility, attributes)
        if self._check(TokenType.ENUM):
            return self._parse_enum(start, visibility, attributes)
        if self._check(TokenType.USE):
            return self._parse_use(start, visibility)
        if self._check(TokenType.MOD):
            return self._parse_module_decl(start, visibility)
        if self._check(TokenType.IMPL):
            return self._parse_impl(start)
        if self._check(TokenType.TRAIT):
            return self._parse_trait(start, visibility)
        if self._check(TokenType.TYPE):
            return self._parse_type_alias(start, visibility)
        raise self._error("Expected an item")

    def _parse_generic_params(self) -> tuple[str, ...]:
        """Parse `<T, let N: u32, U: Trait>` and return the parameter names."""
        if not self._check(TokenType.LT):
            return ()
        self._advance()
        names: list[str] = []
        expect_name = True
        depth = 1
        while depth > 0:
            if self._is_at_end():
                raise self._error("Unclosed generic parameter list")
            token = self._advance()
            if token.type == TokenType.LT:
                depth += 1
            elif token.type == TokenType.GT:
                depth -= 1
            elif depth == 1 and token.type == TokenType.COMMA:
                expect_name = True
            elif expect_name and token.type == TokenType.IDENTIFIER:
                names.append(token.value)
                expect_name = False
        return tuple(names)

    def _skip_where_clause(self) -> None:
        if self._match(TokenType.WHERE):
            while not self._check(TokenType.LBRACE, TokenType.SEMICOLON, TokenType.EOF):
                self._advance()

    def _parse_function(
        self,
        start: int,
        visibility: Visibility,
        modifiers: tuple[str, ...],
        attributes: tuple[Attribute, ...],
        allow_signature: bool = False,
    ) -> FunctionDef:
        self._expect(TokenType.FN, "Expected 'fn'")
        name = self._parse_ident("Expected function name")
        generics = self._parse_generic_params()

        self._expect(TokenType.LPAREN, "Expected '(' after function name")
        parameters = self._parse_comma_separated(TokenType.RPAREN, self._parse_parameter)

        return_type: Optional[UnresolvedType] = None
        return_visibility = Visibility.PRIVATE
        if self._match(TokenType.ARROW):
            return_visibility = self._parse_visibility()
            return_type = self._parse_type()
        self._skip_where_clause()

        body: Optional[BlockExpression] = None
        if not (allow_signature and self._match(TokenType.SEMICOLON)):
            if not self._check(TokenType.LBRACE):
                raise self._error("Expected '{' to open function body")
            body = self._parse_block()

        return FunctionDef(
            name=name,
            visibility=visibility,
            parameters=parameters,
            body=body,
            return_type=return_type,
            return_visibility=return_visibility,
            generics=generics,
            modifiers=modifiers,
            attributes=attributes,
            span=self._span_from(start),
        )

    def _parse_parameter(self) -> Parameter:
        start = self._current.span.start

        # Method receivers: self, mut self, &self, &mut self
        if self._check(TokenType.AMPERSAND) and self._peek().type in (TokenType.SELF, TokenType.MUT):
            self._advance()
            prefix = "&mut " if self._match(TokenType.MUT) else "&"
            token = self._expect(TokenType.SELF, "Expected 'self'")
            return Parameter(
                IdentifierPattern(Ident("self", token.span), span=token.span),
                UnresolvedType(prefix + "Self", self._span_from(start)),
            )
        if self._check(TokenType.SELF) or (
            self._check(TokenType.MUT) and self._peek().type == TokenType.SELF
        ):
            mutable = self._match(TokenType.MUT)
            token = self._advance()
            typ = UnresolvedType("Self", token.span)
            if self._match(TokenType.COLON):
                typ = self._parse_type()
            return Parameter(
                IdentifierPattern(Ident("self", token.span), mutable, self._span_from(start)), typ
            )

        pattern = self._parse_pattern()
        self._expect(TokenType.COLON, "Expected ':' after parameter name")
        visibility = self._parse_visibility()
        typ = self._parse_type()
        return Parameter(pattern, typ, visibility)

    def _parse_struct(
        self, start: int, visibility: Visibility, attributes: tuple[Attribute, ...]
    ) -> StructDef:
        self._expect(TokenType.STRUCT, "Expected 'struct'")
        name = self._parse_ident("Expected struct name")
        generics = self._parse_generic_params()
        self._skip_where_clause()

        def parse_field() -> tuple[Ident, UnresolvedType]:
            self._parse_visibility()
            field_name = self._parse_ident("Expected field name")
            self._expect(TokenType.COLON, "Expected ':' after field name")
            return field_name, self._parse_type()

        self._expect(TokenType.LBRACE, "Expected '{' after struct name")
        fields = self._parse_comma_separated(TokenType.RBRACE, parse_field)
        return StructDef(name, visibility, fields, generics, attributes, self._span_from(start))

    def _parse_enum(
        self, start: int, visibility: Visibility, attributes: tuple[Attribute, ...]
    ) -> EnumDef:
        self._expect(TokenType.ENUM, "Expected 'enum'")
        name = self._parse_ident("Expected enum name")
        generics = self._parse_generic_params()
        self._skip_where_clause()

        def parse_variant() -> tuple[Ident, tuple[UnresolvedType, ...]]:
            variant = self._parse_ident("Expected variant name")
            if self._match(TokenType.LPAREN):
                return variant, self._parse_comma_separated(TokenType.RPAREN, self._parse_type)
            return variant, ()

        self._expect(TokenType.LBRACE, "Expected '{' after enum name")
        variants = self._parse_comma_separated(TokenType.RBRACE, parse_variant)
        return EnumDef(name, visibility, variants, generics, attributes, self._span_from(start))

    def _parse_global(
        self,
        start: int,
        visibility: Visibility,
        is_comptime: bool,
        attributes: tuple[Attribute, ...],
    ) -> GlobalDef:
        is_mutable = self._match(TokenType.MUT)
        self._expect(TokenType.GLOBAL, "Expected 'global'")
        name = self._parse_ident("Expected global name")
        typ = self._parse_type() if self._match(TokenType.COLON) else None
        self._expect(TokenType.ASSIGN, "Expected '=' in global declaration")
        value = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "Expected ';' after global declaration")
        return GlobalDef(
            name=name,
            visibility=visibility,
            value=value,
            typ=typ,
            is_comptime=is_comptime,
            is_mutable=is_mutable,
            attributes=attributes,
            span=self._span_from(start),
        )

    def _parse_use(self, start: int, visibility: Visibility) -> UseDecl:
        self._expect(TokenType.USE, "Expected 'use'")
        tree: list[Token] = []
        while not self._check(TokenType.SEMICOLON):
            if self._is_at_end():
                raise self._error("Expected ';' after use declaration")
            tree.append(self._advance())
        self._advance()
        if not tree:
            raise ParserError("Empty use declaration", self._span_from(start))
        return UseDecl(_tokens_text(tree), visibility, self._span_from(start))

    def _parse_module_decl(self, start: int, visibility: Visibility) -> ModuleDecl:
        self._expect(TokenType.MOD, "Expected 'mod'")
        name = self._parse_ident("Expected module name")
        if self._match(TokenType.SEMICOLON):
            return ModuleDecl(name, visibility, None, self._span_from(start))

        self._expect(TokenType.LBRACE, "Expected ';' or '{' after module name")
        items: list[Item] = []
        while not self._check(TokenType.RBRACE):
            if self._is_at_end():
                raise self._error(f"Unclosed module '{name.name}', expected '}}'")
            items.append(self._parse_item())
        self._advance()
        return ModuleDecl(name, visibility, tuple(items), self._span_from(start))

    def _parse_member_functions(self, allow_signature: bool) -> tuple[FunctionDef, ...]:
        """Parse the `{ ... }` body of an impl or trait, keeping only functions."""
        self._expect(TokenType.LBRACE, "Expected '{'")
        methods: list[FunctionDef] = []
        while not self._check(TokenType.RBRACE):
            if self._is_at_end():
                raise self._error("Expected '}'")
            start = self._current.span.start
            attributes = self._parse_attributes()
            visibility = self._parse_visibility()
            modifiers: list[str] = []
            while self._current.type in FUNCTION_MODIFIERS:
                modifiers.append(self._advance().value)
            if self._check(TokenType.FN):
                methods.append(
                    self._parse_function(
                        start, visibility, tuple(modifiers), attributes, allow_signature
                    )
                )
            elif self._check(TokenType.TYPE, TokenType.LET):
                # Associated types and constants
                while not self._match(TokenType.SEMICOLON):
                    if self._is_at_end():
                        raise self._error("Expected ';'")
                    self._advance()
            else:
                raise self._error("Expected 'fn', 'type' or 'let'")
        self._advance()
        return tuple(methods)

    def _parse_impl(self, start: int) -> ImplBlock:
        self._expect(TokenType.IMPL, "Expected 'impl'")
        generics = self._parse_generic_params()
        first = self._parse_type()
        trait_type: Optional[UnresolvedType] = None
        self_type = first
        if self._match(TokenType.FOR):
            trait_type = first
            self_type = self._parse_type()
        self._skip_where_clause()
        methods = self._parse_member_functions(allow_signature=False)
        return ImplBlock(self_type, methods, trait_type, generics, self._span_from(start))

    def _parse_trait(self, start: int, visibility: Visibility) -> TraitDef:
        self._expect(TokenType.TRAIT, "Expected 'trait'")
        name = self._parse_ident("Expected trait name")
        generics = self._parse_generic_params()
        if self._match(TokenType.COLON):
            while not self._check(TokenType.LBRACE, TokenType.WHERE, TokenType.EOF):
                self._advance()
        self._skip_where_clause()
        methods = self._parse_member_functions(allow_signature=True)
        return TraitDef(name, visibility, methods, generics, self._span_from(start))

    def _parse_type_alias(self, start: int, visibility: Visibility) -> TypeAlias:
        self._expect(TokenType.TYPE, "Expected 'type'")
        name = self._parse_ident("Expected type alias name")
        self._parse_generic_params()
        self._expect(TokenType.ASSIGN, "Expected '=' in type alias")
        typ = self._parse_type()
        self._expect(TokenType.SEMICOLON, "Expected ';' after type alias")
        return TypeAlias(name, visibility, typ, self._span_from(start))

    # -------------------------------------------------------------------------
    # Types and patterns
    # -------------------------------------------------------------------------

    def _parse_type(self) -> UnresolvedType:
        start = self._current.span.start
        text = self._parse_type_text()
        return UnresolvedType(text, self._span_from(start))

    def _parse_type_text(self) -> str:
        if self._match(TokenType.AMPERSAND):
            mutable = self._match(TokenType.MUT)
            return ("&mut " if mutable else "&") + self._parse_type_text()

        if self._match(TokenType.LBRACKET):
            element = self._parse_type_text()
            if self._match(TokenType.SEMICOLON):
                length = _tokens_text(self._collect_until(TokenType.RBRACKET))
                self._expect(TokenType.RBRACKET, "Expected ']' after array length")
                return f"[{element}; {length}]"
            self._expect(TokenType.RBRACKET, "Expected ']' in slice type")
            return f"[{element}]"

        if self._match(TokenType.LPAREN):
            elements = self._parse_comma_separated(TokenType.RPAREN, self._parse_type_text)
            return f"({', '.join(elements)})"

        if self._match(TokenType.FN):
            env = ""
            if self._check(TokenType.LBRACKET):
                self._advance()
                env = f"[{self._parse_type_text()}]"
                self._expect(TokenType.RBRACKET, "Expected ']' after closure environment")
            self._expect(TokenType.LPAREN, "Expected '(' in function type")
            params = self._parse_comma_separated(TokenType.RPAREN, self._parse_type_text)
            text = f"fn{env}({', '.join(params)})"
            if self._match(TokenType.ARROW):
                text += f" -> {self._parse_type_text()}"
            return text

        if self._check(TokenType.IMPL):
            self._advance()
            return "impl " + self._parse_type_text()

        if self._check(TokenType.INTEGER):
            return str(self._advance().value)

        if self._current.type in PATH_KIND_KEYWORDS or self._check(
            TokenType.IDENTIFIER, TokenType.SELF
        ):
            parts = [str(self._advance().value)]
            while self._check(TokenType.DOUBLE_COLON) and self._peek().type in (
                TokenType.IDENTIFIER,
                TokenType.SELF,
            ):
                self._advance()
                parts.append(str(self._advance().value))
            text = "::".join(parts)
            if self._match(TokenType.LT):
                args = self._parse_comma_separated(TokenType.GT, self._parse_type_text)
                text += f"<{', '.join(args)}>"
            return text

        raise self._error("Expected a type")

    def _collect_until(self, stop: TokenType) -> list[Token]:
        collected: list[Token] = []
        while not self._check(stop):
            if self._is_at_end():
                raise self._error(f"Expected '{_delimiter_text(stop)}'")
            collected.append(self._advance())
        return collected

    def _parse_pattern(self) -> Pattern:
        start = self._current.span.start
        if self._match(TokenType.MUT):
            name = self._parse_ident("Expected identifier after 'mut'")
            return IdentifierPattern(name, True, self._span_from(start))
        if self._match(TokenType.LPAREN):
            elements = self._parse_comma_separated(TokenType.RPAREN, self._parse_pattern)
            return TuplePattern(elements, self._span_from(start))
        if self._check(TokenType.IDENTIFIER) and self._peek().type in (
            TokenType.LBRACE,
            TokenType.DOUBLE_COLON,
        ):
            path = self._parse_path()

            def parse_field() -> tuple[Ident, Pattern]:
                field_name = self._parse_ident("Expected field name in pattern")
                if self._match(TokenType.COLON):
                    return field_name, self._parse_pattern()
                return field_name, IdentifierPattern(field_name, span=field_name.span)

            self._expect(TokenType.LBRACE, "Expected '{' in struct pattern")
            fields = self._parse_comma_separated(TokenType.RBRACE, parse_field)
            return StructPattern(path, fields, self._span_from(start))
        name = self._parse_ident("Expected a pattern")
        return IdentifierPattern(name, False, self._span_from(start))

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _parse_block(self) -> BlockExpression:
        start = self._expect(TokenType.LBRACE, "Expected '{'").span.start

        def parse_statements() -> tuple[Statement, ...]:
            statements: list[Statement] = []
            while not self._check(TokenType.RBRACE):
                if self._is_at_end():
                    raise self._error("Expected '}' to close block")
                if self._match(TokenType.SEMICOLON):
                    continue
                statements.append(self._parse_statement())
            return tuple(statements)

        statements = self._with_struct_literals(True, parse_statements)
        self._expect(TokenType.RBRACE, "Expected '}' to close block")
        return BlockExpression(statements, self._span_from(start))

    def _parse_statement(self) -> Statement:
        start = self._current.span.start

        if self._check(TokenType.LET) or (
            self._check(TokenType.COMPTIME) and self._peek().type == TokenType.LET
        ):
            return self._parse_let(start)
        if self._match(TokenType.FOR):
            return self._parse_for(start)
        if self._match(TokenType.WHILE):
            condition = self._with_struct_literals(False, self._parse_expression)
            body = self._parse_block()
            self._match(TokenType.SEMICOLON)
            return WhileStatement(condition, body, self._span_from(start))
        if self._match(TokenType.LOOP):
            body = self._parse_block()
            self._match(TokenType.SEMICOLON)
            return LoopStatement(body, self._span_from(start))
        if self._match(TokenType.BREAK):
            self._match(TokenType.SEMICOLON)
            return BreakStatement(self._span_from(start))
        if self._match(TokenType.CONTINUE):
            self._match(TokenType.SEMICOLON)
            return ContinueStatement(self._span_from(start))
        if self._match(TokenType.RETURN):
            value = None
            if not self._check(TokenType.SEMICOLON, TokenType.RBRACE):
                value = self._parse_expression()
            self._match(TokenType.SEMICOLON)
            return ReturnStatement(value, self._span_from(start))

        expression = self._parse_expression()

        if self._current.type in ASSIGNMENT_OPERATORS:
            operator = ASSIGNMENT_OPERATORS[self._advance().type]
            value = self._parse_expression()
            self._expect(TokenType.SEMICOLON, "Expected ';' after assignment")
            return AssignStatement(expression, operator, value, self._span_from(start))

        has_semicolon = self._match(TokenType.SEMICOLON)
        if not has_semicolon and not isinstance(expression, BLOCK_LIKE):
            if not self._check(TokenType.RBRACE):
                raise self._error("Expected ';' after expression")
        return ExpressionStatement(expression, has_semicolon, self._span_from(start))

    def _parse_let(self, start: int) -> LetStatement:
        is_comptime = self._match(TokenType.COMPTIME)
        self._expect(TokenType.LET, "Expected 'let'")
        pattern = self._parse_pattern()
        typ = self._parse_type() if self._match(TokenType.COLON) else None
        self._expect(TokenType.ASSIGN, "Expected '=' in let statement")
        value = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "Expected ';' after let statement")
        return LetStatement(pattern, value, typ, is_comptime, self._span_from(start))

    def _parse_for(self, start: int) -> ForStatement:
        identifier = self._parse_ident("Expected loop variable after 'for'")
        self._expect(TokenType.IN, "Expected 'in' after loop variable")
        iterable = self._with_struct_literals(False, self._parse_expression)
        body = self._parse_block()
        self._match(TokenType.SEMICOLON)
        return ForStatement(identifier, iterable, body, self._span_from(start))

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        start = self._current.span.start
        expression = self._parse_binary(Precedence.LOGICAL_OR)
        if self._check(TokenType.DOUBLE_DOT, TokenType.DOUBLE_DOT_EQ):
            inclusive = self._advance().type == TokenType.DOUBLE_DOT_EQ
            end = self._parse_binary(Precedence.LOGICAL_OR)
            return RangeExpression(expression, end, inclusive, self._span_from(start))
        return expression

    def _binary_operator(self) -> Optional[tuple[str, int, int]]:
        """Return (operator, precedence, token count) for the current position."""
        token = self._current
        if token.type == TokenType.GT:
            following = self._peek()
            if following.type == TokenType.GT and following.span.start == token.span.end:
                return ">>", Precedence.SHIFT, 2
        entry = BINARY_OPERATORS.get(token.type)
        if entry is None:
            return None
        return entry[0], entry[1], 1

    def _parse_binary(self, min_precedence: int) -> Expression:
        start = self._current.span.start
        lhs = self._parse_cast()
        while True:
            operator = self._binary_operator()
            if operator is None or operator[1] < min_precedence:
                return lhs
            text, precedence, count = operator
            for _ in range(count):
                self._advance()
            rhs = self._parse_binary(precedence + 1)
            lhs = InfixExpression(lhs, text, rhs, self._span_from(start))

    def _parse_cast(self) -> Expression:
        start = self._current.span.start
        expression = self._parse_unary()
        while self._match(TokenType.AS):
            expression = CastExpression(expression, self._parse_type(), self._span_from(start))
        return expression

    def _parse_unary(self) -> Expression:
        start = self._current.span.start
        if self._check(TokenType.MINUS, TokenType.BANG, TokenType.STAR):
            operator = self._advance().value
            return PrefixExpression(operator, self._parse_unary(), self._span_from(start))
        if self._check(TokenType.AMPERSAND):
            if self._peek().type == TokenType.LBRACKET:
                self._advance()
                return self._parse_postfix(self._parse_array(start, is_slice=True), start)
            self._advance()
            operator = "&mut" if self._match(TokenType.MUT) else "&"
            return PrefixExpression(operator, self._parse_unary(), self._span_from(start))
        return self._parse_postfix(self._parse_primary(), start)

    def _parse_arguments(self) -> tuple[Expression, ...]:
        self._expect(TokenType.LPAREN, "Expected '('")
        return self._with_struct_literals(
            True, lambda: self._parse_comma_separated(TokenType.RPAREN, self._parse_expression)
        )

    def _parse_postfix(self, expression: Expression, start: int) -> Expression:
        while True:
            if self._check(TokenType.LPAREN):
                arguments = self._parse_arguments()
                expression = CallExpression(expression, arguments, False, self._span_from(start))
            elif self._match(TokenType.DOT):
                if self._check(TokenType.INTEGER):
                    token = self._advance()
                    member = Ident(str(token.value), token.span)
                else:
                    member = self._parse_ident("Expected field or method name after '.'")
                generics: tuple[UnresolvedType, ...] = ()
                if self._check(TokenType.DOUBLE_COLON) and self._peek().type == TokenType.LT:
                    generics = self._parse_turbofish()
                is_macro = False
                if self._check(TokenType.BANG) and self._peek().type == TokenType.LPAREN:
                    self._advance()
                    is_macro = True
                if self._check(TokenType.LPAREN):
                    arguments = self._parse_arguments()
                    expression = MethodCallExpression(
                        expression, member, arguments, generics, is_macro, self._span_from(start)
                    )
                else:
                    expression = MemberAccess(expression, member, self._span_from(start))
            elif self._match(TokenType.LBRACKET):
                index = self._with_struct_literals(True, self._parse_expression)
                self._expect(TokenType.RBRACKET, "Expected ']' after index")
                expression = IndexExpression(expression, index, self._span_from(start))
            else:
                return expression

    def _parse_turbofish(self) -> tuple[UnresolvedType, ...]:
        self._expect(TokenType.DOUBLE_COLON, "Expected '::'")
        self._expect(TokenType.LT, "Expected '<'")
        return self._parse_comma_separated(TokenType.GT, self._parse_type)

    def _parse_path(self) -> Path:
        start = self._current.span.start
        kind = PathKind.PLAIN
        if self._current.type in PATH_KIND_KEYWORDS:
            kind = PATH_KIND_KEYWORDS[self._advance().type]
            self._expect(TokenType.DOUBLE_COLON, f"Expected '::' after '{kind.value}'")

        segments = [self._parse_path_segment()]
        generics: tuple[UnresolvedType, ...] = ()
        while self._check(TokenType.DOUBLE_COLON):
            if self._peek().type == TokenType.LT:
                generics = self._parse_turbofish()
                continue
            self._advance()
            segments.append(self._parse_path_segment())
        return Path(tuple(segments), kind, generics, self._span_from(start))

    def _parse_path_segment(self) -> Ident:
        if self._check(TokenType.SELF):
            token = self._advance()
            return Ident("self", token.span)
        return self._parse_ident("Expected identifier in path")

    def _looks_like_constructor(self) -> bool:
        if not (self._allow_struct_literal and self._check(TokenType.LBRACE)):
            return False
        first = self._peek(1)
        if first.type == TokenType.RBRACE:
            return True
        return first.type == TokenType.IDENTIFIER and self._peek(2).type in (
            TokenType.COLON,
            TokenType.COMMA,
            TokenType.RBRACE,
        )

    def _parse_array(self, start: int, is_slice: bool) -> Expression:
        self._expect(TokenType.LBRACKET, "Expected '['")

        def parse_elements() -> Expression:
            if self._match(TokenType.RBRACKET):
                return ArrayLiteral((), is_slice, self._span_from(start))
            first = self._parse_expression()
            if self._match(TokenType.SEMICOLON):
                length = self._parse_expression()
                self._expect(TokenType.RBRACKET, "Expected ']' after array length")
                return RepeatedArrayLiteral(first, length, is_slice, self._span_from(start))
            elements = [first]
            while self._match(TokenType.COMMA):
                if self._check(TokenType.RBRACKET):
                    break
                elements.append(self._parse_expression())
            self._expect(TokenType.RBRACKET, "Expected ']' to close array")
            return ArrayLiteral(tuple(elements), is_slice, self._span_from(start))

        return self._with_struct_literals(True, parse_elements)

    def _parse_primary(self) -> Expression:
        token = self._current
        start = token.span.start

        if self._match(TokenType.INTEGER):
            return IntegerLiteral(token.value, token.span)
        if self._match(TokenType.TRUE, TokenType.FALSE):
            return BoolLiteral(token.value, token.span)
        if self._match(TokenType.STRING):
            return StringLiteral(token.value, StringKind.PLAIN, token.span)
        if self._match(TokenType.RAW_STRING):
            return StringLiteral(token.value, StringKind.RAW, token.span)
        if self._match(TokenType.FMT_STRING):
            return StringLiteral(token.value, StringKind.FORMAT, token.span)

        if self._match(TokenType.LPAREN):
            if self._match(TokenType.RPAREN):
                return UnitLiteral(self._span_from(start))

            def parse_group() -> Expression:
                first = self._parse_expression()
                if self._match(TokenType.COMMA):
                    elements = [first]
                    elements.extend(
                        self._parse_comma_separated(TokenType.RPAREN, self._parse_expression)
                    )
                    return TupleExpression(tuple(elements), self._span_from(start))
                self._expect(TokenType.RPAREN, "Expected ')'")
                return ParenthesizedExpression(first, self._span_from(start))

            return self._with_struct_literals(True, parse_group)

        if self._check(TokenType.LBRACKET):
            return self._parse_array(start, is_slice=False)
        if self._check(TokenType.LBRACE):
            return self._parse_block()
        if self._match(TokenType.IF):
            return self._parse_if(start)
        if self._match(TokenType.MATCH):
            return self._parse_match(start)
        if self._match(TokenType.UNSAFE):
            return UnsafeExpression(self._parse_block(), self._span_from(start))
        if self._match(TokenType.COMPTIME):
            return ComptimeExpression(self._parse_block(), self._span_from(start))
        if self._match(TokenType.QUOTE):
            inner = self._skip_balanced(TokenType.LBRACE, TokenType.RBRACE)
            return QuoteExpression(_tokens_text(inner), self._span_from(start))
        if self._check(TokenType.PIPE, TokenType.OR_OR):
            return self._parse_lambda(start)
        if self._check(TokenType.ASSERT, TokenType.ASSERT_EQ):
            kind = self._advance().value
            arguments = self._parse_arguments()
            return ConstrainExpression(kind, arguments, self._span_from(start))

        if self._current.type in PATH_KIND_KEYWORDS or self._check(
            TokenType.IDENTIFIER, TokenType.SELF
        ):
            path = self._parse_path()
            if self._check(TokenType.BANG) and self._peek().type == TokenType.LPAREN:
                self._advance()
                func = PathExpression(path, path.span)
                arguments = self._parse_arguments()
                return CallExpression(func, arguments, True, self._span_from(start))
            if self._looks_like_constructor():
                return self._parse_constructor(path, start)
            return PathExpression(path, path.span)

        raise self._error("Expected an expression")

    def _parse_if(self, start: int) -> IfExpression:
        condition = self._with_struct_literals(False, self._parse_expression)
        consequence = self._parse_block()
        alternative: Optional[Expression] = None
        if self._match(TokenType.ELSE):
            else_start = self._current.span.start
            if self._match(TokenType.IF):
                alternative = self._parse_if(else_start)
            else:
                alternative = self._parse_block()
        return IfExpression(condition, consequence, alternative, self._span_from(start))

    def _parse_match(self, start: int) -> MatchExpression:
        scrutinee = self._with_struct_literals(False, self._parse_expression)
        self._expect(TokenType.LBRACE, "Expected '{' after match scrutinee")

        def parse_arms() -> tuple[MatchArm, ...]:
            arms: list[MatchArm] = []
            while not self._match(TokenType.RBRACE):
                arm_start = self._current.span.start
                pattern = _tokens_text(self._collect_pattern_tokens())
                self._expect(TokenType.FAT_ARROW, "Expected '=>' after match pattern")
                body = self._parse_expression()
                arms.append(MatchArm(pattern, body, self._span_from(arm_start)))
                if not self._match(TokenType.COMMA):
                    if not isinstance(body, BLOCK_LIKE) and not self._check(TokenType.RBRACE):
                        raise self._error("Expected ',' after match arm")
            return tuple(arms)

        arms = self._with_struct_literals(True, parse_arms)
        return MatchExpression(scrutinee, arms, self._span_from(start))

    def _collect_pattern_tokens(self) -> list[Token]:
        """Consume a match pattern up to the `=>` at nesting depth zero."""
        collected: list[Token] = []
        depth = 0
        while depth > 0 or not self._check(TokenType.FAT_ARROW):
            if self._is_at_end():
                raise self._error("Expected '=>' after match pattern")
            if self._check(TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
                depth += 1
            elif self._check(TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE):
                if depth == 0:
                    raise self._error("Expected '=>' after match pattern")
                depth -= 1
            collected.append(self._advance())
        if not collected:
            raise self._error("Expected a match pattern")
        return collected

    def _parse_lambda(self, start: int) -> LambdaExpression:
        parameters: tuple[LambdaParameter, ...] = ()
        if not self._match(TokenType.OR_OR):
            self._expect(TokenType.PIPE, "Expected '|'")

            def parse_parameter() -> LambdaParameter:
                pattern = self._parse_pattern()
                typ = self._parse_type() if self._match(TokenType.COLON) else None
                return LambdaParameter(pattern, typ)

            parameters = self._parse_comma_separated(TokenType.PIPE, parse_parameter)

        return_type: Optional[UnresolvedType] = None
        if self._match(TokenType.ARROW):
            return_type = self._parse_type()
            body: Expression = self._parse_block()
        else:
            body = self._parse_expression()
        return LambdaExpression(parameters, body, return_type, self._span_from(start))

    def _parse_constructor(self, path: Path, start: int) -> ConstructorExpression:
        self._expect(TokenType.LBRACE, "Expected '{'")

        def parse_field() -> tuple[Ident, Expression]:
            name = self._parse_ident("Expected field name")
            if self._match(TokenType.COLON):
                return name, self._parse_expression()
            # Shorthand `Point { x }`
            return name, PathExpression(Path((name,), span=name.span), name.span)

        fields = self._with_struct_literals(
            True, lambda: self._parse_comma_separated(TokenType.RBRACE, parse_field)
        )
        return ConstructorExpression(path, fields, self._span_from(start))


# =============================================================================
# Helpers
# =============================================================================


_DELIMITER_TEXT = {
    TokenType.RPAREN: ")",
    TokenType.RBRACE: "}",
    TokenType.RBRACKET: "]",
    TokenType.GT: ">",
    TokenType.PIPE: "|",
    TokenType.LPAREN: "(",
    TokenType.LBRACE: "{",
    TokenType.LBRACKET: "[",
}

# Tokens rendered without surrounding spaces when joining token text
_TIGHT = frozenset({"::", ".", "(", ")", "[", "]", "<", ">", ",", ";", "!", "&"})


def _delimiter_text(token_type: TokenType) -> str:
    return _DELIMITER_TEXT.get(token_type, token_type.name.lower())


def _tokens_text(tokens: list[Token]) -> str:
    """Render tokens back into compact source-like text."""
    parts: list[str] = []
    for token in tokens:
        if token.type == TokenType.STRING:
            text = f'"{token.value}"'
        else:
            text = str(token.value)
        if parts and text not in _TIGHT and parts[-1] not in _TIGHT:
            parts.append(" ")
        parts.append(text)
    return "".join(parts)


def parse_tokens(tokens: list[Token], filename: Optional[str] = None) -> tuple[ParsedModule, list[NoirLintError]]:
    """
    Parse a token list, returning the module and every syntax error found.

    Args:
        tokens: Tokens produced by the Lexer
        filename: Optional filename for error reporting

    Returns:
        Tuple of (module, errors); errors is empty on success
    """
    parser = Parser(tokens, filename)
    module = parser.parse()
    return module, parser.errors
