"""
Token definitions for the Noir lexer.

This module defines the token types recognized by the noirlint frontend:
keywords, punctuation, operators and literals of the Noir subset the
analysis engine consumes.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from noirlint.utils.errors import Span


class TokenType(Enum):
    """Enumeration of all token types."""

    # End of file
    EOF = auto()

    # Literals
    INTEGER = auto()
    STRING = auto()
    RAW_STRING = auto()
    FMT_STRING = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Keywords
    FN = auto()
    PUB = auto()
    CRATE = auto()
    DEP = auto()
    SUPER = auto()
    SELF = auto()
    LET = auto()
    MUT = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    IN = auto()
    WHILE = auto()
    LOOP = auto()
    MATCH = auto()
    BREAK = auto()
    CONTINUE = auto()
    RETURN = auto()
    STRUCT = auto()
    ENUM = auto()
    IMPL = auto()
    TRAIT = auto()
    TYPE = auto()
    USE = auto()
    MOD = auto()
    GLOBAL = auto()
    COMPTIME = auto()
    UNCONSTRAINED = auto()
    UNSAFE = auto()
    AS = auto()
    WHERE = auto()
    TRUE = auto()
    FALSE = auto()
    ASSERT = auto()
    ASSERT_EQ = auto()
    QUOTE = auto()

    # Delimiters
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    COLON = auto()  # :
    DOUBLE_COLON = auto()  # ::
    DOT = auto()  # .
    DOUBLE_DOT = auto()  # ..
    DOUBLE_DOT_EQ = auto()  # ..=
    ARROW = auto()  # ->
    FAT_ARROW = auto()  # =>
    POUND = auto()  # #
    BANG = auto()  # !
    QUESTION = auto()  # ?
    DOLLAR = auto()  # $

    # Operators
    ASSIGN = auto()  # =
    EQ = auto()  # ==
    NE = auto()  # !=
    LT = auto()  # <
    LE = auto()  # <=
    GT = auto()  # > (>> is two adjacent GT tokens)
    GE = auto()  # >=
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    PERCENT = auto()  # %
    CARET = auto()  # ^
    AMPERSAND = auto()  # &
    PIPE = auto()  # |
    SHL = auto()  # <<
    AND_AND = auto()  # &&
    OR_OR = auto()  # ||

    # Compound assignment
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    STAR_ASSIGN = auto()
    SLASH_ASSIGN = auto()
    PERCENT_ASSIGN = auto()
    CARET_ASSIGN = auto()
    AMPERSAND_ASSIGN = auto()
    PIPE_ASSIGN = auto()
    SHL_ASSIGN = auto()
    SHR_ASSIGN = auto()


KEYWORDS: dict[str, TokenType] = {
    "fn": TokenType.FN,
    "pub": TokenType.PUB,
    "crate": TokenType.CRATE,
    "dep": TokenType.DEP,
    "super": TokenType.SUPER,
    "self": TokenType.SELF,
    "let": TokenType.LET,
    "mut": TokenType.MUT,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "while": TokenType.WHILE,
    "loop": TokenType.LOOP,
    "match": TokenType.MATCH,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "return": TokenType.RETURN,
    "struct": TokenType.STRUCT,
    "enum": TokenType.ENUM,
    "impl": TokenType.IMPL,
    "trait": TokenType.TRAIT,
    "type": TokenType.TYPE,
    "use": TokenType.USE,
    "mod": TokenType.MOD,
    "global": TokenType.GLOBAL,
    "comptime": TokenType.COMPTIME,
    "unconstrained": TokenType.UNCONSTRAINED,
    "unsafe": TokenType.UNSAFE,
    "as": TokenType.AS,
    "where": TokenType.WHERE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "assert": TokenType.ASSERT,
    "assert_eq": TokenType.ASSERT_EQ,
    "quote": TokenType.QUOTE,
}

# Three-character operators, checked before two- and one-character ones
TRIPLE_CHAR_TOKENS: dict[str, TokenType] = {
    "..=": TokenType.DOUBLE_DOT_EQ,
    "<<=": TokenType.SHL_ASSIGN,
    ">>=": TokenType.SHR_ASSIGN,
}

DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "::": TokenType.DOUBLE_COLON,
    "..": TokenType.DOUBLE_DOT,
    "->": TokenType.ARROW,
    "=>": TokenType.FAT_ARROW,
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
    "<<": TokenType.SHL,
    "&&": TokenType.AND_AND,
    "||": TokenType.OR_OR,
    "+=": TokenType.PLUS_ASSIGN,
    "-=": TokenType.MINUS_ASSIGN,
    "*=": TokenType.STAR_ASSIGN,
    "/=": TokenType.SLASH_ASSIGN,
    "%=": TokenType.PERCENT_ASSIGN,
    "^=": TokenType.CARET_ASSIGN,
    "&=": TokenType.AMPERSAND_ASSIGN,
    "|=": TokenType.PIPE_ASSIGN,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "#": TokenType.POUND,
    "!": TokenType.BANG,
    "?": TokenType.QUESTION,
    "$": TokenType.DOLLAR,
    "=": TokenType.ASSIGN,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "^": TokenType.CARET,
    "&": TokenType.AMPERSAND,
    "|": TokenType.PIPE,
}


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        value: The literal value (for literals and identifiers) or lexeme text
        span: Byte span of the token in the source
    """

    type: TokenType
    value: Any
    span: Span

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.span})"
        return f"Token({self.type.name}, {self.span})"

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a reserved keyword."""
        return self.type in _KEYWORD_TYPES


_KEYWORD_TYPES = frozenset(KEYWORDS.values())
