"""
Noir frontend.

Tokens, lexer, AST node types and parser for the Noir subset consumed by the
analysis engine.
"""

from typing import Optional

from noirlint.frontend.ast_nodes import ASTVisitor, BaseASTVisitor, ParsedModule
from noirlint.frontend.lexer import Lexer
from noirlint.frontend.parser import Parser, parse_tokens
from noirlint.frontend.tokens import Token, TokenType
from noirlint.utils.errors import LexerError, NoirLintError


def parse_program(
    source: str, filename: Optional[str] = None
) -> tuple[ParsedModule, list[NoirLintError]]:
    """
    Lex and parse a Noir program, collecting every syntax error.

    A lexer error stops tokenization, so it is returned alone together with
    an empty module.

    Args:
        source: Noir source code
        filename: Optional filename for error reporting

    Returns:
        Tuple of (module, errors); errors is empty on success
    """
    try:
        tokens = Lexer(source, filename=filename).tokenize()
    except LexerError as e:
        return ParsedModule(()), [e]
    return parse_tokens(tokens, filename)


__all__ = [
    "ASTVisitor",
    "BaseASTVisitor",
    "Lexer",
    "ParsedModule",
    "Parser",
    "Token",
    "TokenType",
    "parse_program",
    "parse_tokens",
]
