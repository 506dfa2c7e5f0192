"""
Noir Lexer (Tokenizer).

Transforms Noir source code into a stream of tokens. Every token carries a
byte span into the UTF-8 encoding of the source so diagnostics can point at
exact locations regardless of non-ASCII text in comments or strings.
"""

from typing import Iterator, Optional

from noirlint.frontend.tokens import (
    DOUBLE_CHAR_TOKENS,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TRIPLE_CHAR_TOKENS,
    Token,
    TokenType,
)
from noirlint.utils.errors import LexerError, Span

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


def _byte_len(char: str) -> int:
    """Length of a single character once encoded as UTF-8."""
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


class Lexer:
    """
    Tokenizer for Noir source code.

    The lexer supports:
    - Identifiers and keywords
    - Decimal and hexadecimal integer literals (with `_` separators)
    - String, raw string (`r"..."`, `r#"..."#`) and format string literals
    - Line comments (`//`, `///`, `//!`) and nested block comments

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The Noir source code to tokenize
            filename: Optional filename for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.byte_pos = 0
        self.tokens: list[Token] = []

    @property
    def _current_char(self) -> Optional[str]:
        """Return the current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def _peek_ahead(self, n: int) -> Optional[str]:
        """Return the character n positions ahead."""
        peek_pos = self.pos + n
        if peek_pos >= len(self.source):
            return None
        return self.source[peek_pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1
        self.byte_pos += _byte_len(char)
        return char

    def _span_from(self, start: int) -> Span:
        return Span(start, self.byte_pos)

    def _error(self, message: str, start: Optional[int] = None) -> LexerError:
        begin = self.byte_pos if start is None else start
        return LexerError(message, Span(begin, max(begin, self.byte_pos)))

    def _skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, line comments and (nested) block comments."""
        while self._current_char is not None:
            char = self._current_char
            if char in " \t\r\n":
                self._advance()
            elif char == "/" and self._peek_ahead(1) == "/":
                while self._current_char is not None and self._current_char != "\n":
                    self._advance()
            elif char == "/" and self._peek_ahead(1) == "*":
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start = self.byte_pos
        self._advance()
        self._advance()
        depth = 1
        while depth > 0:
            if self._current_char is None:
                raise self._error("Unterminated block comment", start)
            if self._current_char == "/" and self._peek_ahead(1) == "*":
                self._advance()
                self._advance()
                depth += 1
            elif self._current_char == "*" and self._peek_ahead(1) == "/":
                self._advance()
                self._advance()
                depth -= 1
            else:
                self._advance()

    def _read_number(self) -> Token:
        start = self.byte_pos
        digits: list[str] = []

        if self._current_char == "0" and self._peek_ahead(1) in ("x", "X"):
            self._advance()
            self._advance()
            while self._current_char is not None and (
                self._current_char in "0123456789abcdefABCDEF_"
            ):
                char = self._advance()
                if char != "_":
                    digits.append(char)
            if not digits:
                raise self._error("Hexadecimal literal has no digits", start)
            return Token(TokenType.INTEGER, int("".join(digits), 16), self._span_from(start))

        while self._current_char is not None and (
            self._current_char in "0123456789_"
        ):
            char = self._advance()
            if char != "_":
                digits.append(char)
        return Token(TokenType.INTEGER, int("".join(digits)), self._span_from(start))

    def _read_string_body(self, start: int) -> str:
        """Read a double-quoted body; the opening quote is already consumed."""
        chars: list[str] = []
        while True:
            char = self._current_char
            if char is None:
                raise self._error("Unterminated string literal", start)
            if char == '"':
                self._advance()
                return "".join(chars)
            if char == "\\":
                self._advance()
                escaped = self._current_char
                if escaped is None:
                    raise self._error("Unterminated string literal", start)
                if escaped not in _ESCAPES:
                    raise self._error(f"Invalid escape sequence '\\{escaped}'")
                self._advance()
                chars.append(_ESCAPES[escaped])
            else:
                chars.append(self._advance())

    def _read_raw_string(self, start: int) -> Token:
        """Read `r"..."` or `r#"..."#`; the leading `r` is already consumed."""
        hashes = 0
        while self._current_char == "#":
            self._advance()
            hashes += 1
        if self._current_char != '"':
            raise self._error("Expected '\"' to open raw string", start)
        self._advance()

        terminator = '"' + "#" * hashes
        chars: list[str] = []
        while True:
            if self._current_char is None:
                raise self._error("Unterminated raw string literal", start)
            if self.source.startswith(terminator, self.pos):
                for _ in terminator:
                    self._advance()
                return Token(TokenType.RAW_STRING, "".join(chars), self._span_from(start))
            chars.append(self._advance())

    def _read_identifier(self) -> Token:
        start = self.byte_pos
        chars: list[str] = []
        while self._current_char is not None and (
            self._current_char.isalnum() or self._current_char == "_"
        ):
            chars.append(self._advance())
        text = "".join(chars)

        token_type = KEYWORDS.get(text)
        if token_type is not None:
            if token_type in (TokenType.TRUE, TokenType.FALSE):
                return Token(token_type, token_type == TokenType.TRUE, self._span_from(start))
            return Token(token_type, text, self._span_from(start))
        return Token(TokenType.IDENTIFIER, text, self._span_from(start))

    def _next_token(self) -> Token:
        char = self._current_char
        assert char is not None
        start = self.byte_pos

        if char in "0123456789":
            return self._read_number()

        if char == '"':
            self._advance()
            return Token(TokenType.STRING, self._read_string_body(start), self._span_from(start))

        if char == "r" and self._peek_ahead(1) in ('"', "#"):
            self._advance()
            return self._read_raw_string(start)

        if char == "f" and self._peek_ahead(1) == '"':
            self._advance()
            self._advance()
            return Token(TokenType.FMT_STRING, self._read_string_body(start), self._span_from(start))

        if char.isalpha() or char == "_":
            return self._read_identifier()

        for table, width in ((TRIPLE_CHAR_TOKENS, 3), (DOUBLE_CHAR_TOKENS, 2)):
            text = self.source[self.pos:self.pos + width]
            if text in table:
                for _ in range(width):
                    self._advance()
                return Token(table[text], text, self._span_from(start))

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(SINGLE_CHAR_TOKENS[char], char, self._span_from(start))

        self._advance()
        raise self._error(f"Unexpected character '{char}'", start)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source.

        Returns:
            The token list, always terminated by an EOF token

        Raises:
            LexerError: On an invalid character or malformed literal
        """
        self.tokens = list(self)
        return self.tokens

    def __iter__(self) -> Iterator[Token]:
        while True:
            self._skip_whitespace_and_comments()
            if self._current_char is None:
                yield Token(TokenType.EOF, None, Span(self.byte_pos, self.byte_pos))
                return
            yield self._next_token()
