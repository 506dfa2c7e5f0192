"""
Unit tests for the Noir Lexer.
"""

import pytest

from noirlint.frontend.tokens import TokenType
from noirlint.utils.errors import LexerError, Span


def types_of(tokens):
    return [t.type for t in tokens]


class TestLexerBasics:
    """Basic tokenization."""

    def test_empty_source(self, tokenize):
        """Empty source yields only EOF."""
        tokens = tokenize("")
        assert types_of(tokens) == [TokenType.EOF]
        assert tokens[0].span == Span(0, 0)

    def test_function_signature(self, tokenize):
        """A function header tokenizes to keywords, identifiers and punctuation."""
        tokens = tokenize("pub fn main(x: Field) -> pub u32 {}")
        assert types_of(tokens) == [
            TokenType.PUB,
            TokenType.FN,
            TokenType.IDENTIFIER,
            TokenType.LPAREN,
            TokenType.IDENTIFIER,
            TokenType.COLON,
            TokenType.IDENTIFIER,
            TokenType.RPAREN,
            TokenType.ARROW,
            TokenType.PUB,
            TokenType.IDENTIFIER,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.EOF,
        ]

    def test_identifier_span_is_byte_range(self, tokenize):
        """Spans are byte offsets into the source."""
        tokens = tokenize("fn foo() {}")
        name = tokens[1]
        assert name.value == "foo"
        assert name.span == Span(3, 6)

    def test_keywords_are_keywords(self, tokenize):
        tokens = tokenize("crate dep super self comptime unconstrained")
        assert all(t.is_keyword for t in tokens[:-1])

    def test_bool_literals(self, tokenize):
        tokens = tokenize("true false")
        assert tokens[0].value is True
        assert tokens[1].value is False


class TestLexerNumbers:
    """Integer literals."""

    def test_decimal(self, tokenize):
        tokens = tokenize("1_000")
        assert tokens[0].type == TokenType.INTEGER
        assert tokens[0].value == 1000

    def test_hexadecimal(self, tokenize):
        tokens = tokenize("0xff")
        assert tokens[0].value == 255
        assert tokens[0].span == Span(0, 4)

    def test_range_is_not_a_float(self, tokenize):
        """`0..10` is integer, range, integer."""
        tokens = tokenize("0..10")
        assert types_of(tokens) == [
            TokenType.INTEGER,
            TokenType.DOUBLE_DOT,
            TokenType.INTEGER,
            TokenType.EOF,
        ]

    def test_hex_without_digits(self, tokenize):
        with pytest.raises(LexerError):
            tokenize("0x")


class TestLexerStrings:
    """String literal forms."""

    def test_plain_string_with_escape(self, tokenize):
        tokens = tokenize('"a\\nb"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "a\nb"

    def test_raw_string_with_hashes(self, tokenize):
        tokens = tokenize('r#"say "hi""#')
        assert tokens[0].type == TokenType.RAW_STRING
        assert tokens[0].value == 'say "hi"'

    def test_format_string(self, tokenize):
        tokens = tokenize('f"{x}"')
        assert tokens[0].type == TokenType.FMT_STRING
        assert tokens[0].value == "{x}"

    def test_unterminated_string(self, tokenize):
        with pytest.raises(LexerError, match="Unterminated string"):
            tokenize('"abc')

    def test_multibyte_text_shifts_byte_offsets(self, tokenize):
        """A two-byte character advances the byte offset by two."""
        tokens = tokenize('"é" x')
        assert tokens[0].span == Span(0, 4)
        assert tokens[1].span == Span(5, 6)


class TestLexerCommentsAndOperators:
    """Comments and multi-character operators."""

    def test_line_and_block_comments_skipped(self, tokenize):
        tokens = tokenize("// line\n/* block /* nested */ */ fn")
        assert types_of(tokens) == [TokenType.FN, TokenType.EOF]

    def test_unterminated_block_comment(self, tokenize):
        with pytest.raises(LexerError, match="block comment"):
            tokenize("/* never closed")

    def test_multi_char_operators(self, tokenize):
        tokens = tokenize(":: -> == != <= >= << && || ..= <<= >>= +=")
        assert types_of(tokens)[:-1] == [
            TokenType.DOUBLE_COLON,
            TokenType.ARROW,
            TokenType.EQ,
            TokenType.NE,
            TokenType.LE,
            TokenType.GE,
            TokenType.SHL,
            TokenType.AND_AND,
            TokenType.OR_OR,
            TokenType.DOUBLE_DOT_EQ,
            TokenType.SHL_ASSIGN,
            TokenType.SHR_ASSIGN,
            TokenType.PLUS_ASSIGN,
        ]

    def test_shift_right_is_two_gt_tokens(self, tokenize):
        """`>>` stays two tokens so nested generics close correctly."""
        tokens = tokenize("a >> b")
        assert types_of(tokens) == [
            TokenType.IDENTIFIER,
            TokenType.GT,
            TokenType.GT,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_unexpected_character(self, tokenize):
        with pytest.raises(LexerError, match="Unexpected character"):
            tokenize("fn @")
