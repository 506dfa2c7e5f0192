"""
Pytest configuration and shared fixtures for noirlint tests.
"""

from pathlib import Path

import pytest

from noirlint.analysis import AnalysisContext, Analyzer
from noirlint.diagnostics import Lint
from noirlint.frontend import parse_program
from noirlint.frontend.ast_nodes import ParsedModule
from noirlint.frontend.lexer import Lexer
from noirlint.frontend.parser import Parser
from noirlint.frontend.tokens import Token


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.nr") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def parser_factory(lexer_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str) -> Parser:
        lexer = lexer_factory(source)
        tokens = lexer.tokenize()
        return Parser(tokens)

    return _create_parser


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        lexer = lexer_factory(source)
        return lexer.tokenize()

    return _tokenize


@pytest.fixture
def parse():
    """Fixture to parse source code that is expected to be valid."""

    def _parse(source: str) -> ParsedModule:
        module, errors = parse_program(source)
        assert errors == [], f"unexpected parse errors: {errors}"
        return module

    return _parse


@pytest.fixture
def build_context(parse):
    """Fixture to parse source code and return the frozen analysis context."""

    def _build(source: str) -> AnalysisContext:
        return Analyzer().build_context(parse(source))

    return _build


@pytest.fixture
def analyze_source(parse):
    """Fixture to parse and analyze source code with the default rules."""

    def _analyze(source: str) -> list[Lint]:
        return Analyzer().analyze(parse(source))

    return _analyze


@pytest.fixture
def write_source(tmp_path):
    """Fixture that writes a source file and returns its path."""

    def _write(source: str, name: str = "main.nr") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write
