"""Tests for the noirlint LSP diagnostics provider and server handlers."""

from lsprotocol import types
from lsprotocol.types import DiagnosticSeverity, DiagnosticTag

from noirlint.lsp.diagnostics import (
    DiagnosticProvider,
    get_diagnostics_for_document,
    offset_to_position,
    span_to_range,
)
from noirlint.lsp.server import NoirLintLanguageServer, create_server
from noirlint.utils.errors import Span

URI = "file:///project/src/main.nr"


class TestDiagnosticProvider:
    """Test suite for DiagnosticProvider."""

    def test_clean_code_has_no_diagnostics(self) -> None:
        """Public, called code produces nothing."""
        source = "fn helper() {}\npub fn main() { helper(); }\n"
        assert get_diagnostics_for_document(source, URI) == []

    def test_unused_function_warning(self) -> None:
        """An unused function becomes a warning on its name."""
        source = "pub fn main() {}\nfn helper() {}\n"
        diagnostics = get_diagnostics_for_document(source, URI)

        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.severity == DiagnosticSeverity.Warning
        assert diag.message == "Function 'helper' is unused"
        assert diag.source == "noirlint"
        assert diag.code == "unused-function"
        assert diag.tags == [DiagnosticTag.Unnecessary]
        assert diag.range.start == types.Position(line=1, character=3)
        assert diag.range.end == types.Position(line=1, character=9)

    def test_syntax_errors_reported(self) -> None:
        """Every syntax error is an error diagnostic and no lints are produced."""
        source = "fn a() { let = 1; }\nfn b( {}\nfn unused() {}\n"
        diagnostics = get_diagnostics_for_document(source, URI)

        assert len(diagnostics) == 2
        assert all(d.severity == DiagnosticSeverity.Error for d in diagnostics)
        assert all(d.code is None for d in diagnostics)

    def test_lexer_error_reported(self) -> None:
        diagnostics = get_diagnostics_for_document('fn a() { "open }', URI)
        assert len(diagnostics) == 1
        assert "Unterminated string" in diagnostics[0].message

    def test_provider_reuses_rules(self) -> None:
        """An explicit empty rule list yields no lints."""
        provider = DiagnosticProvider("fn helper() {}", URI, rules=[])
        assert provider.get_diagnostics() == []


class TestPositions:
    """Byte offsets to UTF-16 LSP positions."""

    def test_ascii(self) -> None:
        assert offset_to_position(b"ab\ncd", 4) == types.Position(line=1, character=1)

    def test_multibyte_characters(self) -> None:
        source = "é😀x".encode("utf-8")
        # é is 2 bytes / 1 UTF-16 unit, the emoji is 4 bytes / 2 units
        assert offset_to_position(source, 6) == types.Position(line=0, character=3)

    def test_out_of_range_offset(self) -> None:
        assert offset_to_position(b"abc", 99) == types.Position(line=0, character=0)

    def test_empty_span_widened(self) -> None:
        rng = span_to_range(b"abc", Span(1, 1))
        assert rng.start == types.Position(line=0, character=1)
        assert rng.end == types.Position(line=0, character=2)

    def test_missing_span(self) -> None:
        rng = span_to_range(b"abc", None)
        assert rng.start == types.Position(line=0, character=0)


class TestServerHandlers:
    """Document lifecycle handlers publish diagnostics."""

    def _server(self, monkeypatch):
        server = NoirLintLanguageServer()
        published: list[types.PublishDiagnosticsParams] = []
        monkeypatch.setattr(server, "text_document_publish_diagnostics", published.append)
        return server, published

    def test_server_registers_document_handlers(self) -> None:
        """The server can be constructed and exposes its lifecycle features."""
        server = create_server()
        features = server.protocol.fm.features
        for method in (
            types.TEXT_DOCUMENT_DID_OPEN,
            types.TEXT_DOCUMENT_DID_CHANGE,
            types.TEXT_DOCUMENT_DID_SAVE,
            types.TEXT_DOCUMENT_DID_CLOSE,
            types.INITIALIZED,
        ):
            assert method in features

    def test_registered_open_handler_publishes(self, monkeypatch) -> None:
        server, published = self._server(monkeypatch)
        handler = server.protocol.fm.features[types.TEXT_DOCUMENT_DID_OPEN]
        handler(
            types.DidOpenTextDocumentParams(
                text_document=types.TextDocumentItem(
                    uri=URI, language_id="noir", version=1, text="pub fn main() {}\n"
                )
            )
        )
        assert len(published) == 1
        assert published[0].diagnostics == []

    def test_open_publishes(self, monkeypatch) -> None:
        server, published = self._server(monkeypatch)
        server._on_did_open(
            types.DidOpenTextDocumentParams(
                text_document=types.TextDocumentItem(
                    uri=URI, language_id="noir", version=1, text="fn helper() {}\n"
                )
            )
        )
        assert len(published) == 1
        assert published[0].uri == URI
        assert published[0].diagnostics[0].code == "unused-function"
        assert server.diagnostics[URI] == published[0].diagnostics

    def test_close_clears(self, monkeypatch) -> None:
        server, published = self._server(monkeypatch)
        server.analyze_document(URI, "fn helper() {}\n")
        server._on_did_close(
            types.DidCloseTextDocumentParams(
                text_document=types.TextDocumentIdentifier(uri=URI)
            )
        )
        assert published[-1].diagnostics == []
        assert URI not in server.diagnostics
