"""
noirlint Language Server Protocol (LSP) Server.

Publishes noirlint's lints as editor diagnostics using pygls. Documents are
re-analyzed when they are opened, changed or saved, and their diagnostics
are cleared when they are closed.

Usage:
    # Start the server in stdio mode (for IDE integration)
    noirlint-lsp

    # Start in TCP mode (for debugging)
    noirlint-lsp --tcp --port 2088
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from noirlint import __version__
from noirlint.lsp.diagnostics import DiagnosticProvider

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("noirlint-lsp")


class NoirLintLanguageServer(LanguageServer):
    """
    Language server that reports noirlint lints for open Noir documents.

    The most recent diagnostics of each open document are kept so they can
    be inspected without re-running the analysis.
    """

    def __init__(self) -> None:
        super().__init__(name="noirlint-lsp", version=f"v{__version__}")

        self.diagnostics: dict[str, list[types.Diagnostic]] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register the document synchronization handlers."""
        # pygls tags each handler with attributes, which bound methods reject
        @self.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams) -> None:
            self._on_did_open(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams) -> None:
            self._on_did_change(params)

        @self.feature(types.TEXT_DOCUMENT_DID_SAVE)
        def did_save(params: types.DidSaveTextDocumentParams) -> None:
            self._on_did_save(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams) -> None:
            self._on_did_close(params)

    def analyze_document(self, uri: str, text: str) -> list[types.Diagnostic]:
        """Analyze a document and remember its diagnostics."""
        diagnostics = DiagnosticProvider(text, uri).get_diagnostics()
        self.diagnostics[uri] = diagnostics
        logger.debug("%d diagnostic(s) for %s", len(diagnostics), uri)
        return diagnostics

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    def _refresh(self, uri: str) -> None:
        document = self.workspace.get_text_document(uri)
        self._publish_diagnostics(uri, self.analyze_document(uri, document.source))

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info("Document opened: %s", document.uri)
        self._publish_diagnostics(
            document.uri, self.analyze_document(document.uri, document.text)
        )

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        logger.debug("Document changed: %s", params.text_document.uri)
        self._refresh(params.text_document.uri)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        logger.info("Document saved: %s", params.text_document.uri)
        self._refresh(params.text_document.uri)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info("Document closed: %s", uri)
        self.diagnostics.pop(uri, None)
        self._publish_diagnostics(uri, [])


def create_server() -> NoirLintLanguageServer:
    """Create and configure the language server."""
    server = NoirLintLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        """Handle initialized notification."""
        logger.info("noirlint language server initialized")

    return server


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the noirlint language server.

    Starts the server in stdio mode unless --tcp is given.
    """
    parser = argparse.ArgumentParser(
        description="noirlint Language Server",
        prog="noirlint-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2088,
        help="Port to listen on in TCP mode (default: 2088)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format=LOG_FORMAT)

    server = create_server()

    if args.tcp:
        logger.info("Starting noirlint LSP in TCP mode on %s:%s", args.host, args.port)
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting noirlint LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
