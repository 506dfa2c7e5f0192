"""
noirlint Language Server.

Publishes lints as diagnostics to editors over the Language Server Protocol.
"""

from noirlint.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from noirlint.lsp.server import NoirLintLanguageServer, create_server, main

__all__ = [
    "DiagnosticProvider",
    "NoirLintLanguageServer",
    "create_server",
    "get_diagnostics_for_document",
    "main",
]
