"""
Entry point for running the noirlint LSP server as a module.

Usage:
    python -m noirlint.lsp
    python -m noirlint.lsp --tcp --port 2088
"""

from noirlint.lsp.server import main

if __name__ == "__main__":
    main()
