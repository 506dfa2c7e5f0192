"""
Entry point for running noirlint as a module.

Usage:
    python -m noirlint src/main.nr
"""

import sys

from noirlint.cli import main

if __name__ == "__main__":
    sys.exit(main())
