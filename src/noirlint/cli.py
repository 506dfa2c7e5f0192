"""
noirlint Command-Line Interface.

Lints a single Noir source file, either given directly or resolved from the
entry point of a Nargo.toml manifest.

Usage:
    noirlint                            # lint the package in ./Nargo.toml
    noirlint --manifest-path app/Nargo.toml
    noirlint src/main.nr --no-color
    noirlint --list-rules
    noirlint src/main.nr --rule unused-function

Exit codes:
    0  no error-severity lints
    1  at least one error-severity lint
    2  the file could not be read or parsed, or the manifest is invalid
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from noirlint import __version__
from noirlint.analysis import analyze, parse_file
from noirlint.diagnostics import Lint, Severity, render, resolve_position
from noirlint.lints import ALL_RULES, LintRule, default_rules, get_rule_by_name
from noirlint.manifest import MANIFEST_FILENAME, load_manifest
from noirlint.utils.errors import NoirLintError, ParsingError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_FAILURE = 2


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.CYAN = ""
        cls.BOLD = ""
        cls.RESET = ""


def _colors_enabled(no_color: bool) -> bool:
    """Colors are used only on a TTY, and never when NO_COLOR is set."""
    if no_color or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="noirlint",
        description="noirlint - static analysis for Noir programs",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "input",
        nargs="?",
        type=Path,
        metavar="FILE",
        help="Noir source file to lint (default: the manifest's entry point)",
    )
    target.add_argument(
        "--manifest-path",
        type=Path,
        metavar="PATH",
        help=f"Path to {MANIFEST_FILENAME} (default: ./{MANIFEST_FILENAME})",
    )

    parser.add_argument(
        "--rule",
        action="append",
        metavar="NAME",
        help="Run only this rule (repeatable; default: all rules)",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List all available lint rules and exit",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    return parser


# =============================================================================
# Helpers
# =============================================================================


def _select_rules(names: Optional[list[str]]) -> list[LintRule]:
    if not names:
        return default_rules()
    return [get_rule_by_name(name) for name in names]


def _resolve_source(args: argparse.Namespace) -> Path:
    if args.input is not None:
        return args.input

    package = load_manifest(args.manifest_path or Path(MANIFEST_FILENAME))
    logger.info("Linting package '%s' (%s)", package.name, package.package_type.value)
    return package.entry_path


def _print_rules() -> None:
    print(f"{Colors.BOLD}Available lint rules:{Colors.RESET}")
    for name, rule_class in ALL_RULES.items():
        print(f"  {Colors.CYAN}{name}{Colors.RESET}  {rule_class.description}")


def _print_parse_errors(error: ParsingError, source_path: Path) -> None:
    try:
        source: Optional[bytes] = source_path.read_bytes()
    except OSError:
        source = None

    for item in error.errors:
        location = str(source_path)
        if item.span is not None and source is not None:
            line, column = resolve_position(source, item.span.start)
            location = f"{source_path}:{line}:{column}"
        print(f"{location}: {Colors.RED}error:{Colors.RESET} {item.message}", file=sys.stderr)
    print(f"{Colors.RED}{error.message}{Colors.RESET}", file=sys.stderr)


def _summary(lints: list[Lint]) -> str:
    if not lints:
        return f"{Colors.GREEN}No lints found{Colors.RESET}"
    errors = sum(1 for lint in lints if lint.severity == Severity.ERROR)
    warnings = len(lints) - errors
    return (
        f"{Colors.YELLOW}{warnings} warning(s){Colors.RESET}, "
        f"{Colors.RED}{errors} error(s){Colors.RESET}"
    )


# =============================================================================
# Entry Point
# =============================================================================


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()), format=LOG_FORMAT)
    use_color = _colors_enabled(args.no_color)
    if not use_color:
        Colors.disable()

    if args.list_rules:
        _print_rules()
        return EXIT_OK

    try:
        rules = _select_rules(args.rule)
        source_path = _resolve_source(args)
    except NoirLintError as e:
        print(f"{Colors.RED}error:{Colors.RESET} {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        module = parse_file(source_path)
        lints = analyze(module, rules)
    except ParsingError as e:
        _print_parse_errors(e, source_path)
        return EXIT_FAILURE
    except NoirLintError as e:
        print(f"{Colors.RED}error:{Colors.RESET} {e}", file=sys.stderr)
        return EXIT_FAILURE

    report = render(lints, source_path, use_color=use_color)
    if report:
        print(report)
        print()
    print(_summary(lints))

    if any(lint.is_error for lint in lints):
        return EXIT_LINT_ERRORS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
