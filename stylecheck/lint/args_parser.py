"""Argument parsing for the stylecheck command."""

import argparse
import sys
from dataclasses import dataclass, field
from typing import Optional

from typeguard import typechecked


@typechecked
@dataclass
class LintArgs:
    """Parsed command-line arguments. None means "not given on the command line"."""

    root: str = "."
    roots: Optional[list[str]] = None
    exclude: Optional[str] = None
    extensions: Optional[list[str]] = None
    symbol_kinds: Optional[list[str]] = None
    disable: list[str] = field(default_factory=lambda: list[str]())
    jobs: Optional[int] = None
    no_style: bool = False
    no_symbols: bool = False
    no_external: bool = False
    verbose: bool = False
    files: list[str] = field(default_factory=lambda: list[str]())


def _comma_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_lint_args(argv: list[str] | None = None) -> LintArgs:
    """
    Parse command-line arguments for stylecheck.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        LintArgs object with parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="stylecheck",
        description="Heuristic C++ style and error-code consistency checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Checks run on every source file under the configured roots:
  - style heuristics: brace placement, trailing whitespace, indentation,
    tabs, control keyword spacing, padded parentheses, '// namespace'
    comments, double whitespace, runs of more than two empty lines
  - extern symbols: ErrorCodes::NAME used without 'extern const int NAME;'
    in the same file, declared but unused, or declared twice

Settings can also be placed under [tool.stylecheck] in <root>/pyproject.toml.

Exit status: 0 no violations, 1 violations found, 2 configuration error,
130 interrupted.

Examples:
  stylecheck                          # Scan src/, base/, programs/, utils/
  stylecheck --root ../project        # Scan another checkout
  stylecheck --roots src,tests        # Scan other subtrees
  stylecheck --disable double-whitespace
  stylecheck src/Common/Exception.cpp # Check specific files only
""",
    )

    parser.add_argument(
        "--root",
        default=".",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "--roots",
        type=_comma_list,
        default=None,
        help="Comma-separated subtrees to scan, relative to --root",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Regex of root-relative paths to skip",
    )
    parser.add_argument(
        "--extensions",
        type=_comma_list,
        default=None,
        help="Comma-separated source extensions (e.g. .h,.cpp)",
    )
    parser.add_argument(
        "--symbol-kinds",
        type=_comma_list,
        default=None,
        help="Comma-separated extern symbol namespaces (ErrorCodes, ProfileEvents, CurrentMetrics)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="CATEGORY",
        help="Do not report this category (repeatable)",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=int,
        default=None,
        help="Number of worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--no-style",
        action="store_true",
        help="Skip the heuristic style scan",
    )
    parser.add_argument(
        "--no-symbols",
        action="store_true",
        help="Skip the extern symbol consistency check",
    )
    parser.add_argument(
        "--no-external",
        action="store_true",
        help="Skip external steps configured in pyproject.toml",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=[],
        help="Optional: specific file(s) to check instead of scanning the roots",
    )

    if argv is None:
        argv = sys.argv[1:]

    args = parser.parse_args(argv)

    return LintArgs(
        root=args.root,
        roots=args.roots,
        exclude=args.exclude,
        extensions=args.extensions,
        symbol_kinds=args.symbol_kinds,
        disable=list(args.disable),
        jobs=args.jobs,
        no_style=args.no_style,
        no_symbols=args.no_symbols,
        no_external=args.no_external,
        verbose=args.verbose,
        files=list(args.files),
    )
