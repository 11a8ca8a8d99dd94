#!/usr/bin/env python3
"""
Unified C++ style runner.

Resolves the file set once, reads each file once, and runs the style scan and
the extern symbol check on it in a thread pool. External steps run afterwards,
one file at a time. All findings are merged into a single sorted report.
"""

import logging
import sys
from pathlib import Path

from stylecheck.lint.args_parser import parse_lint_args
from stylecheck.lint.config import StyleCheckConfig, load_config
from stylecheck.lint.external_steps import run_external_steps
from stylecheck.lint_cpp.consistency_checker import ErrorCodesChecker
from stylecheck.lint_cpp.report import LintReport
from stylecheck.lint_cpp.result import STYLE_CATEGORIES
from stylecheck.lint_cpp.style_checker import StyleChecker
from stylecheck.util.check_files import (
    FileContentChecker,
    MultiCheckerFileProcessor,
    collect_files_to_check,
)
from stylecheck.util.color_output import print_red, print_yellow
from stylecheck.util.exceptions import ConfigurationError
from stylecheck.util.global_interrupt_handler import (
    INTERRUPTED_EXIT_CODE,
    install_signal_handler,
)
from stylecheck.util.log import configure_logging


logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_EXIT_CODE = 2


def create_checkers(config: StyleCheckConfig) -> list[FileContentChecker]:
    """Create the enabled checker instances. The two checkers share no state."""
    checkers: list[FileContentChecker] = []
    if config.style_enabled():
        checkers.append(
            StyleChecker(
                extensions=config.extensions,
                exclusion_filter=config.exclusion_filter(),
                disabled_categories=config.disabled(),
            )
        )
    if config.run_symbols and config.symbol_kinds:
        checkers.append(
            ErrorCodesChecker(kinds=config.kinds(), extensions=config.extensions)
        )
    return checkers


def collect_files(config: StyleCheckConfig) -> list[str]:
    """Explicit files win; otherwise walk the configured roots."""
    if config.files:
        return sorted({str(Path(file).resolve()) for file in config.files})
    return collect_files_to_check(
        config.root,
        config.roots,
        extensions=config.extensions,
        exclude_pattern=config.exclude_regex(),
    )


def run_checkers(config: StyleCheckConfig) -> LintReport:
    """Run every enabled checker and external step and merge the findings."""
    file_paths = collect_files(config)
    logger.debug("Found %d file(s) to check under %s", len(file_paths), config.root)

    processor = MultiCheckerFileProcessor(max_workers=config.jobs, root=config.root)
    result = processor.process_files_with_checkers(file_paths, create_checkers(config))

    report = LintReport(
        unreadable_files=result.unreadable_files,
        files_checked=result.files_checked,
    )
    report.add_violations(result.violations)

    if config.external_steps:
        style_tags = {category.value for category in STYLE_CATEGORIES}
        flagged = {v.file_path for v in result.violations if v.category in style_tags}
        report.add_violations(
            run_external_steps(
                config.external_steps, file_paths, flagged, root=config.root
            )
        )

    return report


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_lint_args(argv)
    configure_logging(args.verbose)
    install_signal_handler()

    try:
        config = load_config(args)
        report = run_checkers(config)
    except ConfigurationError as e:
        print_red(f"Configuration error: {e.get_summary()}")
        return CONFIGURATION_ERROR_EXIT_CODE
    except KeyboardInterrupt:
        print_yellow("Interrupted, no report produced")
        return INTERRUPTED_EXIT_CODE

    return report.print_report()


if __name__ == "__main__":
    sys.exit(main())
