#!/usr/bin/env python3
"""Merging and printing of findings from all checkers."""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from stylecheck.lint_cpp.result import Violation
from stylecheck.util.color_output import ColorOutput


@dataclass
class LintReport:
    """All findings of one run.

    The exit code depends only on violations; unreadable files are reported
    as warnings and never fail the run by themselves.
    """

    violations: list[Violation] = field(default_factory=lambda: list[Violation]())
    unreadable_files: list[str] = field(default_factory=lambda: list[str]())
    files_checked: int = 0

    def add_violations(self, violations: Iterable[Violation]) -> None:
        self.violations.extend(violations)

    def sorted_violations(self) -> list[Violation]:
        """Violations ordered by path, then line, with duplicates removed."""
        return sorted(set(self.violations))

    def has_violations(self) -> bool:
        return len(self.sorted_violations()) > 0

    def exit_code(self) -> int:
        return 1 if self.has_violations() else 0

    def count_by_category(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for violation in self.sorted_violations():
            counts[violation.category] = counts.get(violation.category, 0) + 1
        return dict(sorted(counts.items()))

    def format_lines(self) -> list[str]:
        return [violation.format_for_ci() for violation in self.sorted_violations()]

    def print_report(self, output: Optional[ColorOutput] = None) -> int:
        """Print every violation and a summary. Returns exit code (0 = success, 1 = failures)."""
        if output is None:
            output = ColorOutput()

        for file_path in sorted(self.unreadable_files):
            output.print_yellow(f"WARNING: could not read {file_path}, skipped")

        violations = self.sorted_violations()
        for violation in violations:
            output.print_violation(
                violation.location(), violation.category, violation.message
            )

        if violations:
            file_count = len({v.file_path for v in violations})
            summary = ", ".join(
                f"{category}: {count}"
                for category, count in self.count_by_category().items()
            )
            output.print_red(
                f"❌ Found {len(violations)} violation(s) in {file_count} file(s) ({summary})"
            )
        else:
            output.print_green(
                f"✅ All style checks passed ({self.files_checked} file(s) checked)"
            )

        return self.exit_code()
