#!/usr/bin/env python3
"""Checker that runs the line classifier and exclusion filter over whole files."""

from typing import AbstractSet, Optional, Sequence

from stylecheck.lint_cpp.exclusion_filter import ExclusionFilter
from stylecheck.lint_cpp.line_classifier import (
    BlankRunCounter,
    LineContext,
    classify,
)
from stylecheck.lint_cpp.result import (
    CATEGORY_MESSAGES,
    LineRecord,
    Violation,
    ViolationCategory,
)
from stylecheck.util.check_files import (
    DEFAULT_EXTENSIONS,
    FileContent,
    FileContentChecker,
)


class StyleChecker(FileContentChecker):
    """Checker for likely formatting violations (brace style, whitespace, tabs...)."""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        exclusion_filter: Optional[ExclusionFilter] = None,
        disabled_categories: AbstractSet[ViolationCategory] = frozenset(),
    ) -> None:
        self.extensions = tuple(extensions)
        self.exclusion_filter = exclusion_filter or ExclusionFilter()
        self.disabled_categories = frozenset(disabled_categories)

    def should_process_file(self, file_path: str) -> bool:
        """Check C++ file extensions."""
        return file_path.endswith(self.extensions)

    def check_file_content(self, file_content: FileContent) -> list[Violation]:
        """Classify every decodable line of one file."""
        violations: list[Violation] = []
        blank_runs = BlankRunCounter()
        lines = file_content.lines

        for index, text in enumerate(lines):
            run_length = blank_runs.feed(text)
            if text is None:
                continue

            record = LineRecord(path=file_content.path, number=index + 1, text=text)
            context = LineContext(
                previous_line=lines[index - 1] if index > 0 else None,
                next_line=lines[index + 1] if index + 1 < len(lines) else None,
                blank_run=run_length,
            )

            categories = classify(record, context)
            categories = self.exclusion_filter.suppress(text, categories)
            categories -= self.disabled_categories

            for category in sorted(categories, key=lambda c: c.value):
                violations.append(
                    Violation(
                        file_path=record.path,
                        line_number=record.number,
                        category=category.value,
                        message=CATEGORY_MESSAGES[category],
                    )
                )

        return violations
