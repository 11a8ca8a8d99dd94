#!/usr/bin/env python3
"""Tests for extern symbol extraction and the per-file consistency check."""

import unittest

from stylecheck.lint_cpp.consistency_checker import ErrorCodesChecker
from stylecheck.lint_cpp.result import Violation
from stylecheck.lint_cpp.symbol_extractor import (
    CURRENT_METRICS,
    ERROR_CODES,
    PROFILE_EVENTS,
    extract,
)
from stylecheck.util.check_files import FileContent


def _make(content: str, path: str = "src/Functions/f.cpp") -> FileContent:
    return FileContent.from_text(path, content)


def _check(content: str, path: str = "src/Functions/f.cpp", checker: ErrorCodesChecker | None = None) -> list[Violation]:
    checker = checker or ErrorCodesChecker()
    return checker.check_file_content(_make(content, path))


class TestSymbolExtractor(unittest.TestCase):
    def test_declarations_and_usages_keep_every_occurrence(self):
        content = (
            "namespace ErrorCodes\n"
            "{\n"
            "    extern const int BAD_ARGUMENTS;\n"
            "    extern const int BAD_ARGUMENTS;\n"
            "}\n"
            "throw Exception(ErrorCodes::BAD_ARGUMENTS, ErrorCodes::LOGICAL_ERROR);\n"
            "throw Exception(ErrorCodes::BAD_ARGUMENTS);\n"
        )
        symbols = extract(_make(content))
        self.assertEqual(
            [(d.name, d.line_number) for d in symbols.declarations],
            [("BAD_ARGUMENTS", 3), ("BAD_ARGUMENTS", 4)],
        )
        self.assertEqual(
            [(u.name, u.line_number) for u in symbols.usages],
            [("BAD_ARGUMENTS", 6), ("LOGICAL_ERROR", 6), ("BAD_ARGUMENTS", 7)],
        )

    def test_usage_on_comment_line_is_counted(self):
        symbols = extract(_make("    // ErrorCodes::NOT_IMPLEMENTED\n"))
        self.assertEqual([(u.name, u.line_number) for u in symbols.usages], [("NOT_IMPLEMENTED", 1)])

    def test_partial_uppercase_name_is_not_a_usage(self):
        symbols = extract(_make("auto x = ErrorCodes::getName(code);\n"))
        self.assertEqual(symbols.usages, [])

    def test_qualified_namespace_prefix_is_a_usage(self):
        symbols = extract(_make("throw Exception(DB::ErrorCodes::TOO_LARGE);\n"))
        self.assertEqual([u.name for u in symbols.usages], ["TOO_LARGE"])

    def test_other_kinds_are_extracted_only_when_requested(self):
        content = "extern const Event Query;\nProfileEvents::increment(ProfileEvents::Query);\n"
        self.assertEqual(extract(_make(content)).declarations, [])
        symbols = extract(_make(content), (ERROR_CODES, PROFILE_EVENTS))
        self.assertEqual([d.name for d in symbols.declarations], ["Query"])
        self.assertEqual([u.name for u in symbols.usages], ["increment", "Query"])


class TestErrorCodesChecker(unittest.TestCase):
    def test_declared_but_unused(self):
        violations = _check("extern const int FOO_BAR;\nint x;\n")
        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0].category, "unused-symbol")
        self.assertEqual(violations[0].line_number, 1)
        self.assertIn("ErrorCodes::FOO_BAR", violations[0].message)

    def test_used_but_undefined(self):
        violations = _check("void f()\n{\n    throw Exception(ErrorCodes::BAZ);\n}\n")
        self.assertEqual(len(violations), 1)
        self.assertEqual(violations[0].category, "undefined-symbol")
        self.assertEqual(violations[0].line_number, 3)
        self.assertIn("BAZ", violations[0].message)

    def test_duplicate_declaration_reported_once_per_file(self):
        content = (
            "extern const int QUX;\n"
            "extern const int QUX;\n"
            "extern const int QUX;\n"
            "throw Exception(ErrorCodes::QUX);\n"
        )
        violations = _check(content)
        self.assertEqual(
            [(v.category, v.line_number) for v in violations],
            [("duplicate-symbol", 1)],
        )

    def test_repeated_undefined_usage_reported_once(self):
        violations = _check("ErrorCodes::BAZ;\nErrorCodes::BAZ;\n")
        self.assertEqual(len(violations), 1)

    def test_consistent_file_passes(self):
        content = (
            "namespace ErrorCodes\n"
            "{\n"
            "    extern const int CANNOT_READ;\n"
            "}\n"
            "throw Exception(ErrorCodes::CANNOT_READ, \"...\");\n"
        )
        self.assertEqual(_check(content), [])

    def test_usage_in_comment_keeps_declaration_used(self):
        self.assertEqual(_check("extern const int FOO;\n// may throw ErrorCodes::FOO\n"), [])

    def test_declarations_are_not_shared_between_files(self):
        checker = ErrorCodesChecker()
        header = _check("extern const int SHARED;\n", path="src/a.h", checker=checker)
        source = _check("ErrorCodes::SHARED;\n", path="src/a.cpp", checker=checker)
        self.assertEqual([v.category for v in header], ["unused-symbol"])
        self.assertEqual([v.category for v in source], ["undefined-symbol"])

    def test_profile_events_ignored_members_and_perf_exemption(self):
        checker = ErrorCodesChecker(kinds=(PROFILE_EVENTS,))
        content = (
            "extern const Event PerfCPUCycles;\n"
            "extern const Event SelectQuery;\n"
            "ProfileEvents::increment(ProfileEvents::SelectQuery);\n"
        )
        self.assertEqual(_check(content, checker=checker), [])

    def test_current_metrics_undefined(self):
        checker = ErrorCodesChecker(kinds=(CURRENT_METRICS,))
        violations = _check(
            "CurrentMetrics::Increment metric{CurrentMetrics::Read};\n", checker=checker
        )
        self.assertEqual([v.message for v in violations], [
            "CurrentMetrics::Read is used but not defined in this file"
        ])

    def test_checker_without_symbols_returns_nothing(self):
        self.assertEqual(_check("int main()\n{\n    return 0;\n}\n"), [])


if __name__ == "__main__":
    unittest.main()
