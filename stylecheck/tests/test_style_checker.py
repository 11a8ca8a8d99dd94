#!/usr/bin/env python3
"""Tests for the whole-file style scan."""

import unittest

from stylecheck.lint_cpp.result import Violation, ViolationCategory
from stylecheck.lint_cpp.style_checker import StyleChecker
from stylecheck.util.check_files import FileContent, decode_lines


def _check(content: str, path: str = "src/test.cpp", checker: StyleChecker | None = None) -> list[Violation]:
    checker = checker or StyleChecker()
    return checker.check_file_content(FileContent.from_text(path, content))


def _tags(violations: list[Violation]) -> list[tuple[int, str]]:
    return [(v.line_number, v.category) for v in violations]


class TestStyleChecker(unittest.TestCase):
    def test_clean_allman_code_passes(self):
        content = (
            "namespace DB\n"
            "{\n"
            "\n"
            "int f(int x)\n"
            "{\n"
            "    if (x > 0)\n"
            "    {\n"
            "        return x;\n"
            "    }\n"
            "    return 0;\n"
            "}\n"
            "\n"
            "}\n"
        )
        self.assertEqual(_check(content), [])

    def test_if_without_space_and_brace_gives_two_violations(self):
        violations = _check("if(x){\n")
        self.assertEqual(
            _tags(violations), [(1, "brace-placement"), (1, "control-paren")]
        )

    def test_four_blank_lines_report_once(self):
        violations = _check("int a;\n\n\n\n\nint b;\n")
        self.assertEqual(_tags(violations), [(4, "blank-run")])

    def test_two_blank_lines_pass(self):
        self.assertEqual(_check("int a;\n\n\nint b;\n"), [])

    def test_each_blank_run_reports_once(self):
        violations = _check("a;\n\n\n\nb;\n\n\n\nc;\n")
        self.assertEqual(_tags(violations), [(4, "blank-run"), (8, "blank-run")])

    def test_blank_run_does_not_leak_between_files(self):
        checker = StyleChecker()
        first = _check("a;\n\n\n", path="a.cpp", checker=checker)
        second = _check("\nb;\n", path="b.cpp", checker=checker)
        self.assertEqual(first, [])
        self.assertEqual(second, [])

    def test_tab_in_comment_is_reported(self):
        violations = _check("//\tcomment\n")
        self.assertEqual(_tags(violations), [(1, "tab")])

    def test_comment_lines_suppress_filterable_categories(self):
        self.assertEqual(_check("// if(x){ \n   // foo( bar )\n"), [])

    def test_double_whitespace_in_comment_is_suppressed(self):
        self.assertEqual(_check("{\n// see f(a,  b) for details\n}\n"), [])

    def test_double_whitespace_in_code_is_reported(self):
        for content in ("{\nint x =  5;\n}\n", "{\nf(a,    b);\n}\n"):
            with self.subTest(content=content):
                self.assertEqual(_tags(_check(content)), [(2, "double-whitespace")])

    def test_undecodable_line_is_skipped(self):
        lines = decode_lines(b"int x;\n\xff\xfe\t{\nint y; \n")
        self.assertIsNone(lines[1])
        violations = StyleChecker().check_file_content(
            FileContent(path="bad.cpp", lines=lines)
        )
        self.assertEqual(_tags(violations), [(3, "trailing-whitespace")])

    def test_disabled_categories_are_not_reported(self):
        checker = StyleChecker(disabled_categories={ViolationCategory.CONTROL_PAREN})
        self.assertEqual(_tags(_check("if(x){\n", checker=checker)), [(1, "brace-placement")])

    def test_violation_carries_path_and_message(self):
        (violation,) = _check("int x; \n", path="src/Common/x.cpp")
        self.assertEqual(violation.file_path, "src/Common/x.cpp")
        self.assertEqual(violation.message, "trailing whitespace")
        self.assertEqual(
            violation.format_for_ci(),
            "src/Common/x.cpp:1: trailing-whitespace: trailing whitespace",
        )

    def test_should_process_file_uses_extensions(self):
        checker = StyleChecker(extensions=[".cpp"])
        self.assertTrue(checker.should_process_file("src/a.cpp"))
        self.assertFalse(checker.should_process_file("src/a.h"))

    def test_scan_is_repeatable(self):
        content = "class A {\n  int x; \n};\n"
        self.assertEqual(_check(content), _check(content))


if __name__ == "__main__":
    unittest.main()
