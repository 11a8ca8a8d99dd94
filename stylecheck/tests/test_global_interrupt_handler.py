#!/usr/bin/env python3
"""Tests for stopping a scan once Ctrl-C has been recorded."""

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from stylecheck.lint.external_steps import ExternalStep, run_external_steps
from stylecheck.lint_cpp.run_all_checkers import main
from stylecheck.lint_cpp.style_checker import StyleChecker
from stylecheck.util.check_files import MultiCheckerFileProcessor
from stylecheck.util.global_interrupt_handler import (
    INTERRUPTED_EXIT_CODE,
    is_interrupted,
    reset_interrupt,
    signal_interrupt,
)


class TestScanInterrupt(unittest.TestCase):
    def setUp(self) -> None:
        reset_interrupt()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.source = self.root / "src" / "a.cpp"
        self.source.parent.mkdir()
        self.source.write_text("if(x){\n", encoding="utf-8")

    def tearDown(self) -> None:
        reset_interrupt()
        self._tmp.cleanup()

    def _interrupt(self) -> None:
        with self.assertLogs("stylecheck.util.global_interrupt_handler", level="WARNING"):
            signal_interrupt()

    def test_flag_is_set_and_cleared(self):
        self.assertFalse(is_interrupted())
        self._interrupt()
        self.assertTrue(is_interrupted())
        reset_interrupt()
        self.assertFalse(is_interrupted())

    def test_sequential_processing_stops(self):
        self._interrupt()
        processor = MultiCheckerFileProcessor(max_workers=1, root=self.root)
        with self.assertRaises(KeyboardInterrupt):
            processor.process_files_with_checkers([str(self.source)], [StyleChecker()])

    def test_external_steps_stop(self):
        self._interrupt()
        step = ExternalStep(name="never-run", command=["definitely-not-an-installed-tool-xyz"])
        with self.assertRaises(KeyboardInterrupt):
            run_external_steps([step], [str(self.source)], root=self.root)

    def test_main_exits_with_interrupted_status(self):
        self._interrupt()
        stream = io.StringIO()
        with contextlib.redirect_stdout(stream):
            code = main(["--root", str(self.root), "--jobs", "1"])
        self.assertEqual(code, INTERRUPTED_EXIT_CODE)
        self.assertIn("Interrupted", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
