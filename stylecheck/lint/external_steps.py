"""External tools composed into the report (auto-formatter checks, validators...).

Each step runs once per matching file, sequentially, after the core scan. A
non-zero exit status becomes one or more ``external`` violations.
"""

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, Optional, Sequence

from typeguard import typechecked

from stylecheck.lint_cpp.result import Violation, ViolationCategory
from stylecheck.util.check_files import display_path_for
from stylecheck.util.global_interrupt_handler import is_interrupted


logger = logging.getLogger(__name__)

# "path:line: message" or "path:line:column: message" as printed by compilers and linters
OUTPUT_LOCATION_PATTERN = re.compile(
    r"^(?P<path>[^:\s][^:]*):(?P<line>\d+):(?:\d+:)?\s*(?P<message>.*)$"
)


@typechecked
@dataclass
class ExternalStep:
    """
    One external tool invocation.

    Attributes:
        name: Name shown in findings (e.g., "clang-format")
        command: Command line; the file path is appended as the last argument
        extensions: File extensions the step applies to (empty = every file)
        only_flagged: Run only on files that already have style violations
        timeout: Timeout in seconds per file
    """

    name: str
    command: list[str]
    extensions: list[str] = field(default_factory=lambda: list[str]())
    only_flagged: bool = False
    timeout: float = 300.0

    def applies_to(self, file_path: str) -> bool:
        if not self.extensions:
            return True
        return file_path.endswith(tuple(self.extensions))

    def executable_available(self) -> bool:
        return bool(self.command) and shutil.which(self.command[0]) is not None


def _parse_output(
    step: ExternalStep, output: str, file_path: str, display_path: str
) -> list[Violation]:
    """Turn ``path:line: message`` lines about this file into violations."""
    violations: list[Violation] = []
    target = Path(file_path).resolve()
    for line in output.splitlines():
        match = OUTPUT_LOCATION_PATTERN.match(line.strip())
        if match is None:
            continue
        reported = Path(match.group("path"))
        if reported.resolve() != target and not display_path.endswith(
            reported.as_posix()
        ):
            continue
        violations.append(
            Violation(
                file_path=display_path,
                line_number=int(match.group("line")),
                category=ViolationCategory.EXTERNAL.value,
                message=f"[{step.name}] {match.group('message')}",
            )
        )
    return violations


def run_external_step(
    step: ExternalStep, file_path: str, display_path: str
) -> list[Violation]:
    """Run one step on one file. Returns no violations when the tool exits with 0."""
    logger.debug("Running %s on %s", step.name, file_path)
    try:
        result = subprocess.run(
            step.command + [file_path],
            capture_output=True,
            text=True,
            timeout=step.timeout,
        )
    except subprocess.TimeoutExpired:
        return [
            Violation(
                file_path=display_path,
                line_number=0,
                category=ViolationCategory.EXTERNAL.value,
                message=f"[{step.name}] timed out after {step.timeout:g}s",
            )
        ]

    if result.returncode == 0:
        return []

    output = (result.stdout or "") + "\n" + (result.stderr or "")
    violations = _parse_output(step, output, file_path, display_path)
    if violations:
        return violations

    first_line = next((line.strip() for line in output.splitlines() if line.strip()), "")
    message = f"exited with status {result.returncode}"
    if first_line:
        message += f": {first_line}"
    return [
        Violation(
            file_path=display_path,
            line_number=0,
            category=ViolationCategory.EXTERNAL.value,
            message=f"[{step.name}] {message}",
        )
    ]


def run_external_steps(
    steps: Sequence[ExternalStep],
    file_paths: Sequence[str],
    flagged_files: AbstractSet[str] = frozenset(),
    root: Optional[Path] = None,
) -> list[Violation]:
    """Run every step over its files, one after another.

    Args:
        steps: Steps in the order they should run
        file_paths: Candidate files (already resolved by the scan)
        flagged_files: Display paths of files that have style violations
        root: Project root used to build display paths

    Returns:
        All violations reported by the steps
    """
    violations: list[Violation] = []
    for step in steps:
        for file_path in file_paths:
            if is_interrupted():
                raise KeyboardInterrupt()
            if not step.applies_to(file_path):
                continue
            display_path = display_path_for(file_path, root)
            if step.only_flagged and display_path not in flagged_files:
                continue
            violations.extend(run_external_step(step, file_path, display_path))
    return violations
