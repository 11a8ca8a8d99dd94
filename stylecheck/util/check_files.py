# pyright: reportUnknownMemberType=false
import logging
import os
import re
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from stylecheck.lint_cpp.result import Violation
from stylecheck.util.cpu_count import cpu_count
from stylecheck.util.global_interrupt_handler import is_interrupted, notify_main_thread


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".h", ".hpp", ".cpp", ".cc")


@dataclass
class FileContent:
    """Container for file content and metadata.

    ``lines`` holds one entry per physical line. Lines that are not valid
    UTF-8 are stored as None so that line numbers of the following lines
    stay correct.
    """

    path: str
    lines: List[Optional[str]]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @classmethod
    def from_text(cls, path: str, text: str) -> "FileContent":
        """Build a FileContent from already-decoded text (mostly for tests)."""
        return cls(path=path, lines=split_lines(text))


def split_lines(text: str) -> List[Optional[str]]:
    """Split on newlines only; a trailing newline does not start a new line."""
    if not text:
        return []
    lines: List[Optional[str]] = list(text.split("\n"))
    if text.endswith("\n"):
        lines.pop()
    return lines


def decode_lines(raw: bytes) -> List[Optional[str]]:
    """Decode raw file bytes line by line, keeping None for undecodable lines."""
    if not raw:
        return []
    raw_lines = raw.split(b"\n")
    if raw.endswith(b"\n"):
        raw_lines.pop()

    lines: List[Optional[str]] = []
    for number, raw_line in enumerate(raw_lines, 1):
        try:
            lines.append(raw_line.decode("utf-8"))
        except UnicodeDecodeError:
            logger.debug("Skipping undecodable line %d", number)
            lines.append(None)
    return lines


def read_source_file(file_path: str, display_path: str) -> FileContent:
    """Read a file once as an immutable snapshot.

    Raises:
        OSError: if the file cannot be opened or read
    """
    with open(file_path, "rb") as f:
        raw = f.read()
    return FileContent(path=display_path, lines=decode_lines(raw))


def display_path_for(file_path: str, root: Optional[Path]) -> str:
    """Root-relative posix path used in reports; falls back to the path as given."""
    if root is not None:
        try:
            return Path(file_path).resolve().relative_to(root.resolve()).as_posix()
        except ValueError:
            pass
    return Path(file_path).as_posix()


class FileContentChecker(ABC):
    """Abstract base class for checking file content."""

    @abstractmethod
    def should_process_file(self, file_path: str) -> bool:
        """Predicate to determine if a file should be processed.

        Args:
            file_path: Path to the file to check

        Returns:
            True if the file should be processed, False otherwise
        """
        pass

    @abstractmethod
    def check_file_content(self, file_content: FileContent) -> List[Violation]:
        """Check the file content and return any violations found.

        Implementations must not keep per-file state on the instance: the
        same checker is called concurrently for different files.

        Args:
            file_content: FileContent object containing path and lines

        Returns:
            List of violations, empty if no issues found
        """
        pass


@dataclass
class ProcessResult:
    """Reduced output of a parallel file pass."""

    violations: List[Violation] = field(default_factory=lambda: list[Violation]())
    unreadable_files: List[str] = field(default_factory=lambda: list[str]())
    files_checked: int = 0


class MultiCheckerFileProcessor:
    """Reads each file once and runs every interested checker on it."""

    def __init__(self, max_workers: Optional[int] = None, root: Optional[Path] = None):
        self.max_workers = max_workers or cpu_count()
        self.root = root

    def process_files_with_checkers(
        self, file_paths: Sequence[str], checkers: Sequence[FileContentChecker]
    ) -> ProcessResult:
        """Process files with multiple checkers.

        Files are independent, so they are fanned out to a thread pool and the
        per-file violation lists are merged after all workers finish.

        Args:
            file_paths: List of file paths to process
            checkers: List of checker instances to run on the files

        Returns:
            ProcessResult with all violations and the files that could not be read
        """
        result = ProcessResult()
        if not file_paths or not checkers:
            return result

        if self.max_workers == 1:
            for file_path in file_paths:
                if is_interrupted():
                    raise KeyboardInterrupt()
                self._merge(result, file_path, self._process_single_file(file_path, checkers))
            return result

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures: list[tuple[str, Future[Optional[List[Violation]]]]] = [
                (file_path, executor.submit(self._process_single_file, file_path, checkers))
                for file_path in file_paths
            ]
            try:
                for file_path, future in futures:
                    self._merge(result, file_path, future.result())
            except KeyboardInterrupt:
                for _, future in futures:
                    future.cancel()
                raise

        return result

    def _merge(
        self, result: ProcessResult, file_path: str, violations: Optional[List[Violation]]
    ) -> None:
        if violations is None:
            result.unreadable_files.append(file_path)
            return
        result.files_checked += 1
        result.violations.extend(violations)

    def _process_single_file(
        self, file_path: str, checkers: Sequence[FileContentChecker]
    ) -> Optional[List[Violation]]:
        """Process a single file; returns None when the file cannot be read."""
        if is_interrupted():
            return []

        interested_checkers = [
            checker for checker in checkers if checker.should_process_file(file_path)
        ]
        if not interested_checkers:
            return []

        try:
            file_content = read_source_file(
                file_path, display_path_for(file_path, self.root)
            )
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", file_path, e)
            return None

        violations: List[Violation] = []
        try:
            for checker in interested_checkers:
                violations.extend(checker.check_file_content(file_content))
        except KeyboardInterrupt:
            notify_main_thread()
            raise
        return violations


def collect_files_to_check(
    root: Path,
    directories: Iterable[str],
    extensions: Optional[Sequence[str]] = None,
    exclude_pattern: Optional[re.Pattern[str]] = None,
) -> List[str]:
    """Collect all files to check from the given directories.

    Args:
        root: Project root; directories and exclusions are relative to it
        directories: Subtrees to walk (missing ones are skipped)
        extensions: File extensions considered source
        exclude_pattern: Regex searched in each root-relative posix path

    Returns:
        Sorted, de-duplicated list of file paths
    """
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS
    suffixes = tuple(extensions)

    files_to_check: set[str] = set()
    for directory in directories:
        start = root / directory
        if not start.is_dir():
            logger.debug("Skipping missing directory %s", start)
            continue
        for dirpath, dirnames, files in os.walk(start):
            dirnames.sort()
            for file in files:
                if not file.endswith(suffixes):
                    continue
                file_path = os.path.join(dirpath, file)
                rel_path = Path(os.path.relpath(file_path, root)).as_posix()
                if exclude_pattern is not None and exclude_pattern.search(rel_path):
                    continue
                files_to_check.add(file_path)

    return sorted(files_to_check)
