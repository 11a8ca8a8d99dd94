"""Configuration for a stylecheck run.

Values come from, lowest to highest priority: built-in defaults, the
``[tool.stylecheck]`` table of ``<root>/pyproject.toml``, and command-line
flags. Everything is validated before any file is read.
"""

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from typeguard import typechecked

from stylecheck.lint.args_parser import LintArgs
from stylecheck.lint.external_steps import ExternalStep
from stylecheck.lint_cpp.exclusion_filter import (
    DEFAULT_EXCLUSION_PATTERNS,
    ExclusionFilter,
    compile_shapes,
)
from stylecheck.lint_cpp.result import STYLE_CATEGORIES, ViolationCategory
from stylecheck.lint_cpp.symbol_extractor import BUILTIN_SYMBOL_KINDS, SymbolKind
from stylecheck.util.check_files import DEFAULT_EXTENSIONS
from stylecheck.util.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_ROOTS = ["src", "base", "programs", "utils"]

# Vendored, build output and generated code
DEFAULT_EXCLUDE_PATH_PATTERN = (
    r"(^|/)(build[^/]*|contrib|third_party|vendor|generated|\.git)/"
)

DEFAULT_SYMBOL_KINDS = ["ErrorCodes"]

PYPROJECT_TABLE = ("tool", "stylecheck")


@typechecked
@dataclass
class StyleCheckConfig:
    """
    Settings for one run.

    Attributes:
        root: Project root; roots and the exclusion regex are relative to it
        roots: Subtrees to scan
        roots_explicit: Roots came from the user (missing ones are an error)
        exclude_path_pattern: Regex searched in root-relative posix paths
        extensions: Source file extensions
        exclusion_patterns: Named exclusion shapes for the style filter
        disabled_categories: Category tags never reported
        symbol_kinds: Namespaces checked for extern symbol consistency
        jobs: Worker threads (None = CPU count)
        run_style: Run the heuristic style scan
        run_symbols: Run the symbol consistency check
        external_steps: External tools run after the scan
        files: Explicit files (bypasses directory scanning)
    """

    root: Path
    roots: list[str] = field(default_factory=lambda: list(DEFAULT_ROOTS))
    roots_explicit: bool = False
    exclude_path_pattern: str = DEFAULT_EXCLUDE_PATH_PATTERN
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclusion_patterns: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_EXCLUSION_PATTERNS)
    )
    disabled_categories: list[str] = field(default_factory=lambda: list[str]())
    symbol_kinds: list[str] = field(default_factory=lambda: list(DEFAULT_SYMBOL_KINDS))
    jobs: Optional[int] = None
    run_style: bool = True
    run_symbols: bool = True
    external_steps: list[ExternalStep] = field(
        default_factory=lambda: list[ExternalStep]()
    )
    files: list[str] = field(default_factory=lambda: list[str]())

    def validate(self) -> None:
        """Collect every problem and raise once.

        Raises:
            ConfigurationError: if any setting is unusable
        """
        _check_value_types(self)
        problems: list[str] = []

        if not self.root.is_dir():
            problems.append(f"root directory does not exist: {self.root}")
        elif self.roots_explicit and not self.files:
            for directory in self.roots:
                if not (self.root / directory).is_dir():
                    problems.append(f"root does not exist: {self.root / directory}")

        for file in self.files:
            if not Path(file).is_file():
                problems.append(f"file not found: {file}")

        try:
            re.compile(self.exclude_path_pattern)
        except re.error as e:
            problems.append(f"invalid exclude_path_pattern {self.exclude_path_pattern!r}: {e}")

        for name, pattern in self.exclusion_patterns.items():
            try:
                re.compile(pattern)
            except re.error as e:
                problems.append(f"invalid exclusion pattern {name} {pattern!r}: {e}")

        for extension in self.extensions:
            if not extension.startswith("."):
                problems.append(f"extension must start with '.': {extension}")

        known_tags = {category.value for category in ViolationCategory}
        for tag in self.disabled_categories:
            if tag not in known_tags:
                problems.append(f"unknown category: {tag}")

        for kind in self.symbol_kinds:
            if kind not in BUILTIN_SYMBOL_KINDS:
                known = ", ".join(sorted(BUILTIN_SYMBOL_KINDS))
                problems.append(f"unknown symbol kind: {kind} (known: {known})")

        if self.jobs is not None and self.jobs < 1:
            problems.append(f"jobs must be at least 1, got {self.jobs}")

        for step in self.external_steps:
            if not step.command:
                problems.append(f"external step {step.name} has an empty command")
            elif not step.executable_available():
                problems.append(
                    f"external step {step.name}: executable not found: {step.command[0]}"
                )

        if problems:
            raise ConfigurationError("Invalid configuration", problems)

    def exclude_regex(self) -> re.Pattern[str]:
        return re.compile(self.exclude_path_pattern)

    def exclusion_filter(self) -> ExclusionFilter:
        return ExclusionFilter(compile_shapes(self.exclusion_patterns))

    def disabled(self) -> frozenset[ViolationCategory]:
        return frozenset(ViolationCategory.from_tag(tag) for tag in self.disabled_categories)

    def kinds(self) -> list[SymbolKind]:
        return [BUILTIN_SYMBOL_KINDS[name] for name in self.symbol_kinds]

    def style_enabled(self) -> bool:
        return self.run_style and not STYLE_CATEGORIES <= self.disabled()


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _check_value_types(config: StyleCheckConfig) -> None:
    """Reject values of the wrong shape (typically from pyproject.toml)."""
    problems: list[str] = []
    for name in ("roots", "extensions", "disabled_categories", "symbol_kinds", "files"):
        if not _is_str_list(getattr(config, name)):
            problems.append(f"{name} must be a list of strings")
    if not isinstance(config.exclude_path_pattern, str):
        problems.append("exclude_path_pattern must be a string")
    patterns = config.exclusion_patterns
    if not isinstance(patterns, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in patterns.items()
    ):
        problems.append("exclusion_patterns must map names to regex strings")
    if config.jobs is not None and (
        not isinstance(config.jobs, int) or isinstance(config.jobs, bool)
    ):
        problems.append("jobs must be an integer")
    for step in config.external_steps:
        if not _is_str_list(step.command) or not _is_str_list(step.extensions):
            problems.append(
                f"external step {step.name}: command and extensions must be lists of strings"
            )
        if not isinstance(step.only_flagged, bool):
            problems.append(f"external step {step.name}: only_flagged must be a boolean")
        if isinstance(step.timeout, bool) or not isinstance(step.timeout, (int, float)):
            problems.append(f"external step {step.name}: timeout must be a number of seconds")
        elif step.timeout <= 0:
            problems.append(f"external step {step.name}: timeout must be positive")
    if problems:
        raise ConfigurationError("Invalid configuration", problems)


def _read_pyproject_table(root: Path) -> dict[str, Any]:
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Cannot parse {pyproject}: {e}") from e

    table: Any = data
    for key in PYPROJECT_TABLE:
        if not isinstance(table, dict):
            return {}
        table = table.get(key, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[tool.stylecheck] in {pyproject} must be a table")
    logger.debug("Loaded [tool.stylecheck] from %s", pyproject)
    return table


def _external_steps_from_table(entries: Any) -> list[ExternalStep]:
    if not isinstance(entries, list):
        raise ConfigurationError("external_steps must be an array of tables")
    steps: list[ExternalStep] = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "command" not in entry:
            raise ConfigurationError(
                "each external step needs at least 'name' and 'command'"
            )
        try:
            steps.append(ExternalStep(**entry))
        except TypeError as e:
            raise ConfigurationError(f"invalid external step {entry.get('name')}: {e}") from e
    return steps


_FILE_KEYS = {
    "roots",
    "exclude_path_pattern",
    "extensions",
    "exclusion_patterns",
    "disabled_categories",
    "symbol_kinds",
    "jobs",
    "external_steps",
}


def config_from_table(root: Path, table: dict[str, Any]) -> StyleCheckConfig:
    """Build a config from a ``[tool.stylecheck]`` table.

    Raises:
        ConfigurationError: on unknown keys or values of the wrong type
    """
    unknown = sorted(set(table) - _FILE_KEYS)
    if unknown:
        raise ConfigurationError("Unknown [tool.stylecheck] keys", unknown)

    values = {key: value for key, value in table.items() if key != "external_steps"}
    if "external_steps" in table:
        values["external_steps"] = _external_steps_from_table(table["external_steps"])
    if "roots" in values:
        values["roots_explicit"] = True
    if "exclusion_patterns" in values and isinstance(values["exclusion_patterns"], dict):
        merged = dict(DEFAULT_EXCLUSION_PATTERNS)
        merged.update(values["exclusion_patterns"])
        values["exclusion_patterns"] = merged

    try:
        return StyleCheckConfig(root=root, **values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [tool.stylecheck] value: {e}") from e


def load_config(args: LintArgs) -> StyleCheckConfig:
    """Resolve defaults, pyproject settings and flags into a validated config.

    Raises:
        ConfigurationError: if the resulting configuration is unusable
    """
    root = Path(args.root).resolve()
    table = _read_pyproject_table(root) if root.is_dir() else {}
    config = config_from_table(root, table)

    if args.roots is not None:
        config.roots = list(args.roots)
        config.roots_explicit = True
    if args.exclude is not None:
        config.exclude_path_pattern = args.exclude
    if args.extensions is not None:
        config.extensions = list(args.extensions)
    if args.symbol_kinds is not None:
        config.symbol_kinds = list(args.symbol_kinds)
    if args.jobs is not None:
        config.jobs = args.jobs
    config.disabled_categories = sorted(set(config.disabled_categories) | set(args.disable))
    config.run_style = not args.no_style
    config.run_symbols = not args.no_symbols
    if args.no_external:
        config.external_steps = []
    config.files = list(args.files)

    config.validate()
    return config
