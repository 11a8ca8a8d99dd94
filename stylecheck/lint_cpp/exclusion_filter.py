"""Second pass that cancels classifier matches explained by known-legitimate shapes."""

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from stylecheck.lint_cpp.result import ViolationCategory


@dataclass(frozen=True)
class ExclusionShape:
    name: str
    pattern: re.Pattern[str]


DEFAULT_EXCLUSION_PATTERNS: dict[str, str] = {
    # '//' anywhere: the line is a comment or ends in one
    "single-line-comment": r"//",
    # " * text" inside a /* ... */ block
    "comment-continuation": r"^\s+\*(\s|/|$)",
    # $((...)) arithmetic in shell snippets embedded in raw strings
    "embedded-shell": r"\$\(\(",
    # closing part of a raw string literal: ... )"
    "raw-string-tail": r" \)\"",
}

# Tabs and '// namespace' comments have no legitimate exception.
# No shape matches an empty line, so blank runs are left out.
FILTERABLE_CATEGORIES = frozenset(
    {
        ViolationCategory.BRACE_PLACEMENT,
        ViolationCategory.TRAILING_WHITESPACE,
        ViolationCategory.INDENTATION,
        ViolationCategory.CONTROL_PAREN,
        ViolationCategory.PADDED_PARENS,
        ViolationCategory.DOUBLE_WHITESPACE,
    }
)


def compile_shapes(patterns: dict[str, str]) -> tuple[ExclusionShape, ...]:
    """Compile named exclusion regexes.

    Raises:
        re.error: if a pattern is not a valid regex
    """
    return tuple(
        ExclusionShape(name=name, pattern=re.compile(pattern))
        for name, pattern in patterns.items()
    )


class ExclusionFilter:
    """Drops filterable categories from lines that match any exclusion shape."""

    def __init__(self, shapes: Sequence[ExclusionShape] | None = None) -> None:
        if shapes is None:
            shapes = compile_shapes(DEFAULT_EXCLUSION_PATTERNS)
        self.shapes = tuple(shapes)

    def matching_shape(self, line: str) -> ExclusionShape | None:
        for shape in self.shapes:
            if shape.pattern.search(line):
                return shape
        return None

    def suppress(
        self, line: str, categories: Iterable[ViolationCategory]
    ) -> set[ViolationCategory]:
        """Return the categories that survive the exclusion shapes."""
        categories = set(categories)
        if not categories & FILTERABLE_CATEGORIES:
            return categories
        if self.matching_shape(line) is None:
            return categories
        return categories - FILTERABLE_CATEGORIES
