# pyright: reportUnknownMemberType=false
from dataclasses import dataclass
from enum import Enum


class ViolationCategory(Enum):
    """Kinds of findings; the value is the tag printed in reports."""

    BRACE_PLACEMENT = "brace-placement"
    TRAILING_WHITESPACE = "trailing-whitespace"
    INDENTATION = "indentation"
    TAB = "tab"
    CONTROL_PAREN = "control-paren"
    PADDED_PARENS = "padded-parens"
    NAMESPACE_COMMENT = "namespace-comment"
    DOUBLE_WHITESPACE = "double-whitespace"
    BLANK_RUN = "blank-run"
    UNUSED_SYMBOL = "unused-symbol"
    UNDEFINED_SYMBOL = "undefined-symbol"
    DUPLICATE_SYMBOL = "duplicate-symbol"
    EXTERNAL = "external"

    @classmethod
    def from_tag(cls, tag: str) -> "ViolationCategory":
        for category in cls:
            if category.value == tag:
                return category
        raise ValueError(f"Unknown violation category: {tag}")


STYLE_CATEGORIES = frozenset(
    {
        ViolationCategory.BRACE_PLACEMENT,
        ViolationCategory.TRAILING_WHITESPACE,
        ViolationCategory.INDENTATION,
        ViolationCategory.TAB,
        ViolationCategory.CONTROL_PAREN,
        ViolationCategory.PADDED_PARENS,
        ViolationCategory.NAMESPACE_COMMENT,
        ViolationCategory.DOUBLE_WHITESPACE,
        ViolationCategory.BLANK_RUN,
    }
)

CATEGORY_MESSAGES: dict[ViolationCategory, str] = {
    ViolationCategory.BRACE_PLACEMENT: "opening brace should be on its own line",
    ViolationCategory.TRAILING_WHITESPACE: "trailing whitespace",
    ViolationCategory.INDENTATION: "indentation is not a multiple of 4 spaces",
    ViolationCategory.TAB: "tab character",
    ViolationCategory.CONTROL_PAREN: "missing space before parenthesis after control keyword",
    ViolationCategory.PADDED_PARENS: "whitespace inside parentheses",
    ViolationCategory.NAMESPACE_COMMENT: "'// namespace' comments after closing braces are not needed",
    ViolationCategory.DOUBLE_WHITESPACE: "double whitespace",
    ViolationCategory.BLANK_RUN: "more than two consecutive empty lines",
}


@dataclass(frozen=True)
class LineRecord:
    """One line of a source file; ``number`` is 1-based."""

    path: str
    number: int
    text: str


@dataclass(frozen=True, order=True)
class Violation:
    """A single finding. Field order is the report sort order."""

    file_path: str
    line_number: int  # 0 for file-level findings from external steps
    category: str
    message: str

    def location(self) -> str:
        if self.line_number:
            return f"{self.file_path}:{self.line_number}"
        return self.file_path

    def format_for_ci(self) -> str:
        """Format as ``<path>:<line>: <category>: <message>``."""
        return f"{self.location()}: {self.category}: {self.message}"
