#!/usr/bin/env python3
"""
Heuristic per-line style classification.

Each category is a small predicate over a LineRecord and its LineContext that
returns the category it detects or None. The predicates are pattern based and
deliberately over-eager; ``exclusion_filter`` removes the matches that are
explained by comments, raw string tails and embedded shell code.

Example (two categories on one line):
    if(x){          -> control-paren, brace-placement

Correct:
    if (x)
    {
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from stylecheck.lint_cpp.result import LineRecord, ViolationCategory


# K&R style braces: a header keyword or a closing parenthesis followed by '{' at end of line
BRACE_PLACEMENT_PATTERN = re.compile(
    r"(\b(class|struct|namespace|enum|if|for|while|else|throw|switch)\b.*"
    r"|\)(\s*const)?(\s*override)?\s*)\{$"
)
TRAILING_WHITESPACE_PATTERN = re.compile(r"\s$")
# 1-3 leading spaces; a leading '*' continues a block comment and is allowed
INDENTATION_PATTERN = re.compile(r"^ {1,3}[^* ]\S")
CONTROL_PAREN_PATTERN = re.compile(
    r"^\s*(\}\s*)?(if|else if|for|while|catch|switch)(\s+constexpr)?\("
)
PADDED_PARENS_PATTERN = re.compile(r"\( [^\s\\]|\S \)")
NAMESPACE_COMMENT_PATTERN = re.compile(r"\}\s*//+\s*namespace")

# Two or more spaces between non-space characters, except before a trailing "//" comment
DOUBLE_WHITESPACE_PATTERN = re.compile(r"(?<=\S)( {2,})(?!//)(?=\S)")
# Character pair in a neighbour line that shows the run is column alignment
ALIGNMENT_PATTERN = re.compile(r"[ -][^ ]")
# Tables of numbers like "{ 10,  -1,   2, 300 }" are aligned on purpose
NUMBER_TABLE_PATTERN = re.compile(r"(-?\d+\w*,\s+){3,}")

# A run of empty lines longer than this is reported
MAX_BLANK_RUN = 2


@dataclass(frozen=True)
class LineContext:
    """What a predicate may know beyond the line itself.

    Attributes:
        previous_line: Text of the line above (None on the first line or if undecodable)
        next_line: Text of the line below (None on the last line or if undecodable)
        blank_run: Consecutive empty lines ending at this line (0 if this line is not empty)
    """

    previous_line: Optional[str] = None
    next_line: Optional[str] = None
    blank_run: int = 0


LinePredicate = Callable[[LineRecord, LineContext], Optional[ViolationCategory]]


class BlankRunCounter:
    """Running count of consecutive empty lines within one file's line stream.

    Create one per file; the count must never carry over to the next file.
    """

    def __init__(self) -> None:
        self.count = 0

    def feed(self, line: Optional[str]) -> int:
        """Advance over one line and return the current run length."""
        if line == "":
            self.count += 1
        else:
            self.count = 0
        return self.count


def brace_placement(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if BRACE_PLACEMENT_PATTERN.search(record.text):
        return ViolationCategory.BRACE_PLACEMENT
    return None


def trailing_whitespace(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if TRAILING_WHITESPACE_PATTERN.search(record.text):
        return ViolationCategory.TRAILING_WHITESPACE
    return None


def indentation(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if INDENTATION_PATTERN.search(record.text):
        return ViolationCategory.INDENTATION
    return None


def tab(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if "\t" in record.text:
        return ViolationCategory.TAB
    return None


def control_paren(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if CONTROL_PAREN_PATTERN.search(record.text):
        return ViolationCategory.CONTROL_PAREN
    return None


def padded_parens(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if PADDED_PARENS_PATTERN.search(record.text):
        return ViolationCategory.PADDED_PARENS
    return None


def namespace_comment(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if NAMESPACE_COMMENT_PATTERN.search(record.text):
        return ViolationCategory.NAMESPACE_COMMENT
    return None


def _is_aligned_with(neighbour: str, column: int) -> bool:
    return ALIGNMENT_PATTERN.fullmatch(neighbour[column : column + 2]) is not None


def double_whitespace(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    # Alignment can only be judged with a line on both sides
    if context.previous_line is None or context.next_line is None:
        return None

    if NUMBER_TABLE_PATTERN.search(record.text):
        return None

    for match in DOUBLE_WHITESPACE_PATTERN.finditer(record.text):
        column = match.end(1) - 1
        if not (
            _is_aligned_with(context.previous_line, column)
            or _is_aligned_with(context.next_line, column)
        ):
            return ViolationCategory.DOUBLE_WHITESPACE
    return None


def blank_run(record: LineRecord, context: LineContext) -> Optional[ViolationCategory]:
    if context.blank_run == MAX_BLANK_RUN + 1:
        return ViolationCategory.BLANK_RUN
    return None


# Evaluation order; every predicate runs, so categories are independent
PREDICATES: tuple[LinePredicate, ...] = (
    brace_placement,
    trailing_whitespace,
    indentation,
    tab,
    control_paren,
    padded_parens,
    namespace_comment,
    double_whitespace,
    blank_run,
)


def classify(
    record: LineRecord,
    context: Optional[LineContext] = None,
    predicates: tuple[LinePredicate, ...] = PREDICATES,
) -> set[ViolationCategory]:
    """Return every category whose predicate matches this line."""
    if context is None:
        context = LineContext()

    categories: set[ViolationCategory] = set()
    for predicate in predicates:
        category = predicate(record, context)
        if category is not None:
            categories.add(category)
    return categories
