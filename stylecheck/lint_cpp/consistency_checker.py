#!/usr/bin/env python3
"""Checker for unused, undefined and duplicate extern error-code declarations.

Resolution is strictly per file: a symbol declared in a header does not count
as declared in the files that include it.
"""

from collections import Counter
from typing import Sequence

from stylecheck.lint_cpp.result import Violation, ViolationCategory
from stylecheck.lint_cpp.symbol_extractor import (
    ERROR_CODES,
    ExtractedSymbols,
    SymbolKind,
    extract,
)
from stylecheck.util.check_files import (
    DEFAULT_EXTENSIONS,
    FileContent,
    FileContentChecker,
)


class ErrorCodesChecker(FileContentChecker):
    """Checker comparing declared and referenced extern symbols within one file."""

    def __init__(
        self,
        kinds: Sequence[SymbolKind] = (ERROR_CODES,),
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.kinds = tuple(kinds)
        self.extensions = tuple(extensions)

    def should_process_file(self, file_path: str) -> bool:
        return file_path.endswith(self.extensions)

    def check_file_content(self, file_content: FileContent) -> list[Violation]:
        symbols = extract(file_content, self.kinds)
        violations: list[Violation] = []
        for kind in self.kinds:
            violations.extend(check_symbols(file_content.path, kind, symbols))
        return violations


def check_symbols(
    file_path: str, kind: SymbolKind, symbols: ExtractedSymbols
) -> list[Violation]:
    """Compare one kind's declarations and usages.

    One violation per symbol name, never per occurrence:
      - unused: declared, never used (reported at the first declaration)
      - undefined: used, never declared (reported at the first usage)
      - duplicate: declared more than once (reported at the first declaration)
    """
    declarations = [d for d in symbols.declarations if d.namespace == kind.namespace]
    usages = [u for u in symbols.usages if u.namespace == kind.namespace]

    declared_counts = Counter(d.name for d in declarations)
    used_counts = Counter(u.name for u in usages)

    first_declaration: dict[str, int] = {}
    for declaration in declarations:
        first_declaration.setdefault(declaration.name, declaration.line_number)
    first_usage: dict[str, int] = {}
    for usage in usages:
        first_usage.setdefault(usage.name, usage.line_number)

    qualified = f"{kind.namespace}::"
    violations: list[Violation] = []

    for name, line_number in first_declaration.items():
        if used_counts[name] == 0 and not kind.is_unused_exempt(name):
            violations.append(
                Violation(
                    file_path=file_path,
                    line_number=line_number,
                    category=ViolationCategory.UNUSED_SYMBOL.value,
                    message=f"{qualified}{name} is declared but not used in this file",
                )
            )
        if declared_counts[name] > 1:
            violations.append(
                Violation(
                    file_path=file_path,
                    line_number=line_number,
                    category=ViolationCategory.DUPLICATE_SYMBOL.value,
                    message=(
                        f"Duplicate {kind.namespace} in file: {name} is declared "
                        f"{declared_counts[name]} times"
                    ),
                )
            )

    for name, line_number in first_usage.items():
        if declared_counts[name] == 0 and name not in kind.ignored_names:
            violations.append(
                Violation(
                    file_path=file_path,
                    line_number=line_number,
                    category=ViolationCategory.UNDEFINED_SYMBOL.value,
                    message=f"{qualified}{name} is used but not defined in this file",
                )
            )

    return violations
