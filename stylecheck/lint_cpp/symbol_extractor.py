#!/usr/bin/env python3
"""
Extraction of extern error-code style symbols from a single file.

Convention checked (every translation unit redeclares what it uses):

    namespace ErrorCodes
    {
        extern const int BAD_ARGUMENTS;
    }
    ...
    throw Exception(ErrorCodes::BAD_ARGUMENTS, "...");

Declarations and usages are returned as ordered lists with one record per
occurrence; duplicates are kept so that callers can count them.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from stylecheck.util.check_files import FileContent


UPPER_SNAKE_NAME = r"[A-Z_][A-Z0-9_]*"
IDENTIFIER_NAME = r"[_A-Za-z][_A-Za-z0-9]*"


@dataclass(frozen=True)
class SymbolKind:
    """One ``extern const <type> NAME;`` / ``<namespace>::NAME`` convention.

    Attributes:
        namespace: Qualifier used at call sites, e.g. "ErrorCodes"
        extern_type: Declared type, e.g. "int"
        name_pattern: Regex for a symbol name
        ignored_names: Namespace members that are API, not declared symbols
        unused_exempt_pattern: Names matching this regex are never reported unused
    """

    namespace: str
    extern_type: str
    name_pattern: str = UPPER_SNAKE_NAME
    ignored_names: frozenset[str] = frozenset()
    unused_exempt_pattern: Optional[str] = None
    declaration_regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    usage_regex: re.Pattern[str] = field(init=False, repr=False, compare=False)
    unused_exempt_regex: Optional[re.Pattern[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # Frozen dataclass: cache compiled regexes through object.__setattr__
        object.__setattr__(
            self,
            "declaration_regex",
            re.compile(
                rf"\bextern\s+const\s+{re.escape(self.extern_type)}\s+"
                rf"({self.name_pattern})\s*;"
            ),
        )
        object.__setattr__(
            self,
            "usage_regex",
            re.compile(rf"(?<!\w){re.escape(self.namespace)}::({self.name_pattern})(?!\w)"),
        )
        object.__setattr__(
            self,
            "unused_exempt_regex",
            re.compile(self.unused_exempt_pattern) if self.unused_exempt_pattern else None,
        )

    def is_unused_exempt(self, name: str) -> bool:
        return self.unused_exempt_regex is not None and bool(
            self.unused_exempt_regex.match(name)
        )


ERROR_CODES = SymbolKind(namespace="ErrorCodes", extern_type="int")

PROFILE_EVENTS = SymbolKind(
    namespace="ProfileEvents",
    extern_type="Event",
    name_pattern=IDENTIFIER_NAME,
    ignored_names=frozenset(
        {
            "global_counters",
            "Event",
            "Count",
            "Counters",
            "CountersIncrement",
            "end",
            "increment",
            "getName",
            "Type",
            "TypeEnum",
            "dumpToMapColumn",
            "getProfileEvents",
            "ThreadIdToCountersSnapshot",
            "LOCAL_NAME",
            "keeper_profile_events",
            "Timer",
        }
    ),
    # SOFTWARE_EVENT/HARDWARE_EVENT tables reference these through macros
    unused_exempt_pattern=r"Perf",
)

CURRENT_METRICS = SymbolKind(
    namespace="CurrentMetrics",
    extern_type="Metric",
    name_pattern=IDENTIFIER_NAME,
    ignored_names=frozenset(
        {"add", "sub", "get", "set", "end", "Increment", "Metric", "values", "Value"}
    ),
)

BUILTIN_SYMBOL_KINDS: dict[str, SymbolKind] = {
    kind.namespace: kind for kind in (ERROR_CODES, PROFILE_EVENTS, CURRENT_METRICS)
}


@dataclass(frozen=True)
class SymbolDeclaration:
    file_path: str
    namespace: str
    name: str
    line_number: int


@dataclass(frozen=True)
class SymbolUsage:
    file_path: str
    namespace: str
    name: str
    line_number: int


@dataclass
class ExtractedSymbols:
    declarations: list[SymbolDeclaration] = field(
        default_factory=lambda: list[SymbolDeclaration]()
    )
    usages: list[SymbolUsage] = field(default_factory=lambda: list[SymbolUsage]())


def extract(
    file_content: FileContent, kinds: Sequence[SymbolKind] = (ERROR_CODES,)
) -> ExtractedSymbols:
    """Collect every declaration and usage occurrence, in file order.

    Comment lines count like any other line for both sides.
    """
    symbols = ExtractedSymbols()

    for line_number, line in enumerate(file_content.lines, 1):
        if line is None:
            continue
        for kind in kinds:
            for match in kind.declaration_regex.finditer(line):
                symbols.declarations.append(
                    SymbolDeclaration(
                        file_path=file_content.path,
                        namespace=kind.namespace,
                        name=match.group(1),
                        line_number=line_number,
                    )
                )

            for match in kind.usage_regex.finditer(line):
                symbols.usages.append(
                    SymbolUsage(
                        file_path=file_content.path,
                        namespace=kind.namespace,
                        name=match.group(1),
                        line_number=line_number,
                    )
                )

    return symbols
