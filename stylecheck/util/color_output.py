#!/usr/bin/env python3
"""
Cross-platform colored terminal output utilities.

Report lines and summaries are printed through the Rich library so colors
work the same way on Windows, macOS, and Linux. Markup is disabled because
C++ source text routinely contains square brackets.
"""

from typing import Optional, TextIO

from rich.console import Console
from rich.text import Text


class ColorOutput:
    """
    Platform-neutral colored terminal output using Rich library.

    Provides methods for printing colored text with consistent formatting
    across different operating systems and terminals.
    """

    def __init__(
        self, force_terminal: Optional[bool] = None, file: Optional[TextIO] = None
    ):
        """
        Initialize ColorOutput.

        Args:
            force_terminal: Force terminal mode (True/False) or auto-detect (None)
            file: Stream to write to (defaults to stdout)
        """
        self.console = Console(
            force_terminal=force_terminal,
            file=file,
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def print_green(self, message: str) -> None:
        """Print message in green color."""
        self.console.print(message, style="green")

    def print_yellow(self, message: str) -> None:
        """Print message in yellow color."""
        self.console.print(message, style="yellow")

    def print_red(self, message: str) -> None:
        """Print message in red color."""
        self.console.print(message, style="red")

    def print_violation(self, location: str, category: str, message: str) -> None:
        """Print one report line as ``location: category: message``."""
        text = Text()
        text.append(f"{location}: ", style="bold")
        text.append(category, style="red")
        text.append(f": {message}")
        self.console.print(text)


# Global instance for easy access
_color_output = ColorOutput()


def print_yellow(message: str) -> None:
    """Print message in yellow color (global function)."""
    _color_output.print_yellow(message)


def print_red(message: str) -> None:
    """Print message in red color (global function)."""
    _color_output.print_red(message)
