"""Heuristic C++ style and error-code consistency checker."""

__version__ = "1.4.0"
