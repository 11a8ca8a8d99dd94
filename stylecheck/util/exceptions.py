#!/usr/bin/env python3
"""Exceptions raised by stylecheck before or around a scan."""

from typing import List, Optional


class StyleCheckError(Exception):
    """Base exception for stylecheck failures that are not violations"""

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def get_summary(self) -> str:
        """Get the message followed by any detail lines"""
        if not self.details:
            return self.message
        return "\n".join([self.message] + [f"  - {detail}" for detail in self.details])


class ConfigurationError(StyleCheckError):
    """Invalid roots, regexes or options; raised before any file is scanned"""
