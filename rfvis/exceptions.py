"""
Custom exceptions for parsing random forest dumps.
"""

from __future__ import annotations

from typing import Optional


class RFVisError(Exception):
    """Base exception for all forest parsing errors."""

    pass


class FormatError(RFVisError):
    """Raised when a record or numeric token cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class StructuralError(RFVisError):
    """Raised when the depth sequence of a tree file is not a valid pre-order encoding."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class EmptyForestError(RFVisError):
    """Raised when a forest is assembled without any trees."""

    pass
