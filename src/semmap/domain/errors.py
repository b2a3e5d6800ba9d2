"""Domain exceptions."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when document text lacks a mandatory structural element.

    Attributes:
        line: 1-based line number the failure is reported against.
        message: Human-readable description of what is missing.
    """

    def __init__(self, line: int, message: str) -> None:
        super().__init__(f"Parse error at line {line}: {message}")
        self.line = line
        self.message = message
