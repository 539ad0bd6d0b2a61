"""Errors that escape a reconciliation run."""
from __future__ import annotations


class InvalidWorkbook(ValueError):
    """Raised when input bytes cannot be read as a spreadsheet."""

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        self.reason = reason
        message = f"{source} is not a readable workbook"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
