# src/lasclean/errors.py
from __future__ import annotations

from typing import Optional


class LasCleanError(RuntimeError):
    """Base class for errors raised by the curve-cleaning core."""


class ParseError(LasCleanError):
    """Raised when LAS text cannot be turned into a usable LogDocument."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number

    def __str__(self) -> str:
        base = super().__str__()
        if self.line_number is None:
            return base
        return f"{base} (line {self.line_number})"


class NumericError(LasCleanError):
    """Raised when a matrix is singular (or close enough that the result is meaningless)."""


class ConfigError(LasCleanError, ValueError):
    """Raised for invalid filter identifiers or parameters."""
