"""Tracewire error hierarchy and exceptions."""

from __future__ import annotations


class TracewireError(Exception):
    """Base exception for all Tracewire errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ValidationError(TracewireError, ValueError):
    """Raised when an argument fails validation."""
    pass


class MissingInputError(ValidationError):
    """Raised when a required input is None."""
    pass


class InvalidSizeError(ValidationError):
    """Raised when an encoded value does not have the expected length."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Invalid size: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class ConversionError(TracewireError):
    """Raised when trace options cannot be represented in a foreign flag type."""
    pass
