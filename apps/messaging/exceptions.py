"""Custom exceptions for the messaging domain."""
from __future__ import annotations


class MessagingError(Exception):
    """Base class for messaging domain errors."""


class EmailRelayConfigError(MessagingError):
    """Raised when the email relay is not configured (missing API key or addresses)."""


class EmailRelayError(MessagingError):
    """Raised when the email API is unreachable or rejects a message."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
