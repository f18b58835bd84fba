"""Custom exceptions for the content store integration."""
from __future__ import annotations


class ContentError(Exception):
    """Base class for content store errors."""


class ContentConfigError(ContentError):
    """Raised when the client cannot be built from settings."""


class ContentTransportError(ContentError):
    """Raised when the content store is unreachable or answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ContentResponseError(ContentError):
    """Raised when the content store answers with an unexpected payload."""
