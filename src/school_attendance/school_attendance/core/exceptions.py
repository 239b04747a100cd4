from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidRequestShape(ValidationError):
    """Raised when no recognized report parameter combination was supplied."""


class InvalidRange(ValidationError):
    """Raised when a month is outside 1-12 or a range starts after it ends."""


class NotFoundError(DomainError):
    """Raised when a class does not exist or a download has nothing to export."""


class AuthenticationError(DomainError):
    """Raised when the request carries no caller identity."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreFailure(DomainError):
    """Raised when the underlying query layer fails."""
