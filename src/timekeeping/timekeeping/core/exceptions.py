from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class BadRequestError(ValidationError):
    """Raised for malformed requests, e.g. an inverted date range."""


class ConflictError(DomainError):
    """Raised when a clock action is not valid from the current state."""


class ResourceNotFoundError(DomainError):
    """Raised when a user, manager or time entry does not exist."""


class ForbiddenError(DomainError):
    """Raised when the actor is not allowed to act on the target user."""


class RecalculationError(DomainError):
    """Raised when an entry was saved but rebuilding the daily summary failed.

    The entry stays persisted; the summary can be rebuilt later.
    """

    def __init__(self, message: str, *, entry: Optional[Any] = None):
        super().__init__(message)
        self.entry = entry
