"""
Exception hierarchy for the gateway and service layers.

Repository code raises the store-level errors (``PersistenceError``,
``ConcurrencyConflictError``). Services translate them into ``ShopError``
subclasses, which carry the HTTP status and user-facing message rendered by
the API exception handler.
"""
from __future__ import annotations

from typing import Optional

from fastapi import status


# ---------------------------------------------------------------------------
# Store-level errors (raised by repositories)
# ---------------------------------------------------------------------------

class PersistenceError(Exception):
    """Raised when the backing store rejects a read or write."""


class ConcurrencyConflictError(PersistenceError):
    """Raised when a replace finds the record modified or deleted since it was read."""


# ---------------------------------------------------------------------------
# Service-level errors (rendered as HTTP responses)
# ---------------------------------------------------------------------------

class ShopError(Exception):
    """Base error for the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class NotFound(ShopError):
    """The requested resource does not exist (or was addressed by the wrong id)."""

    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailed(ShopError):
    """One or more fields violate their constraints."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("One or more validation errors occurred", errors=errors)


class InvalidReference(ShopError):
    """A payload points at a related record that does not exist."""


class ConcurrencyConflict(ShopError):
    """The record was updated or removed by someone else; the caller may retry."""

    def __init__(self, message: str = "This record has already been updated") -> None:
        super().__init__(message)


class PersistenceFailed(ShopError):
    """The store failed to apply a write for a reason other than a conflict."""
