from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when a referenced offering, teacher, student or enrollment is missing."""

    kind = ErrorKind.NOT_FOUND


class StoreError(DomainError):
    """Raised when a read or write against the database fails.

    The message carries the underlying cause; the original exception is chained.
    """

    kind = ErrorKind.STORE
