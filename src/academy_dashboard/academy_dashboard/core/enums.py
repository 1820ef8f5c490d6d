from __future__ import annotations

from enum import Enum


class TeacherPaymentType(str, Enum):
    """How a teacher is paid for an offering."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ErrorKind(str, Enum):
    """Failure categories surfaced by public operations."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"
