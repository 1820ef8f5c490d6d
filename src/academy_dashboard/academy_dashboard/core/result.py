from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .enums import ErrorKind
from .exceptions import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Tagged success/failure returned by every public operation."""

    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, exc: DomainError) -> "OperationResult[T]":
        return cls(ok=False, error=str(exc), error_kind=exc.kind)


def run_operation(func: Callable[[], T], *, logger, action: str) -> OperationResult[T]:
    """Run ``func`` and fold any domain failure into an ``OperationResult``."""

    try:
        return OperationResult.success(func())
    except DomainError as exc:
        if exc.kind == ErrorKind.STORE:
            logger.error("%s failed: %s", action, exc)
        else:
            logger.warning("%s rejected: %s", action, exc)
        return OperationResult.failure(exc)
