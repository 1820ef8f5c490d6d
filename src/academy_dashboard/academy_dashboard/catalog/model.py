from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Subject:
    subject_id: int
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Level:
    level_id: int
    name: str
    display_order: int = 0


@dataclass(frozen=True)
class Offering:
    """A priced subject x level combination (``subject_levels`` row).

    ``sessions_per_week`` may be ``None`` for legacy rows; callers fall back to
    the default.
    """

    offering_id: int
    subject_id: int
    level_id: int
    price_per_month: Decimal
    sessions_per_week: Optional[int]


@dataclass(frozen=True)
class OfferingRow:
    """Read-model: offering joined with names and its assigned teacher."""

    offering_id: int
    subject_id: int
    subject_name: str
    level_id: int
    level_name: str
    price_per_month: Decimal
    sessions_per_week: Optional[int]
    teacher_id: Optional[int] = None
