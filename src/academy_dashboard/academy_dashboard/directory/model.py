from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import TeacherPaymentType


@dataclass(frozen=True)
class Teacher:
    teacher_id: int
    first_name: str
    last_name: str
    payment_type: TeacherPaymentType = TeacherPaymentType.FIXED
    payment_value: Decimal = Decimal("0")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Student:
    student_id: int
    first_name: str
    last_name: str
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    parent_email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class RosterStudent:
    """A student with an active enrollment in one offering (attendance sheet line)."""

    student_id: int
    first_name: str
    last_name: str
    enrollment_id: int


@dataclass(frozen=True)
class EnrollmentRow:
    """Read-model: active enrollment joined with student and offering display fields.

    ``subject_name``/``level_name`` are ``None`` when the catalog rows are missing.
    """

    enrollment_id: int
    student_id: int
    student_first_name: str
    student_last_name: str
    offering_id: int
    subject_name: Optional[str]
    level_name: Optional[str]
    price_per_month: Decimal
    sessions_per_week: Optional[int]

    @property
    def student_name(self) -> str:
        return f"{self.student_first_name} {self.student_last_name}".strip()
