from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PaymentHistoryRow:
    """Read-model: a student's payment joined with catalog names."""

    payment_id: int
    student_id: int
    offering_id: int
    subject_name: Optional[str]
    level_name: Optional[str]
    amount: Decimal
    payment_date: date
    month_paid_for: str


@dataclass(frozen=True)
class PaymentAlert:
    """Derived, never persisted: current-month attendance reached the billing
    threshold and no payment is recorded for the month."""

    enrollment_id: int
    student_id: int
    student_name: str
    offering_id: int
    subject_name: str
    level_name: str
    attendance_count: int
    expected_attendance: int
    amount_due: Decimal
    sessions_per_week: int


@dataclass(frozen=True)
class AlertReport:
    month: str
    alerts: list[PaymentAlert]
    skipped_enrollment_ids: list[int]
