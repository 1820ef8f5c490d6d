from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol, Sequence

from .model import PaymentHistoryRow


class PaymentRepository(Protocol):
    def upsert_payment(
        self,
        *,
        student_id: int,
        offering_id: int,
        amount: Decimal,
        payment_date: date,
        month_paid_for: str,
    ) -> int:
        """Insert, or update amount/date of the row for (student, offering, month); return its id."""

        raise NotImplementedError

    def exists_for_month(self, *, student_id: int, offering_id: int, month_paid_for: str) -> bool:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[PaymentHistoryRow]:
        raise NotImplementedError
