from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..catalog.repository import CatalogRepository
from ..common.datetime_utils import month_key, month_start, now_local
from ..common.validators import require_date, require_month, require_non_negative_amount, require_positive_id
from ..core.constants import BILLING_WEEKS_PER_MONTH, DEFAULT_SESSIONS_PER_WEEK, UNKNOWN_LABEL
from ..core.exceptions import NotFoundError, StoreError
from ..core.result import OperationResult, run_operation
from ..directory.model import EnrollmentRow
from ..directory.repository import DirectoryRepository
from .model import AlertReport, PaymentAlert
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


def expected_attendance(sessions_per_week: Optional[int], *, weeks_per_month: int = BILLING_WEEKS_PER_MONTH) -> int:
    """Sessions a student must attend in a month before tuition is due.

    Fixed 4-week month: calendar length and holidays are not considered.
    """

    return (sessions_per_week or DEFAULT_SESSIONS_PER_WEEK) * weeks_per_month


class PaymentService:
    def __init__(
        self,
        payments: PaymentRepository,
        attendance: AttendanceRepository,
        catalog: CatalogRepository,
        directory: DirectoryRepository,
        *,
        weeks_per_month: int = BILLING_WEEKS_PER_MONTH,
    ):
        self._payments = payments
        self._attendance = attendance
        self._catalog = catalog
        self._directory = directory
        self._weeks_per_month = int(weeks_per_month)

    def compute_alerts(self, *, today: date | None = None) -> OperationResult[AlertReport]:
        """Flag active enrollments whose current-month attendance owes an unpaid month.

        A store failure on one enrollment is logged and that enrollment is reported
        in ``skipped_enrollment_ids``; the others are still evaluated.
        """

        today = today or now_local().date()
        return run_operation(lambda: self._compute_alerts(today), logger=logger, action="Computing payment alerts")

    def _compute_alerts(self, today: date) -> AlertReport:
        month = month_key(today)
        start = month_start(today)

        alerts: dict[int, PaymentAlert] = {}
        skipped: list[int] = []

        for enrollment in self._directory.list_active_enrollments():
            if enrollment.enrollment_id in alerts:
                continue
            try:
                alert = self._alert_for(enrollment, month=month, start=start, today=today)
            except StoreError as exc:
                logger.warning("Skipping enrollment %s while computing alerts: %s", enrollment.enrollment_id, exc)
                skipped.append(enrollment.enrollment_id)
                continue
            if alert:
                alerts[alert.enrollment_id] = alert

        ordered = sorted(alerts.values(), key=lambda a: (a.student_name.lower(), a.enrollment_id))
        return AlertReport(month=month, alerts=ordered, skipped_enrollment_ids=skipped)

    def _alert_for(self, enrollment: EnrollmentRow, *, month: str, start: date, today: date) -> PaymentAlert | None:
        sessions = enrollment.sessions_per_week or DEFAULT_SESSIONS_PER_WEEK
        expected = expected_attendance(sessions, weeks_per_month=self._weeks_per_month)

        attended = self._attendance.count_present(
            student_id=enrollment.student_id,
            offering_id=enrollment.offering_id,
            start_date=start,
            end_date=today,
        )
        if attended < expected:
            return None

        paid = self._payments.exists_for_month(
            student_id=enrollment.student_id,
            offering_id=enrollment.offering_id,
            month_paid_for=month,
        )
        if paid:
            return None

        return PaymentAlert(
            enrollment_id=enrollment.enrollment_id,
            student_id=enrollment.student_id,
            student_name=enrollment.student_name,
            offering_id=enrollment.offering_id,
            subject_name=enrollment.subject_name or UNKNOWN_LABEL,
            level_name=enrollment.level_name or UNKNOWN_LABEL,
            attendance_count=attended,
            expected_attendance=expected,
            amount_due=enrollment.price_per_month,
            sessions_per_week=sessions,
        )

    def record_payment(
        self,
        *,
        student_id: Any,
        offering_id: Any,
        amount: Any,
        payment_date: Any,
        month_paid_for: Any,
    ) -> OperationResult[dict]:
        """Insert a payment, or correct amount/date of the existing one for that month."""

        def record() -> dict:
            sid = require_positive_id(student_id, "student_id")
            oid = require_positive_id(offering_id, "offering_id")
            value = require_non_negative_amount(amount, "amount")
            paid_on = require_date(payment_date, "payment_date")
            month = require_month(month_paid_for, "month_paid_for")

            if not self._directory.get_student(sid):
                raise NotFoundError(f"Student {sid} not found")
            if not self._catalog.get_offering(oid):
                raise NotFoundError(f"Offering {oid} not found")

            payment_id = self._payments.upsert_payment(
                student_id=sid,
                offering_id=oid,
                amount=value,
                payment_date=paid_on,
                month_paid_for=month,
            )
            logger.info("Recorded payment %s student=%s offering=%s month=%s amount=%s", payment_id, sid, oid, month, value)
            return {"payment_id": payment_id}

        return run_operation(record, logger=logger, action="Recording payment")

    def list_student_payments(self, student_id: Any) -> OperationResult[list]:
        return run_operation(
            lambda: list(self._payments.list_for_student(require_positive_id(student_id, "student_id"))),
            logger=logger,
            action="Fetching student payments",
        )
