from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import PaymentHistoryRow
from .repository import PaymentRepository


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_payment(
        self,
        *,
        student_id: int,
        offering_id: int,
        amount: Decimal,
        payment_date: date,
        month_paid_for: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            # LAST_INSERT_ID(id) makes lastrowid report the existing row on update.
            cur.execute(
                """
                INSERT INTO payments(student_id, subject_level_id, amount, payment_date, month_paid_for)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    amount=VALUES(amount),
                    payment_date=VALUES(payment_date)
                """,
                (int(student_id), int(offering_id), amount, payment_date, month_paid_for),
            )
            return int(cur.lastrowid)

    def exists_for_month(self, *, student_id: int, offering_id: int, month_paid_for: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM payments
                WHERE student_id=%s AND subject_level_id=%s AND month_paid_for=%s
                LIMIT 1
                """,
                (int(student_id), int(offering_id), month_paid_for),
            )
            return fetchone(cur) is not None

    def list_for_student(self, student_id: int) -> Sequence[PaymentHistoryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    p.id, p.student_id, p.subject_level_id,
                    sub.name AS subject_name, lv.name AS level_name,
                    p.amount, p.payment_date, p.month_paid_for
                FROM payments p
                LEFT JOIN subject_levels sl ON sl.id = p.subject_level_id
                LEFT JOIN subjects sub ON sub.id = sl.subject_id
                LEFT JOIN levels lv ON lv.id = sl.level_id
                WHERE p.student_id=%s
                ORDER BY p.payment_date DESC, p.id DESC
                """,
                (int(student_id),),
            )
            return [
                PaymentHistoryRow(
                    payment_id=int(r["id"]),
                    student_id=int(r["student_id"]),
                    offering_id=int(r["subject_level_id"]),
                    subject_name=r.get("subject_name"),
                    level_name=r.get("level_name"),
                    amount=to_decimal(r["amount"]),
                    payment_date=r["payment_date"],
                    month_paid_for=r["month_paid_for"],
                )
                for r in fetchall(cur)
            ]
