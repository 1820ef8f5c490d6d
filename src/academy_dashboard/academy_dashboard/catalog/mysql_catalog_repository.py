from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Level, Offering, OfferingRow, Subject
from .repository import CatalogRepository

_OFFERING_COLUMNS = "id, subject_id, level_id, price_per_month, times_per_week"


def _to_offering(r: dict) -> Offering:
    return Offering(
        offering_id=int(r["id"]),
        subject_id=int(r["subject_id"]),
        level_id=int(r["level_id"]),
        price_per_month=to_decimal(r["price_per_month"]),
        sessions_per_week=int(r["times_per_week"]) if r.get("times_per_week") is not None else None,
    )


class MySQLCatalogRepository(CatalogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_subjects(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, description FROM subjects ORDER BY name")
            return [
                Subject(subject_id=int(r["id"]), name=r["name"], description=r.get("description"))
                for r in fetchall(cur)
            ]

    def list_levels(self) -> Sequence[Level]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, display_order FROM levels ORDER BY display_order, id")
            return [
                Level(level_id=int(r["id"]), name=r["name"], display_order=int(r["display_order"] or 0))
                for r in fetchall(cur)
            ]

    def list_offering_rows(self) -> Sequence[OfferingRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    sl.id, sl.subject_id, s.name AS subject_name,
                    sl.level_id, l.name AS level_name,
                    sl.price_per_month, sl.times_per_week,
                    tsl.teacher_id
                FROM subject_levels sl
                JOIN subjects s ON s.id = sl.subject_id
                JOIN levels l ON l.id = sl.level_id
                LEFT JOIN teacher_subject_levels tsl ON tsl.subject_level_id = sl.id
                ORDER BY s.name ASC, l.display_order ASC
                """
            )
            return [
                OfferingRow(
                    offering_id=int(r["id"]),
                    subject_id=int(r["subject_id"]),
                    subject_name=r["subject_name"],
                    level_id=int(r["level_id"]),
                    level_name=r["level_name"],
                    price_per_month=to_decimal(r["price_per_month"]),
                    sessions_per_week=int(r["times_per_week"]) if r.get("times_per_week") is not None else None,
                    teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
                )
                for r in fetchall(cur)
            ]

    def get_offering(self, offering_id: int) -> Optional[Offering]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFERING_COLUMNS} FROM subject_levels WHERE id=%s", (int(offering_id),))
            r = fetchone(cur)
            return _to_offering(r) if r else None

    def find_offering(self, *, subject_id: int, level_id: int) -> Optional[Offering]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_OFFERING_COLUMNS} FROM subject_levels WHERE subject_id=%s AND level_id=%s",
                (int(subject_id), int(level_id)),
            )
            r = fetchone(cur)
            return _to_offering(r) if r else None
