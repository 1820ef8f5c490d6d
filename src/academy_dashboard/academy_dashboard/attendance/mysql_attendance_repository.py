from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_bool, where_clause
from .model import AttendanceFilters, StudentAttendanceRow, TeacherAttendanceRow
from .repository import AttendanceRepository


def _date_clauses(column: str, filters: AttendanceFilters, clauses: list[str], params: list[object]) -> None:
    if filters.start_date is not None:
        clauses.append(f"{column} >= %s")
        params.append(filters.start_date)
    if filters.end_date is not None:
        clauses.append(f"{column} <= %s")
        params.append(filters.end_date)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_teacher_attendance(self, *, teacher_id: int, attendance_date: date, present: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teacher_attendance(teacher_id, attendance_date, present)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE present=VALUES(present)
                """,
                (int(teacher_id), attendance_date, bool(present)),
            )

    def upsert_student_attendance(
        self,
        *,
        student_id: int,
        offering_id: int,
        attendance_date: date,
        present: bool,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO student_attendance(student_id, subject_level_id, attendance_date, present)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE present=VALUES(present)
                """,
                (int(student_id), int(offering_id), attendance_date, bool(present)),
            )

    def count_present(self, *, student_id: int, offering_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS attended
                FROM student_attendance
                WHERE student_id=%s AND subject_level_id=%s AND present=TRUE
                  AND attendance_date BETWEEN %s AND %s
                """,
                (int(student_id), int(offering_id), start_date, end_date),
            )
            r = fetchone(cur)
            return int(r["attended"]) if r else 0

    def list_teacher_attendance(self, filters: AttendanceFilters) -> Sequence[TeacherAttendanceRow]:
        clauses: list[str] = []
        params: list[object] = []
        _date_clauses("ta.attendance_date", filters, clauses, params)
        if filters.teacher_id is not None:
            clauses.append("ta.teacher_id=%s")
            params.append(int(filters.teacher_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ta.id, ta.teacher_id, t.first_name, t.last_name, ta.attendance_date, ta.present
                FROM teacher_attendance ta
                JOIN teachers t ON t.id = ta.teacher_id
                {where_clause(clauses)}
                ORDER BY ta.attendance_date DESC, ta.id DESC
                """,
                tuple(params),
            )
            return [
                TeacherAttendanceRow(
                    attendance_id=int(r["id"]),
                    teacher_id=int(r["teacher_id"]),
                    teacher_first_name=r["first_name"],
                    teacher_last_name=r["last_name"],
                    attendance_date=r["attendance_date"],
                    present=to_bool(r["present"]),
                )
                for r in fetchall(cur)
            ]

    def list_student_attendance(self, filters: AttendanceFilters) -> Sequence[StudentAttendanceRow]:
        clauses: list[str] = []
        params: list[object] = []
        _date_clauses("sa.attendance_date", filters, clauses, params)
        if filters.student_id is not None:
            clauses.append("sa.student_id=%s")
            params.append(int(filters.student_id))
        if filters.offering_id is not None:
            clauses.append("sa.subject_level_id=%s")
            params.append(int(filters.offering_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    sa.id, sa.student_id, st.first_name, st.last_name,
                    sa.subject_level_id, sub.name AS subject_name, lv.name AS level_name,
                    sa.attendance_date, sa.present
                FROM student_attendance sa
                JOIN students st ON st.id = sa.student_id
                LEFT JOIN subject_levels sl ON sl.id = sa.subject_level_id
                LEFT JOIN subjects sub ON sub.id = sl.subject_id
                LEFT JOIN levels lv ON lv.id = sl.level_id
                {where_clause(clauses)}
                ORDER BY sa.attendance_date DESC, sa.id DESC
                """,
                tuple(params),
            )
            return [
                StudentAttendanceRow(
                    attendance_id=int(r["id"]),
                    student_id=int(r["student_id"]),
                    student_first_name=r["first_name"],
                    student_last_name=r["last_name"],
                    offering_id=int(r["subject_level_id"]),
                    subject_name=r.get("subject_name"),
                    level_name=r.get("level_name"),
                    attendance_date=r["attendance_date"],
                    present=to_bool(r["present"]),
                )
                for r in fetchall(cur)
            ]
