from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TeacherPaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import EnrollmentRow, RosterStudent, Student, Teacher
from .repository import DirectoryRepository

_TEACHER_COLUMNS = "t.id, t.first_name, t.last_name, t.payment_type, t.payment_value"
_STUDENT_COLUMNS = "id, first_name, last_name, parent_name, parent_phone, parent_email"


def _to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        payment_type=TeacherPaymentType(r["payment_type"]),
        payment_value=to_decimal(r["payment_value"]),
    )


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        parent_name=r.get("parent_name"),
        parent_phone=r.get("parent_phone"),
        parent_email=r.get("parent_email"),
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEACHER_COLUMNS} FROM teachers t WHERE t.id=%s", (int(teacher_id),))
            r = fetchone(cur)
            return _to_teacher(r) if r else None

    def list_teachers(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEACHER_COLUMNS} FROM teachers t ORDER BY t.last_name, t.first_name")
            return [_to_teacher(r) for r in fetchall(cur)]

    def get_student(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_students(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM students ORDER BY last_name, first_name")
            return [_to_student(r) for r in fetchall(cur)]

    def get_teacher_for_offering(self, offering_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            # At most one assignment per offering; LIMIT guards legacy duplicates.
            cur.execute(
                f"""
                SELECT {_TEACHER_COLUMNS}
                FROM teacher_subject_levels tsl
                JOIN teachers t ON t.id = tsl.teacher_id
                WHERE tsl.subject_level_id=%s
                ORDER BY tsl.id DESC
                LIMIT 1
                """,
                (int(offering_id),),
            )
            r = fetchone(cur)
            return _to_teacher(r) if r else None

    def list_roster(self, offering_id: int) -> Sequence[RosterStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ssl.id AS enrollment_id, s.id AS student_id, s.first_name, s.last_name
                FROM student_subject_levels ssl
                JOIN students s ON s.id = ssl.student_id
                WHERE ssl.subject_level_id=%s AND ssl.active=TRUE
                ORDER BY s.last_name, s.first_name
                """,
                (int(offering_id),),
            )
            return [
                RosterStudent(
                    student_id=int(r["student_id"]),
                    first_name=r["first_name"],
                    last_name=r["last_name"],
                    enrollment_id=int(r["enrollment_id"]),
                )
                for r in fetchall(cur)
            ]

    def list_active_enrollments(self) -> Sequence[EnrollmentRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ssl.id AS enrollment_id, ssl.student_id, ssl.subject_level_id,
                    st.first_name, st.last_name,
                    sub.name AS subject_name, lv.name AS level_name,
                    sl.price_per_month, sl.times_per_week
                FROM student_subject_levels ssl
                JOIN students st ON st.id = ssl.student_id
                JOIN subject_levels sl ON sl.id = ssl.subject_level_id
                LEFT JOIN subjects sub ON sub.id = sl.subject_id
                LEFT JOIN levels lv ON lv.id = sl.level_id
                WHERE ssl.active=TRUE
                ORDER BY ssl.id ASC
                """
            )
            return [
                EnrollmentRow(
                    enrollment_id=int(r["enrollment_id"]),
                    student_id=int(r["student_id"]),
                    student_first_name=r["first_name"],
                    student_last_name=r["last_name"],
                    offering_id=int(r["subject_level_id"]),
                    subject_name=r.get("subject_name"),
                    level_name=r.get("level_name"),
                    price_per_month=to_decimal(r["price_per_month"]),
                    sessions_per_week=int(r["times_per_week"]) if r.get("times_per_week") is not None else None,
                )
                for r in fetchall(cur)
            ]
