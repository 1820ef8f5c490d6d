from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from src.academy_dashboard.academy_dashboard.attendance.model import (
    AttendanceFilters,
    StudentAttendanceRow,
    TeacherAttendanceRow,
)
from src.academy_dashboard.academy_dashboard.catalog.model import Level, Offering, OfferingRow, Subject
from src.academy_dashboard.academy_dashboard.container import wire
from src.academy_dashboard.academy_dashboard.core.exceptions import StoreError
from src.academy_dashboard.academy_dashboard.directory.model import EnrollmentRow, RosterStudent, Student, Teacher
from src.academy_dashboard.academy_dashboard.payments.model import PaymentHistoryRow


class InMemoryCatalog:
    def __init__(self):
        self.subjects: dict[int, Subject] = {}
        self.levels: dict[int, Level] = {}
        self.offerings: dict[int, Offering] = {}
        self.assignments: dict[int, int] = {}

    def add_offering(self, offering_id, *, subject="Mathematics", level="Beginner", price="5000", sessions=2, teacher_id=None):
        subject_id = len(self.subjects) + 1
        level_id = len(self.levels) + 1
        self.subjects[subject_id] = Subject(subject_id=subject_id, name=subject)
        self.levels[level_id] = Level(level_id=level_id, name=level, display_order=level_id)
        self.offerings[offering_id] = Offering(
            offering_id=offering_id,
            subject_id=subject_id,
            level_id=level_id,
            price_per_month=Decimal(price),
            sessions_per_week=sessions,
        )
        if teacher_id is not None:
            self.assignments[offering_id] = teacher_id
        return self.offerings[offering_id]

    def list_subjects(self):
        return sorted(self.subjects.values(), key=lambda s: s.name)

    def list_levels(self):
        return sorted(self.levels.values(), key=lambda lv: lv.display_order)

    def list_offering_rows(self):
        return [
            OfferingRow(
                offering_id=o.offering_id,
                subject_id=o.subject_id,
                subject_name=self.subjects[o.subject_id].name,
                level_id=o.level_id,
                level_name=self.levels[o.level_id].name,
                price_per_month=o.price_per_month,
                sessions_per_week=o.sessions_per_week,
                teacher_id=self.assignments.get(o.offering_id),
            )
            for o in self.offerings.values()
        ]

    def get_offering(self, offering_id: int) -> Optional[Offering]:
        return self.offerings.get(offering_id)

    def find_offering(self, *, subject_id: int, level_id: int) -> Optional[Offering]:
        for o in self.offerings.values():
            if o.subject_id == subject_id and o.level_id == level_id:
                return o
        return None


class InMemoryDirectory:
    def __init__(self, catalog: InMemoryCatalog):
        self._catalog = catalog
        self.teachers: dict[int, Teacher] = {}
        self.students: dict[int, Student] = {}
        self.enrollments: dict[int, tuple[int, int, bool]] = {}
        self.fail_listing = False

    def add_teacher(self, teacher_id, first_name="Karim", last_name="Benali"):
        self.teachers[teacher_id] = Teacher(teacher_id=teacher_id, first_name=first_name, last_name=last_name)
        return self.teachers[teacher_id]

    def add_student(self, student_id, first_name="Amine", last_name="Kaci"):
        self.students[student_id] = Student(student_id=student_id, first_name=first_name, last_name=last_name)
        return self.students[student_id]

    def enroll(self, enrollment_id, *, student_id, offering_id, active=True):
        self.enrollments[enrollment_id] = (student_id, offering_id, active)

    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self.teachers.get(teacher_id)

    def list_teachers(self):
        return list(self.teachers.values())

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def list_students(self):
        return list(self.students.values())

    def get_teacher_for_offering(self, offering_id: int) -> Optional[Teacher]:
        teacher_id = self._catalog.assignments.get(offering_id)
        return self.teachers.get(teacher_id) if teacher_id else None

    def list_roster(self, offering_id: int):
        return [
            RosterStudent(
                student_id=sid,
                first_name=self.students[sid].first_name,
                last_name=self.students[sid].last_name,
                enrollment_id=eid,
            )
            for eid, (sid, oid, active) in self.enrollments.items()
            if oid == offering_id and active
        ]

    def list_active_enrollments(self):
        if self.fail_listing:
            raise StoreError("connection lost")
        rows = []
        for eid, (sid, oid, active) in self.enrollments.items():
            if not active:
                continue
            offering = self._catalog.offerings[oid]
            student = self.students[sid]
            rows.append(
                EnrollmentRow(
                    enrollment_id=eid,
                    student_id=sid,
                    student_first_name=student.first_name,
                    student_last_name=student.last_name,
                    offering_id=oid,
                    subject_name=self._catalog.subjects[offering.subject_id].name,
                    level_name=self._catalog.levels[offering.level_id].name,
                    price_per_month=offering.price_per_month,
                    sessions_per_week=offering.sessions_per_week,
                )
            )
        return rows


class InMemoryAttendance:
    """Upserts keyed like the unique indexes of teacher_attendance/student_attendance."""

    def __init__(self, directory: InMemoryDirectory):
        self._directory = directory
        self.teacher_rows: dict[tuple[int, date], tuple[int, bool]] = {}
        self.student_rows: dict[tuple[int, int, date], tuple[int, bool]] = {}
        self.writes = 0
        self.fail_on_student: set[int] = set()
        self.fail_count_for: set[int] = set()
        self._id = 0

    def _next_id(self) -> int:
        self._id += 1
        return self._id

    def upsert_teacher_attendance(self, *, teacher_id, attendance_date, present):
        self.writes += 1
        key = (teacher_id, attendance_date)
        row_id = self.teacher_rows[key][0] if key in self.teacher_rows else self._next_id()
        self.teacher_rows[key] = (row_id, present)

    def upsert_student_attendance(self, *, student_id, offering_id, attendance_date, present):
        if student_id in self.fail_on_student:
            raise StoreError("deadlock detected")
        self.writes += 1
        key = (student_id, offering_id, attendance_date)
        row_id = self.student_rows[key][0] if key in self.student_rows else self._next_id()
        self.student_rows[key] = (row_id, present)

    def mark_days(self, student_id, offering_id, days, *, present=True):
        for day in days:
            self.upsert_student_attendance(
                student_id=student_id, offering_id=offering_id, attendance_date=day, present=present
            )

    def count_present(self, *, student_id, offering_id, start_date, end_date):
        if student_id in self.fail_count_for:
            raise StoreError("timeout")
        return sum(
            1
            for (sid, oid, day), (_, present) in self.student_rows.items()
            if sid == student_id and oid == offering_id and present and start_date <= day <= end_date
        )

    def list_teacher_attendance(self, filters: AttendanceFilters):
        rows = []
        for (tid, day), (row_id, present) in self.teacher_rows.items():
            if filters.start_date and day < filters.start_date:
                continue
            if filters.end_date and day > filters.end_date:
                continue
            if filters.teacher_id and tid != filters.teacher_id:
                continue
            t = self._directory.teachers[tid]
            rows.append(TeacherAttendanceRow(row_id, tid, t.first_name, t.last_name, day, present))
        return sorted(rows, key=lambda r: (r.attendance_date, r.attendance_id), reverse=True)

    def list_student_attendance(self, filters: AttendanceFilters):
        rows = []
        for (sid, oid, day), (row_id, present) in self.student_rows.items():
            if filters.start_date and day < filters.start_date:
                continue
            if filters.end_date and day > filters.end_date:
                continue
            if filters.student_id and sid != filters.student_id:
                continue
            if filters.offering_id and oid != filters.offering_id:
                continue
            s = self._directory.students[sid]
            rows.append(StudentAttendanceRow(row_id, sid, s.first_name, s.last_name, oid, None, None, day, present))
        return sorted(rows, key=lambda r: (r.attendance_date, r.attendance_id), reverse=True)


class InMemoryPayments:
    def __init__(self):
        self.rows: dict[tuple[int, int, str], PaymentHistoryRow] = {}
        self._id = 0

    def upsert_payment(self, *, student_id, offering_id, amount, payment_date, month_paid_for):
        key = (student_id, offering_id, month_paid_for)
        existing = self.rows.get(key)
        if existing:
            payment_id = existing.payment_id
        else:
            self._id += 1
            payment_id = self._id
        self.rows[key] = PaymentHistoryRow(
            payment_id=payment_id,
            student_id=student_id,
            offering_id=offering_id,
            subject_name=None,
            level_name=None,
            amount=amount,
            payment_date=payment_date,
            month_paid_for=month_paid_for,
        )
        return payment_id

    def exists_for_month(self, *, student_id, offering_id, month_paid_for):
        return (student_id, offering_id, month_paid_for) in self.rows

    def list_for_student(self, student_id):
        items = [r for r in self.rows.values() if r.student_id == student_id]
        return sorted(items, key=lambda r: (r.payment_date, r.payment_id), reverse=True)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 20, 10, 0, 0)


@pytest.fixture
def catalog_repo() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture
def directory_repo(catalog_repo) -> InMemoryDirectory:
    return InMemoryDirectory(catalog_repo)


@pytest.fixture
def attendance_repo(directory_repo) -> InMemoryAttendance:
    return InMemoryAttendance(directory_repo)


@pytest.fixture
def payments_repo() -> InMemoryPayments:
    return InMemoryPayments()


@pytest.fixture
def container(catalog_repo, directory_repo, attendance_repo, payments_repo):
    return wire(
        conn=None,
        catalog_repo=catalog_repo,
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
    )
