from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceFilters, StudentAttendanceRow, TeacherAttendanceRow


class AttendanceRepository(Protocol):
    def upsert_teacher_attendance(self, *, teacher_id: int, attendance_date: date, present: bool) -> None:
        """Insert or overwrite ``present`` for (teacher_id, attendance_date) atomically."""

        raise NotImplementedError

    def upsert_student_attendance(
        self,
        *,
        student_id: int,
        offering_id: int,
        attendance_date: date,
        present: bool,
    ) -> None:
        """Insert or overwrite ``present`` for (student_id, offering_id, attendance_date) atomically."""

        raise NotImplementedError

    def count_present(self, *, student_id: int, offering_id: int, start_date: date, end_date: date) -> int:
        """Count present sessions with start_date <= attendance_date <= end_date."""

        raise NotImplementedError

    def list_teacher_attendance(self, filters: AttendanceFilters) -> Sequence[TeacherAttendanceRow]:
        raise NotImplementedError

    def list_student_attendance(self, filters: AttendanceFilters) -> Sequence[StudentAttendanceRow]:
        raise NotImplementedError
