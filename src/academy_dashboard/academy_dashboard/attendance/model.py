from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StudentMark:
    """Input line of an attendance sheet."""

    student_id: int
    present: bool


@dataclass(frozen=True)
class AttendanceFilters:
    """Optional filters; ``None`` fields impose no constraint."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    teacher_id: Optional[int] = None
    student_id: Optional[int] = None
    offering_id: Optional[int] = None


@dataclass(frozen=True)
class TeacherAttendanceRow:
    """Read-model for reports: teacher attendance joined with the teacher's name."""

    attendance_id: int
    teacher_id: int
    teacher_first_name: str
    teacher_last_name: str
    attendance_date: date
    present: bool


@dataclass(frozen=True)
class StudentAttendanceRow:
    """Read-model for reports: student attendance joined with student and catalog names."""

    attendance_id: int
    student_id: int
    student_first_name: str
    student_last_name: str
    offering_id: int
    subject_name: Optional[str]
    level_name: Optional[str]
    attendance_date: date
    present: bool


@dataclass(frozen=True)
class AttendanceReport:
    teacher_attendance: list[TeacherAttendanceRow]
    student_attendance: list[StudentAttendanceRow]
