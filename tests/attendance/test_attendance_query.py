from __future__ import annotations

from datetime import date

import pytest

from src.academy_dashboard.academy_dashboard.attendance.model import AttendanceFilters
from src.academy_dashboard.academy_dashboard.attendance.service import build_filters
from src.academy_dashboard.academy_dashboard.core.enums import ErrorKind
from src.academy_dashboard.academy_dashboard.core.exceptions import ValidationError


@pytest.fixture
def history(catalog_repo, directory_repo, attendance_repo):
    catalog_repo.add_offering(10)
    catalog_repo.add_offering(11, subject="Physics")
    directory_repo.add_teacher(1)
    directory_repo.add_teacher(2, "Sara", "Haddad")
    directory_repo.add_student(100)
    directory_repo.add_student(101, "Lina", "Boudiaf")

    attendance_repo.upsert_teacher_attendance(teacher_id=1, attendance_date=date(2024, 3, 1), present=True)
    attendance_repo.upsert_teacher_attendance(teacher_id=2, attendance_date=date(2024, 3, 5), present=False)
    attendance_repo.upsert_teacher_attendance(teacher_id=1, attendance_date=date(2024, 3, 8), present=True)

    attendance_repo.mark_days(100, 10, [date(2024, 3, 1), date(2024, 3, 8)])
    attendance_repo.mark_days(101, 10, [date(2024, 3, 1)])
    attendance_repo.mark_days(100, 11, [date(2024, 3, 5)])


def test_no_filters_returns_everything_newest_first(container, history):
    result = container.attendance_service.query_attendance()

    assert result.ok
    teacher_dates = [r.attendance_date for r in result.data.teacher_attendance]
    assert teacher_dates == [date(2024, 3, 8), date(2024, 3, 5), date(2024, 3, 1)]
    assert len(result.data.student_attendance) == 4
    assert result.data.student_attendance[0].attendance_date == date(2024, 3, 8)


def test_filters_are_combined_with_and(container, history):
    result = container.attendance_service.query_attendance(
        AttendanceFilters(start_date=date(2024, 3, 2), student_id=100, offering_id=10)
    )

    assert [(r.student_id, r.offering_id, r.attendance_date) for r in result.data.student_attendance] == [
        (100, 10, date(2024, 3, 8))
    ]
    assert [r.attendance_date for r in result.data.teacher_attendance] == [date(2024, 3, 8), date(2024, 3, 5)]


def test_teacher_filter_applies_to_teacher_side(container, history):
    result = container.attendance_service.query_attendance({"teacher_id": "2", "student_id": ""})

    assert [r.teacher_id for r in result.data.teacher_attendance] == [2]
    assert len(result.data.student_attendance) == 4


def test_build_filters_ignores_blank_values():
    assert build_filters({"start_date": "", "teacher_id": None}) == AttendanceFilters()


def test_build_filters_rejects_inverted_range():
    with pytest.raises(ValidationError):
        build_filters({"start_date": "2024-03-10", "end_date": "2024-03-01"})


def test_bad_filter_is_reported_not_raised(container, history):
    result = container.attendance_service.query_attendance({"end_date": "March"})

    assert result.error_kind == ErrorKind.VALIDATION
