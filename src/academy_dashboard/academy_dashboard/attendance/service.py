from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..catalog.repository import CatalogRepository
from ..common.validators import optional_date, optional_id, require_date, require_positive_id
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..core.result import OperationResult, run_operation
from ..directory.repository import DirectoryRepository
from .model import AttendanceFilters, AttendanceReport, StudentMark
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MarkInput = Union[StudentMark, Mapping[str, Any]]


def _require_flag(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def parse_marks(items: Optional[Iterable[MarkInput]]) -> list[StudentMark]:
    marks: list[StudentMark] = []
    for item in items or ():
        if isinstance(item, StudentMark):
            student_id, present = item.student_id, item.present
        elif isinstance(item, Mapping):
            student_id, present = item.get("student_id"), item.get("present")
        else:
            raise ValidationError("Each student attendance entry needs student_id and present")
        marks.append(
            StudentMark(
                student_id=require_positive_id(student_id, "student_id"),
                present=_require_flag(present, "present"),
            )
        )
    return marks


def build_filters(args: Optional[Mapping[str, Any]]) -> AttendanceFilters:
    """Build filters from a loose mapping (e.g. query-string args); blank values are ignored."""

    args = args or {}
    filters = AttendanceFilters(
        start_date=optional_date(args.get("start_date"), "start_date"),
        end_date=optional_date(args.get("end_date"), "end_date"),
        teacher_id=optional_id(args.get("teacher_id"), "teacher_id"),
        student_id=optional_id(args.get("student_id"), "student_id"),
        offering_id=optional_id(args.get("offering_id"), "offering_id"),
    )
    if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
        raise ValidationError("start_date must not be after end_date")
    return filters


class AttendanceService:
    """Records one day's session for an offering and serves attendance reports."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        catalog: CatalogRepository,
        directory: DirectoryRepository,
    ):
        self._attendance = attendance
        self._catalog = catalog
        self._directory = directory

    def record_session(
        self,
        *,
        offering_id: Any,
        attendance_date: Any,
        teacher_id: Any,
        teacher_present: Any,
        replacement_teacher_id: Any = None,
        student_attendance: Optional[Sequence[MarkInput]] = None,
    ) -> OperationResult[None]:
        """Upsert the teacher row(s) and every student mark for one session.

        Writes are sequential; the first failure stops the loop and earlier writes
        stay committed. Re-running the same call completes the rest.
        """

        def record() -> None:
            self._record_session(
                offering_id=offering_id,
                attendance_date=attendance_date,
                teacher_id=teacher_id,
                teacher_present=teacher_present,
                replacement_teacher_id=replacement_teacher_id,
                student_attendance=student_attendance,
            )

        return run_operation(record, logger=logger, action="Saving attendance")

    def _record_session(
        self,
        *,
        offering_id: Any,
        attendance_date: Any,
        teacher_id: Any,
        teacher_present: Any,
        replacement_teacher_id: Any,
        student_attendance: Optional[Sequence[MarkInput]],
    ) -> None:
        offering_id = require_positive_id(offering_id, "offering_id")
        day = require_date(attendance_date, "attendance_date")
        teacher_id = require_positive_id(teacher_id, "teacher_id")
        teacher_present = _require_flag(teacher_present, "teacher_present")
        replacement_id = optional_id(replacement_teacher_id, "replacement_teacher_id")
        marks = parse_marks(student_attendance)

        if not teacher_present:
            if replacement_id is None:
                raise ValidationError("A replacement teacher is required when the teacher is absent")
            if replacement_id == teacher_id:
                raise ValidationError("The replacement teacher must differ from the absent teacher")

        if not self._catalog.get_offering(offering_id):
            raise NotFoundError(f"Offering {offering_id} not found")
        if not self._directory.get_teacher(teacher_id):
            raise NotFoundError(f"Teacher {teacher_id} not found")
        if not teacher_present and not self._directory.get_teacher(replacement_id):
            raise NotFoundError(f"Replacement teacher {replacement_id} not found")
        for mark in marks:
            if not self._directory.get_student(mark.student_id):
                raise NotFoundError(f"Student {mark.student_id} not found")

        self._attendance.upsert_teacher_attendance(teacher_id=teacher_id, attendance_date=day, present=teacher_present)
        if not teacher_present:
            self._attendance.upsert_teacher_attendance(teacher_id=replacement_id, attendance_date=day, present=True)

        for saved, mark in enumerate(marks):
            try:
                self._attendance.upsert_student_attendance(
                    student_id=mark.student_id,
                    offering_id=offering_id,
                    attendance_date=day,
                    present=mark.present,
                )
            except StoreError as exc:
                raise StoreError(
                    f"Saved {saved} of {len(marks)} student marks; student {mark.student_id} failed: {exc}"
                ) from exc

        logger.info(
            "Recorded session offering=%s date=%s teacher=%s%s students=%d",
            offering_id,
            day.isoformat(),
            teacher_id,
            "" if teacher_present else f" replacement={replacement_id}",
            len(marks),
        )

    def query_attendance(
        self, filters: Union[AttendanceFilters, Mapping[str, Any], None] = None
    ) -> OperationResult[AttendanceReport]:
        def load() -> AttendanceReport:
            f = filters if isinstance(filters, AttendanceFilters) else build_filters(filters)
            return AttendanceReport(
                teacher_attendance=list(self._attendance.list_teacher_attendance(f)),
                student_attendance=list(self._attendance.list_student_attendance(f)),
            )

        return run_operation(load, logger=logger, action="Fetching attendance records")
