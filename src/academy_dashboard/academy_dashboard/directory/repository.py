from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EnrollmentRow, RosterStudent, Student, Teacher


class DirectoryRepository(Protocol):
    """Read interface over teachers, students and their catalog links."""

    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_teachers(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def get_student(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_students(self) -> Sequence[Student]:
        raise NotImplementedError

    def get_teacher_for_offering(self, offering_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_roster(self, offering_id: int) -> Sequence[RosterStudent]:
        """Students with an active enrollment in the offering."""

        raise NotImplementedError

    def list_active_enrollments(self) -> Sequence[EnrollmentRow]:
        raise NotImplementedError
