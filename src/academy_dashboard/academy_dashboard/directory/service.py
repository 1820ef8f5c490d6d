from __future__ import annotations

import logging

from ..catalog.service import CatalogService
from ..core.result import OperationResult, run_operation
from .repository import DirectoryRepository

logger = logging.getLogger(__name__)


class DirectoryService:
    """Teacher/student lookups used to build an attendance sheet for one session."""

    def __init__(self, directory: DirectoryRepository, catalog: CatalogService):
        self._directory = directory
        self._catalog = catalog

    def get_teacher_for_offering(self, subject_id, level_id) -> OperationResult[dict]:
        # A missing teacher assignment is not an error: the sheet shows "no teacher".
        def load() -> dict:
            offering = self._catalog.require_offering(subject_id, level_id)
            teacher = self._directory.get_teacher_for_offering(offering.offering_id)
            return {"offering_id": offering.offering_id, "teacher": teacher}

        return run_operation(load, logger=logger, action="Fetching teacher for offering")

    def get_students_for_offering(self, subject_id, level_id) -> OperationResult[dict]:
        def load() -> dict:
            offering = self._catalog.require_offering(subject_id, level_id)
            students = list(self._directory.list_roster(offering.offering_id))
            return {"offering_id": offering.offering_id, "students": students}

        return run_operation(load, logger=logger, action="Fetching students for offering")

    def list_teachers(self) -> OperationResult[list]:
        return run_operation(lambda: list(self._directory.list_teachers()), logger=logger, action="Listing teachers")

    def list_students(self) -> OperationResult[list]:
        return run_operation(lambda: list(self._directory.list_students()), logger=logger, action="Listing students")

    def list_active_enrollments(self) -> OperationResult[list]:
        return run_operation(
            lambda: list(self._directory.list_active_enrollments()),
            logger=logger,
            action="Listing active enrollments",
        )
