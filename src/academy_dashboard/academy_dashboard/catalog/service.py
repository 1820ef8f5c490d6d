from __future__ import annotations

import logging
from dataclasses import asdict

from ..common.validators import require_positive_id
from ..core.exceptions import NotFoundError
from ..core.result import OperationResult, run_operation
from .model import Offering
from .repository import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, catalog: CatalogRepository):
        self._catalog = catalog

    def list_subjects_and_levels(self) -> OperationResult[dict]:
        def load() -> dict:
            return {
                "subjects": [asdict(s) for s in self._catalog.list_subjects()],
                "levels": [asdict(lv) for lv in self._catalog.list_levels()],
            }

        return run_operation(load, logger=logger, action="Listing subjects and levels")

    def list_offerings_with_pricing(self) -> OperationResult[list]:
        return run_operation(
            lambda: list(self._catalog.list_offering_rows()),
            logger=logger,
            action="Listing offerings",
        )

    def require_offering(self, subject_id, level_id) -> Offering:
        offering = self._catalog.find_offering(
            subject_id=require_positive_id(subject_id, "subject_id"),
            level_id=require_positive_id(level_id, "level_id"),
        )
        if not offering:
            raise NotFoundError("Subject-level combination not found")
        return offering

    def resolve_offering(self, subject_id, level_id) -> OperationResult[int]:
        return run_operation(
            lambda: self.require_offering(subject_id, level_id).offering_id,
            logger=logger,
            action="Resolving offering",
        )
