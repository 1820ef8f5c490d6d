from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Level, Offering, OfferingRow, Subject


class CatalogRepository(Protocol):
    """Read interface over subjects, levels and their priced offerings."""

    def list_subjects(self) -> Sequence[Subject]:
        raise NotImplementedError

    def list_levels(self) -> Sequence[Level]:
        raise NotImplementedError

    def list_offering_rows(self) -> Sequence[OfferingRow]:
        raise NotImplementedError

    def get_offering(self, offering_id: int) -> Optional[Offering]:
        raise NotImplementedError

    def find_offering(self, *, subject_id: int, level_id: int) -> Optional[Offering]:
        raise NotImplementedError
