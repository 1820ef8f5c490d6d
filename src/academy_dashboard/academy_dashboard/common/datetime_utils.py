from __future__ import annotations

from datetime import date, datetime

from ..core.constants import MONTH_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_key(day: date) -> str:
    return day.strftime(MONTH_FORMAT)


def month_start(day: date) -> date:
    return day.replace(day=1)
