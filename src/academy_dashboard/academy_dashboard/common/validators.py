from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def require_positive_id(value: Any, field_name: str) -> int:
    # bool is an int subclass; floats like 1.9 would truncate silently
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} is not a valid id")
    try:
        parsed = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} is not a valid id") from None
    if parsed <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return parsed


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_positive_id(value, field_name)


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return parse_iso_date(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return require_date(value, field_name)


def require_month(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not _MONTH_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be in YYYY-MM format")
    return value.strip()


def require_non_negative_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a valid amount") from None
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be non-negative")
    return amount
