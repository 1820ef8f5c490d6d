from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)


def _quietly(action: str, func) -> None:
    """Run a cleanup call on a possibly dead connection; driver errors are only logged."""

    try:
        func()
    except mysql.connector.Error as exc:
        logger.warning("Database %s failed: %s", action, exc)


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` for one unit of work.

    Commits on success, rolls back on error. Connector errors (including a failed
    connect) surface as ``StoreError`` carrying the driver's message.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StoreError(f"Database unavailable: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            _quietly("cursor close", cur.close)
    except mysql.connector.Error as exc:
        _quietly("rollback", conn.rollback)
        raise StoreError(str(exc)) from exc
    except Exception:
        _quietly("rollback", conn.rollback)
        raise
    finally:
        _quietly("close", conn.close)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def where_clause(clauses: List[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


def to_decimal(value: Any) -> Decimal:
    """Normalize DECIMAL columns (connector may return Decimal, float or str)."""

    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_bool(value: Any) -> bool:
    """MySQL BOOLEAN is TINYINT(1); connector returns 0/1."""

    return bool(int(value)) if value is not None else False
