from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import WriteError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def db_write(conn_factory: DatabaseConnection, *, what: str):
    """One write unit of work: commit everything or roll everything back.

    Connector failures surface as WriteError so services never see driver types.
    """
    try:
        with db_cursor(conn_factory) as (conn, cur):
            yield conn, cur
    except mysql.connector.Error as e:
        raise WriteError(f"Could not save {what}: {e}") from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal(value: Any) -> Decimal:
    """Normalize DECIMAL/float/str column values into Decimal."""

    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Half-open ``[start 00:00, end+1 00:00)`` bounds for a DATETIME column."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)
