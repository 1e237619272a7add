from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor) inside one transaction."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception as exc:
        logger.warning("[db] transaction rolled back: %s", exc)
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def upsert_statement(table: str, columns: Sequence[str], *, id_column: str, keys: Sequence[str]) -> str:
    """INSERT ... ON DUPLICATE KEY UPDATE for a table with a natural unique key.

    ``keys`` are left untouched on update. The id column is routed through
    LAST_INSERT_ID so ``cursor.lastrowid`` is the row id on insert and update.
    """
    updates = [f"{id_column}=LAST_INSERT_ID({id_column})"]
    updates += [f"{c}=VALUES({c})" for c in columns if c not in keys]
    placeholders = ",".join(["%s"] * len(columns))
    return (
        f"INSERT INTO {table}({', '.join(columns)}) VALUES({placeholders}) "
        f"ON DUPLICATE KEY UPDATE {', '.join(updates)}"
    )


def decimal_column(value: Any) -> Decimal:
    """DECIMAL/NULL column to Decimal; NULL money reads as zero."""
    return Decimal(str(value)) if value is not None else Decimal("0")


def int_column(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def time_column(value: Any) -> Optional[time]:
    """Punch clock column to ``time``.

    The pure connector hands TIME back as a ``timedelta`` since midnight.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % _SECONDS_PER_DAY
        return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)
    if isinstance(value, str):
        hh, mm, *rest = value.strip().split(":") + [""]
        if not mm:
            raise ValueError(f"Invalid punch time: {value!r}")
        return time(int(hh), int(mm), int(rest[0]) if rest and rest[0] else 0)
    raise TypeError(f"Unsupported TIME value: {type(value)!r}")
