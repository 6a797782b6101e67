from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Iterable

from core.schema import SCHEMA_SQL


def connect(db_path: Path | str) -> sqlite3.Connection:
    # Streamlit reruns page scripts on worker threads; one connection is shared.
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def ensure_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def q(conn: sqlite3.Connection, sql: str, params: Iterable[Any] = ()) -> list[sqlite3.Row]:
    cur = conn.execute(sql, tuple(params))
    rows = cur.fetchall()
    cur.close()
    return rows


def x(conn: sqlite3.Connection, sql: str, params: Iterable[Any] = ()) -> int:
    cur = conn.execute(sql, tuple(params))
    conn.commit()
    last = cur.lastrowid
    cur.close()
    return int(last or 0)


def changes(conn: sqlite3.Connection, sql: str, params: Iterable[Any] = ()) -> int:
    """Like x(), but returns the number of rows the statement touched."""
    cur = conn.execute(sql, tuple(params))
    conn.commit()
    n = cur.rowcount
    cur.close()
    return int(n)
