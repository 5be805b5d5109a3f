from __future__ import annotations

import hashlib
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

import numpy as np
import pandas as pd

from .utils import ensure_dir, quote_identifier

_SCHEMA = """
CREATE TABLE IF NOT EXISTS table_catalog (
    table_name TEXT PRIMARY KEY,
    physical_name TEXT NOT NULL,
    column_count INTEGER NOT NULL,
    row_count INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS table_columns (
    table_name TEXT NOT NULL,
    column_id INTEGER NOT NULL,
    safe_name TEXT NOT NULL,
    original_name TEXT NOT NULL,
    PRIMARY KEY (table_name, column_id),
    FOREIGN KEY (table_name) REFERENCES table_catalog(table_name) ON DELETE CASCADE
);
"""


class MemoryRowStore:
    """Named tables held as lists of rows, header row first."""

    def __init__(self, tables: dict[str, list[list[Any]]] | None = None) -> None:
        self.tables: dict[str, list[list[Any]]] = {}
        for name, rows in (tables or {}).items():
            self.tables[name] = [list(row) for row in rows]

    def read_table(self, name: str) -> list[list[Any]] | None:
        rows = self.tables.get(name)
        if rows is None:
            return None
        return [list(row) for row in rows]

    def write_table(self, name: str, headers: list[str], rows: list[list[Any]]) -> None:
        self.tables.pop(name, None)
        if not headers:
            return
        self.tables[name] = [list(headers)] + [list(row) for row in rows]


def _physical_name(name: str) -> str:
    digest = hashlib.sha256(name.encode("utf-8")).hexdigest()[:16]
    return f"rows_{digest}"


def _sqlite_value(value: Any) -> Any:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class SqliteRowStore:
    """Row store backed by one sqlite file.

    Each named table gets a physical table with columns ``c1..cN`` ordered by
    ``row_index``; the header text lives in ``table_columns`` so any header,
    including ones that are not valid identifiers, survives a round trip.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        ensure_dir(self.db_path.parent)
        with self.connection() as conn:
            conn.executescript(_SCHEMA)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False, timeout=30.0)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
        conn.execute("PRAGMA busy_timeout = 30000")
        return conn

    @contextmanager
    def connection(self) -> Iterable[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def list_tables(self) -> list[str]:
        with self.connection() as conn:
            cur = conn.execute("SELECT table_name FROM table_catalog ORDER BY table_name")
            return [row["table_name"] for row in cur.fetchall()]

    def fetch_columns(self, name: str, conn: sqlite3.Connection | None = None) -> list[dict[str, Any]]:
        if conn is None:
            with self.connection() as conn:
                return self.fetch_columns(name, conn)
        cur = conn.execute(
            "SELECT column_id, safe_name, original_name FROM table_columns "
            "WHERE table_name = ? ORDER BY column_id",
            (name,),
        )
        return [dict(row) for row in cur.fetchall()]

    def read_table(self, name: str) -> list[list[Any]] | None:
        with self.connection() as conn:
            entry = conn.execute(
                "SELECT physical_name FROM table_catalog WHERE table_name = ?", (name,)
            ).fetchone()
            if entry is None:
                return None
            columns = self.fetch_columns(name, conn)
            headers = [col["original_name"] for col in columns]
            quoted = ", ".join(quote_identifier(col["safe_name"]) for col in columns)
            frame = pd.read_sql_query(
                f"SELECT {quoted} FROM {quote_identifier(entry['physical_name'])} "
                "ORDER BY row_index",
                conn,
            )
        frame = frame.astype(object).where(frame.notna(), None)
        return [headers] + frame.values.tolist()

    def write_table(self, name: str, headers: list[str], rows: list[list[Any]]) -> None:
        physical = _physical_name(name)
        with self.connection() as conn:
            conn.execute(f"DROP TABLE IF EXISTS {quote_identifier(physical)}")
            conn.execute("DELETE FROM table_catalog WHERE table_name = ?", (name,))
            if not headers:
                return
            width = max([len(headers)] + [len(row) for row in rows])
            safe = [f"c{idx}" for idx in range(1, width + 1)]
            labels = [str(h) for h in headers] + [""] * (width - len(headers))
            column_sql = ", ".join(quote_identifier(col) for col in safe)
            conn.execute(
                f"CREATE TABLE {quote_identifier(physical)} "
                f"(row_index INTEGER PRIMARY KEY, {column_sql})"
            )
            conn.execute(
                "INSERT INTO table_catalog (table_name, physical_name, column_count, row_count) "
                "VALUES (?, ?, ?, ?)",
                (name, physical, width, len(rows)),
            )
            conn.executemany(
                "INSERT INTO table_columns (table_name, column_id, safe_name, original_name) "
                "VALUES (?, ?, ?, ?)",
                [(name, idx, col, label) for idx, (col, label) in enumerate(zip(safe, labels), start=1)],
            )
            placeholders = ", ".join("?" for _ in range(width + 1))
            conn.executemany(
                f"INSERT INTO {quote_identifier(physical)} (row_index, {column_sql}) "
                f"VALUES ({placeholders})",
                [
                    (idx, *[_sqlite_value(v) for v in row], *([None] * (width - len(row))))
                    for idx, row in enumerate(rows)
                ],
            )


def import_csv(store: Any, name: str, path: Path | str) -> int:
    """Load a CSV export of a source table; cells stay text until ingest."""

    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    # Short lines still come back as NaN for the missing trailing fields.
    frame = frame.astype(object).where(frame.notna(), None)
    store.write_table(name, [str(col) for col in frame.columns], frame.values.tolist())
    return len(frame)
