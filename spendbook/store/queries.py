"""Key-value record queries."""

import sqlite3
from collections.abc import Mapping
from contextlib import closing
from pathlib import Path

from spendbook.store.schema import get_db_path, init_database


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory, creating the schema if needed.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    init_database(db_path)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def read_record(key: str, db_path: Path | None = None) -> str | None:
    """Read the raw payload stored under a key.

    Args:
        key: Record key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored payload, or None if the key is missing.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM records WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row["value"] if row else None


def write_records(records: Mapping[str, str], db_path: Path | None = None) -> None:
    """Overwrite one or more payloads in a single transaction.

    Either every record is written or none is.

    Args:
        records: Mapping of key to payload.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.executemany(
                """
                INSERT INTO records (key, value, updated_at) VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                list(records.items()),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def write_record(key: str, payload: str, db_path: Path | None = None) -> None:
    """Overwrite the payload stored under a key.

    Args:
        key: Record key.
        payload: Payload to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    write_records({key: payload}, db_path)

