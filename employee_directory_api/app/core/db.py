"""
SQLite database integration and simple migration system.

The document store keeps one table per record kind.  Each row holds the
JSON document, the record id and a copy of the document's ``email``
under a UNIQUE constraint, so duplicate emails are rejected by the
database itself rather than by a check-then-insert sequence.

This module provides functions for resolving the database path,
obtaining a connection (``get_connection``) and applying migrations on
application start (``init_db``).  Applied versions are recorded in the
``migrations`` table and new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

# Migration list: (version, script).  Append new entries with an
# incremented version number; never edit an applied one.
MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            document TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS employees (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            document TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    (
        2,
        """
        -- Search filters on these two document fields
        CREATE INDEX IF NOT EXISTS idx_employees_designation
            ON employees (json_extract(document, '$.designation'));
        CREATE INDEX IF NOT EXISTS idx_employees_department
            ON employees (json_extract(document, '$.department'));
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are used as is.  Relative paths are
    resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    """
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits and closes the connection on exit."""
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(database_path: str) -> int:
    """Initialise the database and apply pending migrations.

    Returns the schema version after the run.
    """
    with get_cursor(database_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s to %s", version, database_path)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
