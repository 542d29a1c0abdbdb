"""
JSON document collection stored in SQLite.

Each record kind lives in its own table (see ``core.db``).  The full
document is kept as JSON text; ``id`` and ``email`` are mirrored into
columns so that lookups by id are direct and email uniqueness is
enforced by a UNIQUE constraint.  Equality filters on any other field
are evaluated with ``json_extract``.

All queries use parameterized statements.  Table and field names are
checked against an identifier pattern before being interpolated.
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from employee_directory_api.app.core.db import get_connection
from employee_directory_api.app.core.exceptions import ConflictError, StorageError

from .base import Document

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid field name: {name!r}")
    return name


class SQLiteCollection:
    """``DocumentCollection`` backed by one SQLite table."""

    def __init__(self, database_path: str, table: str, conflict_message: str = "Duplicate email") -> None:
        self.database_path = database_path
        self.table = _check_identifier(table)
        # Message of the ConflictError raised when the email constraint fires
        self.conflict_message = conflict_message
        self.logger = logging.getLogger(__name__)

    async def find_one(self, filter: Document) -> Optional[Document]:
        rows = self._select(filter, limit=1)
        return rows[0] if rows else None

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        rows = self._select({"id": document_id}, limit=1)
        return rows[0] if rows else None

    async def find(self, filter: Optional[Document] = None) -> List[Document]:
        return self._select(filter or {})

    async def save(self, document: Document) -> Document:
        """Insert a new document or replace the stored one with the same id.

        Returns a copy of the document including its ``id``.
        """
        stored = dict(document)
        document_id = stored.get("id")
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connect()
        try:
            cursor = conn.cursor()
            existing = None
            if document_id:
                existing = cursor.execute(
                    f"SELECT id FROM {self.table} WHERE id = ?", (document_id,)
                ).fetchone()
            if existing:
                cursor.execute(
                    f"UPDATE {self.table} SET email = ?, document = ?, updated_at = ? WHERE id = ?",
                    (stored.get("email"), self._dumps(stored), now, document_id),
                )
            else:
                stored["id"] = document_id or uuid.uuid4().hex
                cursor.execute(
                    f"INSERT INTO {self.table} (id, email, document, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                    (stored["id"], stored.get("email"), self._dumps(stored), now, now),
                )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            self.logger.info("Rejected write to %s: %s", self.table, exc)
            raise ConflictError(self.conflict_message) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            self.logger.exception("Failed to save document in %s", self.table)
            raise StorageError(f"Failed to save {self.table} record") from exc
        finally:
            conn.close()
        return stored

    async def delete_by_id(self, document_id: str) -> bool:
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {self.table} WHERE id = ?", (document_id,))
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            self.logger.exception("Failed to delete %s from %s", document_id, self.table)
            raise StorageError(f"Failed to delete {self.table} record") from exc
        finally:
            conn.close()
        return affected > 0

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_connection(self.database_path)
        except sqlite3.Error as exc:
            self.logger.exception("Cannot open database %s", self.database_path)
            raise StorageError("Database unavailable") from exc

    def _select(self, filter: Document, limit: Optional[int] = None) -> List[Document]:
        where, params = self._where(filter)
        sql = f"SELECT document FROM {self.table}{where} ORDER BY created_at ASC, rowid ASC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        conn = self._connect()
        try:
            rows = conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            self.logger.exception("Query on %s failed", self.table)
            raise StorageError(f"Failed to read {self.table} records") from exc
        finally:
            conn.close()
        return [json.loads(row["document"]) for row in rows]

    @staticmethod
    def _where(filter: Document) -> Tuple[str, List[Any]]:
        clauses = []
        params: List[Any] = []
        for field, value in filter.items():
            _check_identifier(field)
            if field in ("id", "email"):
                clauses.append(f"{field} = ?")
            else:
                clauses.append("json_extract(document, ?) = ?")
                params.append(f"$.{field}")
            params.append(value)
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    @staticmethod
    def _dumps(document: Document) -> str:
        return json.dumps(document, default=str, ensure_ascii=False)
