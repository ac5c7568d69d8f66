"""
SQLite‑backed document store with a simple migration system.

Every collection (users, tasks, tags, events, activities, invites) is
a table of JSON documents: the full document lives in the ``body``
column and services filter on its fields with ``json_extract``.  The
``id``/``created_at``/``updated_at`` columns duplicate the matching
document fields so that lookups and recency ordering can use indices.

A new connection is opened for every operation; there are no
transactions spanning several documents.  Migrations are stored in the
``migrations`` table and applied in order the first time the store is
used.
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

Document = Dict[str, Any]

COLLECTIONS = ("users", "tasks", "tags", "events", "activities", "invites")


def _collection_table(name: str) -> str:
    return f"""
    CREATE TABLE IF NOT EXISTS {name} (
        id TEXT PRIMARY KEY,
        body TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: one table per collection
    (1, "".join(_collection_table(name) for name in COLLECTIONS)),
    # Migration 2: lookup indices on the fields services filter by
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email ON users(json_extract(body, '$.email'));
        CREATE INDEX IF NOT EXISTS idx_tasks_owner ON tasks(json_extract(body, '$.owner.id'));
        CREATE INDEX IF NOT EXISTS idx_tags_user ON tags(json_extract(body, '$.user_id'));
        CREATE INDEX IF NOT EXISTS idx_events_user ON events(json_extract(body, '$.user_id'));
        CREATE INDEX IF NOT EXISTS idx_activities_user ON activities(json_extract(body, '$.user_id'), created_at);
        CREATE INDEX IF NOT EXISTS idx_invites_recipient ON invites(json_extract(body, '$.recipient_email'));
        """,
    ),
]


def new_id() -> str:
    """Return a fresh document identifier."""
    return uuid.uuid4().hex


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class DocumentStore:
    """Generic JSON document persistence on top of SQLite."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)
        self._migrated = False

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------
    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that is committed and closed on exit."""
        if not self._migrated:
            self.migrate()
        conn = self._open()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def migrate(self) -> None:
        """Create the schema and apply pending migrations."""
        conn = self._open()
        try:
            cursor = conn.cursor()
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
            conn.commit()
        finally:
            conn.close()
        self._migrated = True

    # ------------------------------------------------------------------
    # Document operations
    # ------------------------------------------------------------------
    @staticmethod
    def _table(collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection {collection!r}")
        return collection

    @staticmethod
    def _load(row: sqlite3.Row) -> Document:
        return json.loads(row["body"])

    def insert(self, collection: str, document: Document) -> Document:
        """Insert a document, assigning ``id`` and timestamps when missing."""
        table = self._table(collection)
        doc = dict(document)
        doc.setdefault("id", new_id())
        now = utcnow()
        doc.setdefault("created_at", now)
        doc["updated_at"] = now
        with self.connection() as conn:
            conn.execute(
                f"INSERT INTO {table} (id, body, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (doc["id"], json.dumps(doc), doc["created_at"], doc["updated_at"]),
            )
        return doc

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        table = self._table(collection)
        with self.connection() as conn:
            row = conn.execute(f"SELECT body FROM {table} WHERE id = ?", (doc_id,)).fetchone()
        return self._load(row) if row else None

    def find(
        self,
        collection: str,
        where: str = "",
        params: Sequence[Any] = (),
        order_by: str = "rowid ASC",
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Document]:
        """Return documents matching a SQL ``where`` clause over ``body``.

        ``where`` and ``order_by`` are written by services, never taken
        from request data; values always travel through ``params``.
        """
        table = self._table(collection)
        query = f"SELECT body FROM {table}"
        values: list[Any] = list(params)
        if where:
            query += f" WHERE {where}"
        query += f" ORDER BY {order_by}"
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            values.extend([limit, offset])
        with self.connection() as conn:
            rows = conn.execute(query, tuple(values)).fetchall()
        return [self._load(row) for row in rows]

    def find_one(self, collection: str, where: str, params: Sequence[Any] = ()) -> Optional[Document]:
        found = self.find(collection, where, params, limit=1)
        return found[0] if found else None

    def replace(self, collection: str, document: Document) -> Optional[Document]:
        """Overwrite the stored document with the same ``id``.

        Returns the stored document, or ``None`` if no document with
        that id exists.
        """
        table = self._table(collection)
        doc = dict(document)
        doc["updated_at"] = utcnow()
        with self.connection() as conn:
            cursor = conn.execute(
                f"UPDATE {table} SET body = ?, updated_at = ? WHERE id = ?",
                (json.dumps(doc), doc["updated_at"], doc["id"]),
            )
            if cursor.rowcount == 0:
                return None
        return doc

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; return whether a row was removed."""
        table = self._table(collection)
        with self.connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (doc_id,))
            return cursor.rowcount > 0
