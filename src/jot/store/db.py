"""
SQLite storage for jot.

This module provides persistent storage for thoughts in a single SQLite
database file.

Design Principles:
    - Append-mostly: Rows are inserted, then at most soft-deleted once
    - No hard deletes: Deleted rows stay in the file with deleted_at set
    - Timestamps are assigned by the database, in UTC with milliseconds
    - Idempotent schema: Opening an existing store never alters its data

Tables:
    - thoughts: One row per thought (id, text, created_at, deleted_at)
    - schema_version: Schema version the file was created with

Threading:
    A ThoughtStore is not shared between threads. The connection keeps
    sqlite3's same-thread check; open one store per thread or process.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from jot.errors import (
    StorageConnectionError,
    StorageReadError,
    StorageWriteError,
    StoreClosedError,
    ThoughtConstraintError,
)
from jot.schema import DEFAULT_LIST_LIMIT, Thought

logger = logging.getLogger(__name__)

# Schema version recorded on first initialization
SCHEMA_VERSION = 1

# SQLite expression for "now" in the stored timestamp format
NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

# SQL for creating tables
CREATE_TABLES_SQL = f"""
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT ({NOW_SQL})
);

-- Thoughts table: AUTOINCREMENT so ids are never reused
CREATE TABLE IF NOT EXISTS thoughts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    text TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({NOW_SQL}),
    deleted_at TEXT
);

-- Indexes for listing and the active/deleted filter
CREATE INDEX IF NOT EXISTS idx_thoughts_created_at ON thoughts (created_at DESC);
CREATE INDEX IF NOT EXISTS idx_thoughts_deleted_at ON thoughts (deleted_at);
"""

THOUGHT_COLUMNS = "id, text, created_at, deleted_at"


class ThoughtStore:
    """
    SQLite database holding thoughts.

    Usage:
        store = ThoughtStore("jot.db")
        thought_id = store.add_thought("buy milk")
        store.list_thoughts(limit=5)
        store.soft_delete(thought_id)
        store.close()

    Or use as context manager:
        with ThoughtStore("jot.db") as store:
            ...
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Open the database and make sure the schema exists.

        Args:
            db_path: Path to the SQLite database file.
                     Will be created if it doesn't exist.
        """
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._connect()
        try:
            self._init_schema()
        except Exception:
            self.close()
            raise

    def _connect(self) -> None:
        """Establish database connection."""
        try:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            raise StorageConnectionError(
                db_path=str(self.db_path),
                operation="connect",
                message=f"Failed to connect to database: {e}",
            ) from e
        logger.debug("Opened thought store %s", self.db_path)

    def _init_schema(self) -> None:
        """Initialize database schema if needed."""
        conn = self._require_conn("init_schema")
        try:
            cursor = conn.executescript(CREATE_TABLES_SQL)
            cursor.close()

            row = conn.execute(
                "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
            ).fetchone()
            if row is None:
                conn.execute(
                    "INSERT INTO schema_version (version) VALUES (?)",
                    (SCHEMA_VERSION,),
                )
            conn.commit()
        except sqlite3.Error as e:
            # A file that isn't a database, or one we can't write to,
            # surfaces here rather than in connect()
            raise StorageConnectionError(
                db_path=str(self.db_path),
                operation="init_schema",
                message=f"Failed to initialize database: {e}",
            ) from e

    def _require_conn(self, operation: str) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError(operation=operation)
        return self._conn

    @property
    def closed(self) -> bool:
        return self._conn is None

    @contextmanager
    def transaction(self, operation: str) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database transactions."""
        conn = self._require_conn(operation)
        try:
            yield conn
            conn.commit()
        except Exception:
            # A failed write must not ride along with the next commit
            conn.rollback()
            raise

    def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        if self._conn:
            self._conn.close()
            self._conn = None
            logger.debug("Closed thought store %s", self.db_path)

    def __enter__(self) -> "ThoughtStore":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager."""
        self.close()

    # =========================================================================
    # Thought Operations
    # =========================================================================

    def add_thought(self, text: str) -> int:
        """
        Insert a new thought.

        The text is stored verbatim; trimming and rejecting empty input is
        the caller's job.

        Args:
            text: The note to store

        Returns:
            The new id, greater than every id this store has handed out

        Raises:
            ThoughtConstraintError: If text is None
        """
        try:
            with self.transaction("add_thought") as conn:
                cursor = conn.execute(
                    "INSERT INTO thoughts (text) VALUES (?)",
                    (text,),
                )
        except sqlite3.IntegrityError as e:
            raise ThoughtConstraintError(
                operation="add_thought",
                underlying_error=str(e),
            ) from e
        except sqlite3.Error as e:
            raise StorageWriteError(
                operation="add_thought",
                underlying_error=str(e),
            ) from e

        thought_id = cursor.lastrowid
        logger.debug("Added thought #%s", thought_id)
        return thought_id

    def list_thoughts(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Thought]:
        """
        List active thoughts, most recent first.

        Thoughts created in the same millisecond are ordered by descending id.

        Args:
            limit: Maximum number of thoughts; negative means no limit,
                   zero returns an empty list

        Returns:
            List of Thought objects
        """
        conn = self._require_conn("list_thoughts")
        query = (
            f"SELECT {THOUGHT_COLUMNS} FROM thoughts "
            "WHERE deleted_at IS NULL "
            "ORDER BY created_at DESC, id DESC"
        )
        params: tuple[Any, ...] = ()
        if limit >= 0:
            query += " LIMIT ?"
            params = (limit,)

        try:
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="list_thoughts",
                underlying_error=str(e),
            ) from e
        return [Thought.from_row(row) for row in rows]

    def get_thought(self, thought_id: int) -> Thought | None:
        """
        Get a thought by id, whether active or deleted.

        Returns:
            Thought object or None if not found
        """
        conn = self._require_conn("get_thought")
        try:
            row = conn.execute(
                f"SELECT {THOUGHT_COLUMNS} FROM thoughts WHERE id = ?",
                (thought_id,),
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="get_thought",
                underlying_error=str(e),
            ) from e
        if row is None:
            return None
        return Thought.from_row(row)

    def count_thoughts(self, include_deleted: bool = False) -> int:
        """Count stored thoughts (active only unless include_deleted)."""
        conn = self._require_conn("count_thoughts")
        query = "SELECT COUNT(*) FROM thoughts"
        if not include_deleted:
            query += " WHERE deleted_at IS NULL"
        try:
            return conn.execute(query).fetchone()[0]
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="count_thoughts",
                underlying_error=str(e),
            ) from e

    def soft_delete(self, thought_id: int) -> bool:
        """
        Mark a thought as deleted.

        Only an existing, active thought is changed.

        Args:
            thought_id: The thought to delete

        Returns:
            True if the thought went from active to deleted, False if it
            does not exist or was already deleted
        """
        try:
            with self.transaction("soft_delete") as conn:
                cursor = conn.execute(
                    f"UPDATE thoughts SET deleted_at = {NOW_SQL} "
                    "WHERE id = ? AND deleted_at IS NULL",
                    (thought_id,),
                )
        except sqlite3.Error as e:
            raise StorageWriteError(
                operation="soft_delete",
                underlying_error=str(e),
            ) from e

        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("Soft-deleted thought #%s", thought_id)
        else:
            logger.debug("Thought #%s not found or already deleted", thought_id)
        return deleted
