"""
SQLite database integration and simple migration system.

The ``Database`` object is the process-wide store handle.  It is
created by the application factory, opened on startup (which applies
pending migrations) and closed on shutdown; request handlers receive
it through dependency injection.  Each store operation opens its own
short-lived connection so that operations running in worker threads
never share a connection.

Lessons are indexed for full-text search with an FTS5 table that
triggers keep in sync with the ``lessons`` table.  Documents are
addressed by 24 character hexadecimal identifiers generated by
``new_object_id``; ``parse_object_id`` validates identifiers received
from clients before they reach the store.
"""

import logging
import os
import re
import secrets
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import InvalidIdentifierFormat, StoreUnavailable


logger = logging.getLogger(__name__)

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

# Largest value an INTEGER column (or a bound parameter) can hold.
SQLITE_MAX_INTEGER = 2**63 - 1

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: lessons, orders and the lesson text index
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS lessons (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            subject TEXT DEFAULT '',
            location TEXT DEFAULT '',
            price REAL DEFAULT 0,
            spaces INTEGER NOT NULL DEFAULT 0 CHECK (spaces >= 0),
            attributes TEXT NOT NULL DEFAULT '{}'
        );

        CREATE TABLE IF NOT EXISTS orders (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            lessons TEXT NOT NULL,
            date TIMESTAMP NOT NULL,
            status TEXT NOT NULL DEFAULT 'confirmed'
        );

        CREATE VIRTUAL TABLE IF NOT EXISTS lessons_fts USING fts5(
            subject,
            location,
            content='lessons',
            content_rowid='seq',
            tokenize='porter unicode61'
        );

        CREATE TRIGGER IF NOT EXISTS lessons_fts_insert AFTER INSERT ON lessons BEGIN
            INSERT INTO lessons_fts(rowid, subject, location)
            VALUES (new.seq, new.subject, new.location);
        END;

        CREATE TRIGGER IF NOT EXISTS lessons_fts_delete AFTER DELETE ON lessons BEGIN
            INSERT INTO lessons_fts(lessons_fts, rowid, subject, location)
            VALUES ('delete', old.seq, old.subject, old.location);
        END;

        CREATE TRIGGER IF NOT EXISTS lessons_fts_update AFTER UPDATE OF subject, location ON lessons BEGIN
            INSERT INTO lessons_fts(lessons_fts, rowid, subject, location)
            VALUES ('delete', old.seq, old.subject, old.location);
            INSERT INTO lessons_fts(rowid, subject, location)
            VALUES (new.seq, new.subject, new.location);
        END;
        """,
    ),
]


def new_object_id() -> str:
    """Generate a new 24 character hexadecimal document identifier."""
    return secrets.token_hex(12)


def parse_object_id(raw: object) -> str:
    """Validate a client supplied identifier and return it normalised.

    Raises ``InvalidIdentifierFormat`` unless ``raw`` is a string of
    exactly 24 hexadecimal characters.
    """
    if not isinstance(raw, str) or not _OBJECT_ID_RE.match(raw):
        raise InvalidIdentifierFormat(f"Invalid identifier format: {raw!r}")
    return raw.lower()


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the package root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # activity_booking_api/
    return str((base_dir / database_url).resolve())


class Database:
    """Process-scoped handle on the SQLite store."""

    def __init__(self, path: str, timeout: float = 5.0) -> None:
        self.path = path
        self.timeout = timeout
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def _raw_connection(self) -> sqlite3.Connection:
        # Autocommit mode: write transactions are opened explicitly with
        # BEGIN IMMEDIATE in ``transaction``.
        conn = sqlite3.connect(self.path, timeout=self.timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        return conn

    def open(self) -> None:
        """Apply pending migrations and mark the store as usable."""
        conn = self._raw_connection()
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            apply_migrations(conn)
        finally:
            conn.close()
        self._is_open = True
        logger.info("Database ready at %s", self.path)

    def close(self) -> None:
        self._is_open = False
        logger.info("Database connection closed")

    def connect(self) -> sqlite3.Connection:
        if not self._is_open:
            raise StoreUnavailable("Database client not initialised")
        return self._raw_connection()

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor on a fresh connection and close it on exit."""
        conn = self.connect()
        try:
            yield conn.cursor()
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a write transaction.

        The transaction takes the write lock up front so that a read
        followed by a write inside it cannot deadlock with another
        writer.  It commits on success and rolls back on any error.
        """
        conn = self.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn.cursor()
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()


def apply_migrations(conn: sqlite3.Connection) -> None:
    """Create the ``migrations`` table and apply any newer migrations."""
    conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
    current_version = row["version"] if row and row["version"] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            conn.executescript(sql)
            conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version
            logger.info("Applied migration %d", version)
