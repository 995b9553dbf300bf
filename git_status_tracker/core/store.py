"""SQLite-backed status store keyed by canonical directory path."""

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

from .app_config import DEFAULT_OPEN_ATTEMPTS, STORE_FILENAME
from .errors import OpenError, SerializationError, StoreIOError
from .model import StatusRecord, canonicalize
from .record_codec import dump_record, load_record

_logger = logging.getLogger(__name__)

# Lock contention must reach the open retry loop instead of sqlite's busy handler.
_BUSY_TIMEOUT_S = 0.05


def _key(path: str) -> bytes:
    try:
        return path.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SerializationError(f"cannot encode store key {path!r}: {exc}") from exc


class RecordView:
    """Lazy view over every stored record; each iteration re-queries the store."""

    def __init__(self, store: StatusStore) -> None:
        self._store = store

    def __iter__(self) -> Iterator[StatusRecord]:
        conn = self._store._connection()
        try:
            cursor = conn.execute("SELECT record FROM statuses")
        except sqlite3.Error as exc:
            raise StoreIOError(f"cannot list statuses: {exc}") from exc
        with contextlib.closing(cursor):
            while True:
                try:
                    row = cursor.fetchone()
                except sqlite3.Error as exc:
                    raise StoreIOError(f"cannot list statuses: {exc}") from exc
                if row is None:
                    return
                yield load_record(bytes(row[0]))


class StatusStore:
    """Durable key-value store of :class:`StatusRecord` values."""

    def __init__(self, conn: sqlite3.Connection, db_path: Path) -> None:
        self._conn = conn
        self._path = db_path
        self._closed = False

    @classmethod
    def open(
        cls,
        location: str | Path,
        max_attempts: int = DEFAULT_OPEN_ATTEMPTS,
        retry_delay: float = 0.1,
    ) -> StatusStore:
        """
        Open or create the store inside directory ``location``.

        The handle holds the database write lock from open until the first
        put commits or the store is closed, so a store locked by another
        process fails the attempt. Failed attempts are retried after
        ``retry_delay`` seconds; once ``max_attempts`` attempts have failed,
        OpenError wraps the last cause.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        db_path = Path(location) / STORE_FILENAME
        attempt = 0
        while True:
            attempt += 1
            try:
                conn = cls._connect(db_path)
            except (sqlite3.Error, OSError) as exc:
                _logger.debug(
                    "Open attempt %d/%d for %s failed: %s",
                    attempt,
                    max_attempts,
                    db_path,
                    exc,
                )
                if attempt >= max_attempts:
                    raise OpenError(
                        str(location), attempts=attempt, last_error=exc
                    ) from exc
                time.sleep(retry_delay)
                continue
            return cls(conn, db_path)

    @classmethod
    def _connect(cls, db_path: Path) -> sqlite3.Connection:
        conn = sqlite3.connect(db_path, timeout=_BUSY_TIMEOUT_S)
        try:
            cls._configure_conn(conn)
            cls._ensure_schema(conn)
            conn.execute("BEGIN IMMEDIATE")
        except BaseException:
            conn.close()
            raise
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        conn.execute("PRAGMA journal_mode=WAL")
        # FULL syncs the WAL on every commit, so a returned put is on disk.
        conn.execute("PRAGMA synchronous=FULL")

    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS statuses (
                path BLOB PRIMARY KEY,
                record BLOB NOT NULL
            ) WITHOUT ROWID
            """)
        conn.commit()

    @property
    def db_path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def _connection(self) -> sqlite3.Connection:
        if self._closed:
            raise StoreIOError(f"status store {self._path} is closed")
        return self._conn

    def close(self) -> None:
        if self._closed:
            return
        self._conn.close()
        self._closed = True

    def __enter__(self) -> StatusStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def put(self, record: StatusRecord) -> None:
        """Insert or replace the record under its canonical path and sync to disk."""
        path = canonicalize(record.path)
        if path != record.path:
            record = StatusRecord(
                path=path, branch=record.branch, file_states=record.file_states
            )
        value = dump_record(record)
        conn = self._connection()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO statuses (path, record) VALUES (?, ?)",
                (_key(path), value),
            )
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StoreIOError(f"cannot store status for {path!r}: {exc}") from exc
        _logger.debug("Stored status for %s (%d bytes)", path, len(value))

    def get(self, path: str) -> StatusRecord:
        """Return the record for ``path``, or an empty record when none is stored."""
        key = canonicalize(path)
        conn = self._connection()
        try:
            row = conn.execute(
                "SELECT record FROM statuses WHERE path = ?", (_key(key),)
            ).fetchone()
        except sqlite3.Error as exc:
            raise StoreIOError(f"cannot read status for {key!r}: {exc}") from exc
        if row is None:
            return StatusRecord.empty()
        return load_record(bytes(row[0]))

    def list_all(self) -> RecordView:
        """Return a restartable view over all records in store-native order."""
        self._connection()
        return RecordView(self)
