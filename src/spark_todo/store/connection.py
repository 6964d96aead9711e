# src/spark_todo/store/connection.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

from .errors import ConstraintError, StorageError, StoreAlreadyOpenError, StoreClosedError, StoreOpenError

logger = logging.getLogger(__name__)

SQLParams = Sequence[Any]

DEFAULT_BUSY_TIMEOUT_MS = 5000

# Resolved paths with a live Database in this process.
_open_paths: set[Path] = set()
_open_paths_lock = threading.Lock()


class Database:
    """
    The single SQLite connection behind a TodoStore.

    - one connection per file per process (a second open() of the same path fails)
    - foreign keys on, busy_timeout for lock contention, WAL journal
    - every statement runs under one lock, so the connection serializes callers
      the same way a pool of size one would

    The connection itself never leaves this object; repositories go through
    execute()/fetch_*() which wrap sqlite3 errors into StorageError.
    """

    def __init__(self, path: Path, conn: sqlite3.Connection) -> None:
        self._path = path
        self._conn: sqlite3.Connection | None = conn
        self._lock = threading.RLock()

    @classmethod
    def open(cls, path: str | Path, *, busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS) -> Database:
        if not str(path).strip():
            raise StoreOpenError("open", "db path is empty")

        try:
            resolved = Path(path).expanduser().resolve()
            resolved.parent.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError, RuntimeError) as exc:
            # ValueError: embedded NUL byte; RuntimeError: symlink loop on older Pythons.
            logger.error("Cannot resolve db path %s: %s", path, exc)
            raise StoreOpenError("resolve db path") from exc

        with _open_paths_lock:
            if resolved in _open_paths:
                raise StoreAlreadyOpenError(str(resolved))
            _open_paths.add(resolved)

        try:
            conn = sqlite3.connect(
                str(resolved),
                timeout=max(0, busy_timeout_ms) / 1000.0,
                check_same_thread=False,
            )
        except sqlite3.Error as exc:
            _release(resolved)
            logger.error("Cannot open sqlite db %s: %s", resolved, exc)
            raise StoreOpenError("open sqlite db") from exc

        conn.row_factory = sqlite3.Row
        try:
            _apply_pragmas(conn, busy_timeout_ms)
        except sqlite3.Error as exc:
            conn.close()
            _release(resolved)
            logger.error("Cannot configure sqlite db %s: %s", resolved, exc)
            raise StoreOpenError("apply pragmas") from exc

        logger.debug("Database opened path=%s", resolved)
        return cls(resolved, conn)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        with self._lock:
            conn, self._conn = self._conn, None
            if conn is None:
                return
            try:
                conn.close()
            finally:
                _release(self._path)
        logger.debug("Database closed path=%s", self._path)

    # ---- statements ----

    def execute(self, sql: str, params: SQLParams = (), *, operation: str) -> sqlite3.Cursor:
        """Run one statement and commit it. The cursor is only good for rowcount/lastrowid."""
        with self._lock, self._translate(operation):
            conn = self._require_conn()
            with conn:
                return conn.execute(sql, params)

    def fetch_all(self, sql: str, params: SQLParams = (), *, operation: str) -> list[sqlite3.Row]:
        with self._lock, self._translate(operation):
            return self._require_conn().execute(sql, params).fetchall()

    def fetch_one(self, sql: str, params: SQLParams = (), *, operation: str) -> sqlite3.Row | None:
        with self._lock, self._translate(operation):
            return self._require_conn().execute(sql, params).fetchone()

    @contextlib.contextmanager
    def transaction(self, *, operation: str) -> Iterator[sqlite3.Cursor]:
        """All-or-nothing block for units of work that need more than one write."""
        with self._lock, self._translate(operation):
            conn = self._require_conn()
            with conn:
                yield conn.cursor()

    # ---- introspection ----

    def table_exists(self, table: str) -> bool:
        row = self.fetch_one(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table,),
            operation=f"inspect table {table}",
        )
        return row is not None

    def index_exists(self, index: str) -> bool:
        row = self.fetch_one(
            "SELECT 1 FROM sqlite_master WHERE type = 'index' AND name = ?",
            (index,),
            operation=f"inspect index {index}",
        )
        return row is not None

    def table_columns(self, table: str) -> set[str]:
        rows = self.fetch_all(f"PRAGMA table_info({table})", operation=f"read {table} schema")
        return {row["name"] for row in rows}

    # ---- internals ----

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError()
        return self._conn

    @contextlib.contextmanager
    def _translate(self, operation: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.IntegrityError as exc:
            errorname = getattr(exc, "sqlite_errorname", "") or "SQLITE_CONSTRAINT"
            logger.debug("%s hit constraint %s: %s", operation, errorname, exc)
            raise ConstraintError(operation, errorname) from exc
        except sqlite3.Error as exc:
            logger.error("%s failed db=%s: %s", operation, self._path, exc)
            raise StorageError(operation) from exc


def _apply_pragmas(conn: sqlite3.Connection, busy_timeout_ms: int) -> None:
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute(f"PRAGMA busy_timeout = {int(max(0, busy_timeout_ms))}")
    (mode,) = conn.execute("PRAGMA journal_mode = WAL").fetchone()
    logger.debug("journal_mode=%s", mode)


def _release(path: Path) -> None:
    with _open_paths_lock:
        _open_paths.discard(path)
