"""Connection Pool - Shared SQLite connection pool.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

The pool is constructed once at startup and passed to whatever needs
it; there is no module-level instance.
"""

from __future__ import annotations

import logging
import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class DatabaseConfig:
    """Database pool configuration."""

    database: str = "servicio_fotografia.db"
    pool_size: int = 5
    timeout: float = 5.0

    @classmethod
    def from_env(cls, prefix: str = "DB_") -> "DatabaseConfig":
        """Load config from ``DB_DATABASE``, ``DB_POOL_SIZE``, ``DB_TIMEOUT``."""
        defaults = cls()
        return cls(
            database=os.environ.get(f"{prefix}DATABASE", defaults.database),
            pool_size=int(os.environ.get(f"{prefix}POOL_SIZE", defaults.pool_size)),
            timeout=float(os.environ.get(f"{prefix}TIMEOUT", defaults.timeout)),
        )


class PoolClosedError(Exception):
    """Raised when using a closed pool."""


class ConnectionPool:
    """Bounded pool of SQLite connections.

    Connections are opened lazily up to ``pool_size`` and handed out one
    per caller; a caller waits up to ``timeout`` seconds when all are in
    use.

    Usage:
        pool = ConnectionPool(DatabaseConfig(database="photos.db"))
        rows = pool.query("SELECT id, title FROM photos WHERE id = ?", (42,))
        pool.close()
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        if self.config.pool_size < 1:
            raise ValueError("pool_size must be at least 1")

        self._idle: "queue.LifoQueue[sqlite3.Connection]" = queue.LifoQueue()
        self._all: List[sqlite3.Connection] = []
        self._lock = threading.Lock()
        self._closed = False

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self.config.database,
            timeout=self.config.timeout,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        logger.debug(f"Opened connection to {self.config.database}")
        return conn

    def _acquire(self) -> sqlite3.Connection:
        if self._closed:
            raise PoolClosedError("Connection pool is closed")

        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass

        with self._lock:
            if len(self._all) < self.config.pool_size:
                conn = self._connect()
                self._all.append(conn)
                return conn

        try:
            return self._idle.get(timeout=self.config.timeout)
        except queue.Empty:
            raise TimeoutError(
                f"No database connection available after {self.config.timeout}s"
            )

    def _release(self, conn: sqlite3.Connection) -> None:
        if self._closed:
            conn.close()
            return
        self._idle.put(conn)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a connection; commits on success, rolls back on error."""
        conn = self._acquire()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        """Run a statement and return all rows."""
        with self.connection() as conn:
            return conn.execute(sql, params).fetchall()

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a statement and return the affected row count."""
        with self.connection() as conn:
            return conn.execute(sql, params).rowcount

    def execute_script(self, script: str) -> None:
        """Run a multi-statement SQL script."""
        with self.connection() as conn:
            conn.executescript(script)

    @property
    def size(self) -> int:
        """Number of open connections (0 once closed)."""
        return len(self._all)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close every connection. Borrowed ones close on return."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            while True:
                try:
                    self._idle.get_nowait().close()
                except queue.Empty:
                    break
            self._all.clear()
        logger.info(f"Closed connection pool for {self.config.database}")

    def __enter__(self) -> "ConnectionPool":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = [
    "ConnectionPool",
    "DatabaseConfig",
    "PoolClosedError",
]
