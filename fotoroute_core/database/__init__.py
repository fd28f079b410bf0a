"""Database module - Shared connection pool."""

from fotoroute_core.database.pool import (
    ConnectionPool,
    DatabaseConfig,
    PoolClosedError,
)

__all__ = [
    "ConnectionPool",
    "DatabaseConfig",
    "PoolClosedError",
]
