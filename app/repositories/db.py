"""DuckDB connection management."""

import threading
from datetime import datetime, timezone
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL, ALL_INDEXES
from settings import DB_PATH

_local = threading.local()


def db_exists() -> bool:
    """Check if database file exists."""
    return Path(DB_PATH).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables and indexes (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    for index in ALL_INDEXES:
        conn.execute(index)
    logger.debug("DB tables initialized")


def connect(path: str = DB_PATH, read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Open a connection with all tables in place.

    ``":memory:"`` gives a private in-memory database (used by tests).
    """
    if read_only:
        return duckdb.connect(path, read_only=True)
    conn = duckdb.connect(path)
    init_tables(conn)
    return conn


def _ensure_db_exists() -> None:
    """Create DB with tables if it doesn't exist."""
    if not db_exists():
        logger.warning("DB not found: {}. Creating empty DB.", DB_PATH)
        conn = connect(DB_PATH)
        conn.close()


def get_db(read_only: bool = False) -> duckdb.DuckDBPyConnection:
    """Get thread-local connection."""
    if not hasattr(_local, "conn") or _local.conn is None:
        _ensure_db_exists()
        _local.conn = connect(DB_PATH, read_only=read_only)
        logger.debug("DB connected: {} (read_only={})", DB_PATH, read_only)
    return _local.conn


def close_db() -> None:
    """Close thread-local connection."""
    if hasattr(_local, "conn") and _local.conn:
        _local.conn.close()
        _local.conn = None
        logger.debug("DB connection closed")


def to_db_time(value: datetime) -> datetime:
    """Aware datetime -> naive UTC, as stored in TIMESTAMP columns."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_time(value: datetime) -> datetime:
    """Naive UTC from a TIMESTAMP column -> aware datetime."""
    return value.replace(tzinfo=timezone.utc)
