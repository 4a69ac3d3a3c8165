"""Base repository class."""

from typing import Any

import duckdb
from loguru import logger

from app.repositories.db import get_db


class BaseRepository:
    """Base repository with common functionality.

    The connection is injected by the container; without one the
    thread-local default connection is used.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection | None = None, read_only: bool = False):
        self._db = conn if conn is not None else get_db(read_only)
        self._read_only = read_only
        logger.debug("{} initialized", self.__class__.__name__)

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self._db.execute(query, params)
        return self._db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()
