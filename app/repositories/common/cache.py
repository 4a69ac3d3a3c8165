"""Cache repository - query cache storage in DuckDB.

DuckDB has no expiring-record index, so the age check in ``get`` is what
enforces the TTL. ``purge_expired`` reclaims space and is run separately.
"""

import json
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

import duckdb
from loguru import logger

from app.models.common import CacheEntry, CacheKey, InvalidCacheKeyError, utcnow
from app.models.common.keys import pattern_regex, require_part, require_scope
from app.repositories.base import BaseRepository
from app.repositories.common.store import CacheStore
from app.repositories.db import from_db_time, to_db_time
from settings import CACHE_TTL_SECONDS


class CacheRepository(BaseRepository, CacheStore):
    """Repository for query cache operations."""

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection | None = None,
        read_only: bool = False,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        ttl_overrides: Mapping[str, int] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        BaseRepository.__init__(self, conn, read_only)
        CacheStore.__init__(self, ttl_seconds, ttl_overrides, clock)

    def get(self, scope_id: str, query_type: str, params: Mapping[str, Any] | None = None) -> CacheEntry | None:
        """Load a fresh cached payload from DB."""
        key = CacheKey.build(scope_id, query_type, params)
        try:
            row = self.fetchone(
                """
                SELECT data, created_at FROM cache_entry
                WHERE scope_id = ? AND query_type = ? AND params_hash = ? AND created_at > ?
                """,
                [key.scope_id, key.query_type, key.params_hash, to_db_time(self.cutoff(key.query_type))],
            )
            if row is None:
                logger.debug("Cache miss: {}", key)
                return None
            entry = CacheEntry(data=json.loads(row[0]), created_at=from_db_time(row[1]))
        except Exception as e:
            logger.warning("Cache read failed for {}: {}", key, e)
            return None

        logger.debug("Cache hit: {}", key)
        return entry

    def set(
        self,
        scope_id: str,
        query_type: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
        created_at: datetime | None = None,
    ) -> bool:
        """Save a payload to cache, replacing any previous one for the key."""
        key = CacheKey.build(scope_id, query_type, params)
        if self._read_only:
            logger.warning("Cache write refused in read-only mode: {}", key)
            return False

        try:
            self.execute(
                """
                INSERT OR REPLACE INTO cache_entry (scope_id, query_type, params_hash, params, data, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    key.scope_id,
                    key.query_type,
                    key.params_hash,
                    key.params_json,
                    json.dumps(data),
                    to_db_time(created_at or self._clock()),
                ],
            )
        except Exception as e:
            logger.warning("Cache write failed for {}: {}", key, e)
            return False

        logger.debug("Cache saved: {}", key)
        return True

    def clear(self, scope_id: str, query_type: str | None = None, params: Mapping[str, Any] | None = None) -> bool:
        """Clear a whole scope, one query type, or one exact key."""
        scope_id = require_scope(scope_id)
        if query_type is None:
            if params is not None:
                raise InvalidCacheKeyError("params given without query_type")
            where, args = "scope_id = ?", [scope_id]
        elif params is None:
            require_part(query_type, "query_type")
            where, args = "scope_id = ? AND query_type = ?", [scope_id, query_type]
        else:
            key = CacheKey.build(scope_id, query_type, params)
            where, args = "scope_id = ? AND query_type = ? AND params_hash = ?", [
                key.scope_id,
                key.query_type,
                key.params_hash,
            ]

        if self._read_only:
            logger.warning("Cache clear refused in read-only mode: scope={}", scope_id)
            return False

        try:
            self.execute(f"DELETE FROM cache_entry WHERE {where}", args)
        except Exception as e:
            logger.warning("Cache clear failed: scope={}, type={}: {}", scope_id, query_type, e)
            return False

        logger.info("Cache cleared: scope={}, type={}, params={}", scope_id, query_type or "*", params)
        return True

    def clear_by_pattern(self, scope_id: str, pattern: str) -> bool:
        """Clear every query type of a scope matching a glob (``dashboard.*``)."""
        scope_id = require_scope(scope_id)
        regex = pattern_regex(pattern)
        if self._read_only:
            logger.warning("Cache clear refused in read-only mode: scope={}", scope_id)
            return False

        try:
            rows = self.fetchall("SELECT DISTINCT query_type FROM cache_entry WHERE scope_id = ?", [scope_id])
            matched = [r[0] for r in rows if regex.fullmatch(r[0])]
            if matched:
                placeholders = ", ".join("?" for _ in matched)
                self.execute(
                    f"DELETE FROM cache_entry WHERE scope_id = ? AND query_type IN ({placeholders})",
                    [scope_id, *matched],
                )
        except Exception as e:
            logger.warning("Cache clear failed: scope={}, pattern={}: {}", scope_id, pattern, e)
            return False

        logger.info("Cache cleared: scope={}, pattern={} ({} types)", scope_id, pattern, len(matched))
        return True

    def _expired_clause(self, now: datetime) -> tuple[str, list]:
        clauses: list[str] = []
        args: list = []
        for query_type in self._ttl_overrides:
            clauses.append("(query_type = ? AND created_at <= ?)")
            args += [query_type, to_db_time(self.cutoff(query_type, now))]

        default_cutoff = to_db_time(now - timedelta(seconds=self._ttl))
        if self._ttl_overrides:
            placeholders = ", ".join("?" for _ in self._ttl_overrides)
            clauses.append(f"(query_type NOT IN ({placeholders}) AND created_at <= ?)")
            args += [*self._ttl_overrides, default_cutoff]
        else:
            clauses.append("created_at <= ?")
            args.append(default_cutoff)
        return " OR ".join(clauses), args

    def purge_expired(self) -> int:
        """Delete records past their TTL."""
        if self._read_only:
            return 0

        where, args = self._expired_clause(self._clock())
        try:
            count = self.fetchone(f"SELECT COUNT(*) FROM cache_entry WHERE {where}", args)[0]
            if count:
                self.execute(f"DELETE FROM cache_entry WHERE {where}", args)
        except Exception as e:
            logger.warning("Cache purge failed: {}", e)
            return 0

        logger.info("Purged {} expired cache entries", count)
        return count

    def stats(self, scope_id: str | None = None) -> list[dict]:
        """Entry counts per scope and query type."""
        query = """
            SELECT scope_id, query_type, COUNT(*), MIN(created_at), MAX(created_at)
            FROM cache_entry
            {where}
            GROUP BY scope_id, query_type
            ORDER BY scope_id, query_type
        """
        try:
            if scope_id:
                rows = self.fetchall(query.format(where="WHERE scope_id = ?"), [scope_id])
            else:
                rows = self.fetchall(query.format(where=""))
        except Exception as e:
            logger.warning("Cache stats failed: {}", e)
            return []

        return [
            {
                "scope_id": r[0],
                "query_type": r[1],
                "entries": int(r[2]),
                "oldest": from_db_time(r[3]),
                "newest": from_db_time(r[4]),
            }
            for r in rows
        ]
