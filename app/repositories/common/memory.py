"""In-process cache store on ``cachetools.TLRUCache``.

Same contract as the DuckDB repository. Each record expires at
``created_at + ttl_for(query_type)`` on the injected clock, and the cache
drops expired records itself. Payloads are kept as JSON text so a value that
cannot be persisted fails here the same way it fails in DuckDB.
"""

import json
import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from cachetools import TLRUCache
from loguru import logger

from app.models.common import CacheEntry, CacheKey, InvalidCacheKeyError, utcnow
from app.models.common.keys import pattern_regex, require_part, require_scope
from app.repositories.common.store import CacheStore
from settings import CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS

Slot = tuple[str, str, str]
Record = tuple[str, datetime]


class MemoryCacheStore(CacheStore):
    """TLRU-cache backed store, keyed by ``(scope_id, query_type, params_hash)``."""

    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        ttl_overrides: Mapping[str, int] | None = None,
        clock: Callable[[], datetime] = utcnow,
        maxsize: int = CACHE_MAX_ENTRIES,
    ):
        super().__init__(ttl_seconds, ttl_overrides, clock)
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=self._expires, timer=clock)
        # cachetools caches are not thread-safe
        self._lock = threading.Lock()

    def _expires(self, slot: Slot, record: Record, now: datetime) -> datetime:
        return self.expires_at(slot[1], record[1])

    @staticmethod
    def _slot(key: CacheKey) -> Slot:
        return key.scope_id, key.query_type, key.params_hash

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def get(self, scope_id: str, query_type: str, params: Mapping[str, Any] | None = None) -> CacheEntry | None:
        key = CacheKey.build(scope_id, query_type, params)
        with self._lock:
            record = self._cache.get(self._slot(key))
        if record is None:
            logger.debug("Cache miss: {}", key)
            return None

        try:
            data = json.loads(record[0])
        except ValueError as e:
            logger.warning("Cache read failed for {}: {}", key, e)
            return None

        logger.debug("Cache hit: {}", key)
        return CacheEntry(data=data, created_at=record[1])

    def set(
        self,
        scope_id: str,
        query_type: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
        created_at: datetime | None = None,
    ) -> bool:
        key = CacheKey.build(scope_id, query_type, params)
        try:
            payload = json.dumps(data)
        except (TypeError, ValueError) as e:
            logger.warning("Cache write failed for {}: {}", key, e)
            return False

        with self._lock:
            self._cache[self._slot(key)] = (payload, created_at or self._clock())
        logger.debug("Cache saved: {}", key)
        return True

    def _delete(self, predicate: Callable[[Slot], bool]) -> int:
        with self._lock:
            doomed = [slot for slot in self._cache if predicate(slot)]
            for slot in doomed:
                self._cache.pop(slot, None)
        return len(doomed)

    def clear(self, scope_id: str, query_type: str | None = None, params: Mapping[str, Any] | None = None) -> bool:
        scope_id = require_scope(scope_id)
        if query_type is None:
            if params is not None:
                raise InvalidCacheKeyError("params given without query_type")
            removed = self._delete(lambda slot: slot[0] == scope_id)
        elif params is None:
            require_part(query_type, "query_type")
            removed = self._delete(lambda slot: slot[:2] == (scope_id, query_type))
        else:
            target = self._slot(CacheKey.build(scope_id, query_type, params))
            removed = self._delete(lambda slot: slot == target)

        logger.info("Cache cleared: scope={}, type={} ({} entries)", scope_id, query_type or "*", removed)
        return True

    def clear_by_pattern(self, scope_id: str, pattern: str) -> bool:
        scope_id = require_scope(scope_id)
        regex = pattern_regex(pattern)
        removed = self._delete(lambda slot: slot[0] == scope_id and regex.fullmatch(slot[1]) is not None)
        logger.info("Cache cleared: scope={}, pattern={} ({} entries)", scope_id, pattern, removed)
        return True

    def purge_expired(self) -> int:
        with self._lock:
            expired = self._cache.expire()
        logger.info("Purged {} expired cache entries", len(expired))
        return len(expired)

    def stats(self, scope_id: str | None = None) -> list[dict]:
        grouped: dict[tuple[str, str], list[datetime]] = {}
        with self._lock:
            for slot in list(self._cache):
                record = self._cache.get(slot)
                if record is None or (scope_id and slot[0] != scope_id):
                    continue
                grouped.setdefault(slot[:2], []).append(record[1])

        return [
            {
                "scope_id": scope,
                "query_type": query_type,
                "entries": len(stamps),
                "oldest": min(stamps),
                "newest": max(stamps),
            }
            for (scope, query_type), stamps in sorted(grouped.items())
        ]
