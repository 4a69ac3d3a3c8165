"""Read-through cache for expensive queries.

Every expensive read goes through ``fetch``: look the key up, return the
stored payload on a hit without computing, otherwise compute, store and
return. The result always carries when the payload was computed and whether
it came from the cache.

Cache failures degrade to a miss (reads) or a no-op (writes). Failures of
the computation itself propagate to the caller untouched.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from loguru import logger

from app.models.common import CachedResult, CacheKey, InvalidCacheKeyError, utcnow
from app.models.common.keys import require_scope
from app.repositories.common.store import CacheStore


class CacheService:
    """Scope-partitioned read-through cache over a ``CacheStore``."""

    def __init__(self, store: CacheStore, clock: Callable[[], datetime] = utcnow):
        self._store = store
        self._clock = clock
        logger.debug("CacheService initialized with {}", store.__class__.__name__)

    @property
    def store(self) -> CacheStore:
        return self._store

    def ttl_for(self, query_type: str) -> int:
        return self._store.ttl_for(query_type)

    def fetch(
        self,
        scope_id: str,
        query_type: str,
        compute: Callable[[], Any],
        params: Mapping[str, Any] | None = None,
        bypass_cache: bool = False,
    ) -> CachedResult:
        """Return the cached payload for the key, or compute and cache it.

        ``bypass_cache`` skips the lookup but still stores the fresh result.
        """
        key = CacheKey.build(scope_id, query_type, params)
        log = logger.bind(store_id=key.scope_id)

        if not bypass_cache:
            try:
                entry = self._store.get(key.scope_id, key.query_type, key.params)
            except Exception as e:
                log.warning("Cache lookup failed for {}, computing: {}", key, e)
                entry = None
            if entry is not None:
                return CachedResult(data=entry.data, timestamp=entry.created_at, from_cache=True)

        data = compute()
        computed_at = self._clock()

        try:
            saved = self._store.set(key.scope_id, key.query_type, data, key.params, created_at=computed_at)
        except Exception as e:
            log.warning("Cache save failed for {}: {}", key, e)
            saved = False
        if not saved:
            log.debug("Result for {} not cached", key)

        return CachedResult(data=data, timestamp=computed_at, from_cache=False)

    def invalidate(self, scope_id: str, query_type: str | None = None, params: Mapping[str, Any] | None = None) -> bool:
        """Drop a scope, a query type, or one exact key."""
        require_scope(scope_id)
        try:
            return self._store.clear(scope_id, query_type, params)
        except InvalidCacheKeyError:
            raise
        except Exception as e:
            logger.bind(store_id=scope_id).warning("Cache invalidation failed: {}", e)
            return False

    def invalidate_pattern(self, scope_id: str, pattern: str) -> bool:
        """Drop every query type of a scope matching a ``*`` glob."""
        require_scope(scope_id)
        try:
            return self._store.clear_by_pattern(scope_id, pattern)
        except InvalidCacheKeyError:
            raise
        except Exception as e:
            logger.bind(store_id=scope_id).warning("Cache invalidation failed ({}): {}", pattern, e)
            return False
