"""Cache store contract shared by all backends."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

from app.models.common import CacheEntry, utcnow


class CacheStore(ABC):
    """Key/value store of query results with per-record expiration.

    Lookups never return a record older than its TTL. Storage failures are
    reported as a miss (``get``) or ``False`` (writes), never raised.
    """

    def __init__(
        self,
        ttl_seconds: int,
        ttl_overrides: Mapping[str, int] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._ttl = ttl_seconds
        self._ttl_overrides = dict(ttl_overrides or {})
        self._clock = clock

    def ttl_for(self, query_type: str) -> int:
        """TTL in seconds for a query type."""
        return self._ttl_overrides.get(query_type, self._ttl)

    def expires_at(self, query_type: str, created_at: datetime) -> datetime:
        """First instant at which a record stamped ``created_at`` is expired."""
        return created_at + timedelta(seconds=self.ttl_for(query_type))

    def cutoff(self, query_type: str, now: datetime | None = None) -> datetime:
        """Records stamped at or before this instant are expired."""
        now = now or self._clock()
        return now - timedelta(seconds=self.ttl_for(query_type))

    def is_fresh(self, query_type: str, created_at: datetime, now: datetime | None = None) -> bool:
        return (now or self._clock()) < self.expires_at(query_type, created_at)

    @abstractmethod
    def get(self, scope_id: str, query_type: str, params: Mapping[str, Any] | None = None) -> CacheEntry | None:
        """Fresh entry for the exact key, or None."""

    @abstractmethod
    def set(
        self,
        scope_id: str,
        query_type: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
        created_at: datetime | None = None,
    ) -> bool:
        """Upsert the entry for the key, stamped ``created_at`` (default now)."""

    @abstractmethod
    def clear(self, scope_id: str, query_type: str | None = None, params: Mapping[str, Any] | None = None) -> bool:
        """Delete a scope, a query type (all params) or one exact key."""

    @abstractmethod
    def clear_by_pattern(self, scope_id: str, pattern: str) -> bool:
        """Delete every query type of a scope matching a ``*`` glob."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Remove expired records, returns how many were removed."""

    @abstractmethod
    def stats(self, scope_id: str | None = None) -> list[dict]:
        """Entry counts and age range per scope and query type."""
