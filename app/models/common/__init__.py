"""Common models - base classes and shared tables."""

from app.models.common.base import BaseEntity
from app.models.common.cache import CACHE_DDL, CachedResult, CacheEntry
from app.models.common.keys import CacheKey, InvalidCacheKeyError, utcnow

__all__ = [
    "BaseEntity",
    "CACHE_DDL",
    "CacheEntry",
    "CachedResult",
    "CacheKey",
    "InvalidCacheKeyError",
    "utcnow",
]
