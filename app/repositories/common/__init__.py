"""Common repositories - query cache stores."""

from app.repositories.common.cache import CacheRepository
from app.repositories.common.memory import MemoryCacheStore
from app.repositories.common.store import CacheStore

__all__ = [
    "CacheStore",
    "CacheRepository",
    "MemoryCacheStore",
]
