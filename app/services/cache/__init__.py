"""Cache services."""

from app.services.cache.service import CacheService

__all__ = ["CacheService"]
