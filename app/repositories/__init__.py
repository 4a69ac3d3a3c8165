"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheRepository, CacheStore, MemoryCacheStore
from app.repositories.db import (
    close_db,
    connect,
    get_db,
    init_tables,
)
from app.repositories.orders import OrderRepository

__all__ = [
    # DB
    "get_db",
    "close_db",
    "connect",
    "init_tables",
    # Base
    "BaseRepository",
    # Common
    "CacheStore",
    "CacheRepository",
    "MemoryCacheStore",
    # Orders
    "OrderRepository",
]
