"""Dependency Injection container - initialized at app startup."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

import duckdb

from app.models.common import utcnow
from app.repositories.common.cache import CacheRepository
from app.repositories.common.store import CacheStore
from app.repositories.db import get_db
from app.repositories.orders.order import OrderRepository
from app.services.analytics.service import AnalyticsService
from app.services.cache.service import CacheService
from app.services.dashboard.service import DashboardService
from settings import CACHE_TTL_OVERRIDES, CACHE_TTL_SECONDS


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(
        self,
        conn: duckdb.DuckDBPyConnection | None = None,
        cache_store: CacheStore | None = None,
        clock: Callable[[], datetime] = utcnow,
        tz: ZoneInfo | None = None,
        force: bool = False,
    ) -> None:
        """Initialize all dependencies. Call once at app startup.

        ``conn`` and ``cache_store`` replace the defaults (the shared DuckDB
        connection and a cache repository on it); ``force`` rebuilds an
        already initialized container.
        """
        if self._initialized and not force:
            return

        conn = conn if conn is not None else get_db(read_only=False)
        self.conn = conn
        self.clock = clock

        # Repositories (singletons)
        self.orders = OrderRepository(conn)
        if cache_store is None:
            cache_store = CacheRepository(
                conn,
                ttl_seconds=CACHE_TTL_SECONDS,
                ttl_overrides=CACHE_TTL_OVERRIDES,
                clock=clock,
            )
        self.cache_store = cache_store

        # Services (with injected repos)
        self.cache = CacheService(self.cache_store, clock=clock)

        self.analytics = AnalyticsService(
            order_repo=self.orders,
            cache=self.cache,
            clock=clock,
            tz=tz,
        )

        self.dashboard = DashboardService(
            order_repo=self.orders,
            cache=self.cache,
            clock=clock,
            tz=tz,
        )

        self._initialized = True


# Global container instance
container = Container()
