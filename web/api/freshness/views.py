"""Freshness API views - combined "last updated" state and manual refresh.

A screen shows several independently cached queries. The summary reports
the oldest computation time among them, so "updated N minutes ago" never
understates how stale the screen is. Refreshing re-runs every query with the
cache bypassed; fresh results are still written back.
"""

from collections.abc import Mapping
from datetime import datetime

from loguru import logger

from app.container import container
from app.models.common import utcnow
from settings import CACHE_TTL_SECONDS
from web.api import analytics, dashboard
from web.api.schemas import CachedResponse

from .schemas import AnalyticsSnapshot, DashboardSnapshot, DataTimestamp, FreshnessSummary


def summarize(
    results: Mapping[str, CachedResponse | None],
    now: datetime | None = None,
    ttl_seconds: int = CACHE_TTL_SECONDS,
) -> FreshnessSummary:
    """Combine per-query timestamps into one freshness summary.

    Missing results (``None``, e.g. a widget still loading) are skipped.
    """
    sources = {
        name: DataTimestamp(time=r.timestamp, from_cache=r.from_cache) for name, r in results.items() if r is not None
    }

    last_updated = min((s.time for s in sources.values()), default=None)
    age_seconds = None
    if last_updated is not None:
        age_seconds = max(((now or utcnow()) - last_updated).total_seconds(), 0.0)

    return FreshnessSummary(
        last_updated=last_updated,
        age_seconds=age_seconds,
        any_from_cache=any(s.from_cache for s in sources.values()),
        ttl_minutes=ttl_seconds // 60,
        sources=sources,
    )


def get_dashboard_snapshot(store_id: str, refresh: bool = False) -> DashboardSnapshot:
    """Get every dashboard widget, recomputing all of them on refresh."""
    if refresh:
        logger.bind(store_id=store_id).info("Manual dashboard refresh")

    responses = {
        "stats": dashboard.get_stats(store_id, refresh=refresh),
        "sales_chart": dashboard.get_sales_chart(store_id, refresh=refresh),
        "top_products": dashboard.get_top_products(store_id, refresh=refresh),
        "system_status": dashboard.get_system_status(store_id, refresh=refresh),
        "orders_by_category": dashboard.get_orders_by_category(store_id, refresh=refresh),
        "payment_methods": dashboard.get_payment_methods(store_id, refresh=refresh),
    }
    return DashboardSnapshot(**responses, freshness=summarize(responses, now=container.clock()))


def get_analytics_snapshot(
    store_id: str,
    months: int = 6,
    limit: int = 10,
    period: str = "month",
    refresh: bool = False,
) -> AnalyticsSnapshot:
    """Get every analytics report, recomputing all of them on refresh."""
    if refresh:
        logger.bind(store_id=store_id).info("Manual analytics refresh")

    responses = {
        "monthly_revenue": analytics.get_monthly_revenue(store_id, months, refresh=refresh),
        "top_products": analytics.get_top_products(store_id, limit, period, refresh=refresh),
        "customer_stats": analytics.get_customer_stats(store_id, limit, refresh=refresh),
        "payment_methods": analytics.get_payment_method_stats(store_id, period, refresh=refresh),
    }
    return AnalyticsSnapshot(**responses, freshness=summarize(responses, now=container.clock()))
