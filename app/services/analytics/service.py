"""Analytics service - revenue, product, customer and payment reports."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from loguru import logger

from app.models.common import CachedResult, utcnow
from app.models.orders import PAYMENT_METHOD_NAMES
from app.repositories.orders import OrderRepository
from app.services.cache import CacheService
from app.services.periods import month_bounds, period_bounds
from settings import TIMEZONE


def share(part: float, whole: float) -> int:
    """Rounded percentage, 0 when there is nothing to share."""
    return round(part / whole * 100) if whole else 0


class AnalyticsService:
    """Analytics reports with read-through caching per store."""

    def __init__(
        self,
        order_repo: OrderRepository,
        cache: CacheService,
        clock: Callable[[], datetime] = utcnow,
        tz: ZoneInfo | None = None,
    ):
        self._orders = order_repo
        self._cache = cache
        self._clock = clock
        self._tz = tz or ZoneInfo(TIMEZONE)
        logger.debug("AnalyticsService initialized")

    def monthly_revenue(self, store_id: str, months: int = 6, refresh: bool = False) -> CachedResult:
        """Completed revenue per month, oldest month first."""

        def compute() -> list[dict]:
            now = self._clock()
            result = []
            for i in range(months):
                start, end = month_bounds(now, self._tz, months_ago=i)
                totals = self._orders.revenue_totals(store_id, start, end)
                result.append(
                    {
                        "name": start.strftime("%b"),
                        "date": start.date().isoformat(),
                        "total": totals["total"],
                    }
                )
            result.reverse()
            logger.info("Computed monthly revenue for store {} ({} months)", store_id, months)
            return result

        return self._cache.fetch(
            store_id, "analytics.monthlyRevenue", compute, params={"months": months}, bypass_cache=refresh
        )

    def top_products(self, store_id: str, limit: int = 10, period: str = "month", refresh: bool = False) -> CachedResult:
        """Best selling products by revenue in a period."""

        def compute() -> list[dict]:
            start, end = period_bounds(period, self._clock(), self._tz)
            result = self._orders.top_products(store_id, start, end, limit)
            logger.info("Computed top {} products for store {} ({})", len(result), store_id, period)
            return result

        return self._cache.fetch(
            store_id,
            "analytics.topProducts",
            compute,
            params={"limit": limit, "period": period},
            bypass_cache=refresh,
        )

    def customer_stats(self, store_id: str, limit: int = 10, refresh: bool = False) -> CachedResult:
        """Most active customers and retention figures."""

        def compute() -> dict:
            month_start, _ = month_bounds(self._clock(), self._tz)
            total = self._orders.total_customers(store_id)
            returning = self._orders.returning_customers(store_id)
            result = {
                "top_customers": self._orders.top_customers(store_id, limit),
                "stats": {
                    "total_customers": total,
                    "new_customers": self._orders.new_customers(store_id, month_start),
                    "returning_customers": returning,
                    "retention_rate": share(returning, total),
                },
            }
            logger.info("Computed customer stats for store {}", store_id)
            return result

        return self._cache.fetch(
            store_id, "analytics.customerStats", compute, params={"limit": limit}, bypass_cache=refresh
        )

    def payment_method_stats(self, store_id: str, period: str = "month", refresh: bool = False) -> CachedResult:
        """Order count and revenue share per payment method."""

        def compute() -> list[dict]:
            start, end = period_bounds(period, self._clock(), self._tz)
            methods = self._orders.payment_methods(store_id, start, end)
            total_orders = sum(m["count"] for m in methods)
            total_revenue = sum(m["total"] for m in methods)

            result = [
                {
                    "name": PAYMENT_METHOD_NAMES.get(m["method"], m["method"]),
                    "value": share(m["count"], total_orders),
                    "total": m["total"],
                    "percentage": share(m["total"], total_revenue),
                    "count": m["count"],
                }
                for m in methods
            ]
            logger.info("Computed payment methods for store {} ({})", store_id, period)
            return result

        return self._cache.fetch(
            store_id, "analytics.paymentMethodStats", compute, params={"period": period}, bypass_cache=refresh
        )

    def load_all(
        self,
        store_id: str,
        months: int = 6,
        limit: int = 10,
        period: str = "month",
        refresh: bool = False,
    ) -> dict[str, CachedResult]:
        """Every analytics report of the analytics screen."""
        return {
            "monthly_revenue": self.monthly_revenue(store_id, months, refresh=refresh),
            "top_products": self.top_products(store_id, limit, period, refresh=refresh),
            "customer_stats": self.customer_stats(store_id, limit, refresh=refresh),
            "payment_methods": self.payment_method_stats(store_id, period, refresh=refresh),
        }
