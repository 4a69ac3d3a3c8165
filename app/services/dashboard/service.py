"""Dashboard service - today's figures for a store."""

from collections.abc import Callable
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from loguru import logger

from app.models.common import CachedResult, utcnow
from app.models.orders import ORDER_STATUSES, PAYMENT_METHOD_NAMES
from app.repositories.orders import OrderRepository
from app.services.analytics import share
from app.services.cache import CacheService
from app.services.periods import day_bounds
from settings import DASHBOARD_TOP_PRODUCTS, TIMEZONE

SYSTEM_COMPONENTS = ("API", "Database", "Payment Processing", "Notification Service")


def change_pct(current: float, previous: float) -> float:
    """Relative change in percent, 0 without a previous value."""
    return (current - previous) / previous * 100 if previous > 0 else 0.0


class DashboardService:
    """Dashboard business logic."""

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

    def stats(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Headline numbers for today compared with yesterday."""

        def compute() -> dict:
            now = self._clock()
            today_start, today_end = day_bounds(now, self._tz)
            yesterday_start, yesterday_end = day_bounds(now, self._tz, days_ago=1)

            today = self._orders.revenue_totals(store_id, today_start, today_end)
            yesterday = self._orders.revenue_totals(store_id, yesterday_start, yesterday_end)
            delivery_today = self._orders.average_delivery_time(store_id, today_start, today_end)
            delivery_yesterday = self._orders.average_delivery_time(store_id, yesterday_start, yesterday_end)

            return {
                "daily_sales": today["total"],
                "daily_orders": self._orders.count_orders(store_id, today_start, today_end),
                "sales_growth": round(change_pct(today["total"], yesterday["total"]), 1),
                "active_customers": self._orders.active_customers(store_id, today_start, today_end),
                "new_customers": self._orders.new_customers(store_id, today_start),
                "subtotal": today["subtotal"],
                "delivery_fees": today["delivery_fees"],
                "average_delivery_time": round(delivery_today),
                "delivery_time_change": round(change_pct(delivery_today, delivery_yesterday)),
                "last_hour_orders": self._orders.count_orders(store_id, now - timedelta(hours=1)),
            }

        return self._cache.fetch(store_id, "dashboard.stats", compute, bypass_cache=refresh)

    def sales_chart(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Hourly sales of today up to the current hour, with a summary."""

        def compute() -> dict:
            now = self._clock()
            start, end = day_bounds(now, self._tz)
            current_hour = now.astimezone(self._tz).hour

            buckets = {
                hour: {"total": 0.0, "subtotal": 0.0, "delivery_fees": 0.0, "orders": 0}
                | {status: 0 for status in ORDER_STATUSES}
                for hour in range(current_hour + 1)
            }
            for row in self._orders.order_rows(store_id, start, end, ORDER_STATUSES):
                bucket = buckets.get(row["created_at"].astimezone(self._tz).hour)
                if bucket is None:
                    continue
                bucket["total"] += row["total"]
                bucket["subtotal"] += row["subtotal"]
                bucket["delivery_fees"] += row["delivery_fee"]
                bucket["orders"] += 1
                bucket[row["status"]] += 1

            hourly = [
                {
                    "name": f"{hour:02d}:00",
                    "total": round(b["total"], 2),
                    "subtotal": round(b["subtotal"], 2),
                    "delivery_fees": round(b["delivery_fees"], 2),
                    "orders": b["orders"],
                    "average": round(b["total"] / b["orders"]) if b["orders"] else 0,
                    "status": {status: b[status] for status in ORDER_STATUSES},
                }
                for hour, b in buckets.items()
            ]

            total_orders = sum(h["orders"] for h in hourly)
            total_revenue = round(sum(h["total"] for h in hourly), 2)
            peak = hourly[0]
            for h in hourly:
                if h["orders"] > peak["orders"]:
                    peak = h

            logger.info("Computed sales chart for store {} ({} hours)", store_id, len(hourly))
            return {
                "hourly": hourly,
                "summary": {
                    "total_orders": total_orders,
                    "total_revenue": total_revenue,
                    "average_ticket": round(total_revenue / total_orders) if total_orders else 0,
                    "peak_hour": peak["name"],
                    "status": {status: sum(h["status"][status] for h in hourly) for status in ORDER_STATUSES},
                },
            }

        return self._cache.fetch(store_id, "dashboard.salesChart", compute, bypass_cache=refresh)

    def top_products(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Today's best sellers, revenue including additionals."""

        def compute() -> list[dict]:
            start, end = day_bounds(self._clock(), self._tz)
            return self._orders.top_products(store_id, start, end, DASHBOARD_TOP_PRODUCTS, include_additionals=True)

        return self._cache.fetch(store_id, "dashboard.topProducts", compute, bypass_cache=refresh)

    def system_status(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Status of the services the back office depends on."""

        def compute() -> list[dict]:
            return [{"name": name, "status": "online"} for name in SYSTEM_COMPONENTS]

        return self._cache.fetch(store_id, "dashboard.systemStatus", compute, bypass_cache=refresh)

    def orders_by_category(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Share of today's orders and revenue per category."""

        def compute() -> list[dict]:
            start, end = day_bounds(self._clock(), self._tz)
            categories = self._orders.orders_by_category(store_id, start, end)
            total_orders = sum(c["count"] for c in categories)
            total_revenue = sum(c["total"] for c in categories)
            return [
                {
                    "name": c["name"],
                    "value": share(c["count"], total_orders),
                    "total": c["total"],
                    "percentage": share(c["total"], total_revenue),
                }
                for c in categories
            ]

        return self._cache.fetch(store_id, "dashboard.ordersByCategory", compute, bypass_cache=refresh)

    def payment_methods(self, store_id: str, refresh: bool = False) -> CachedResult:
        """Today's payment method breakdown."""

        def compute() -> list[dict]:
            start, end = day_bounds(self._clock(), self._tz)
            methods = self._orders.payment_methods(store_id, start, end)
            total_orders = sum(m["count"] for m in methods)
            total_revenue = sum(m["total"] for m in methods)
            return [
                {
                    "name": PAYMENT_METHOD_NAMES.get(m["method"], m["method"]),
                    "value": share(m["count"], total_orders),
                    "total": m["total"],
                    "percentage": share(m["total"], total_revenue),
                    "subtotal": m["subtotal"],
                    "delivery_fees": m["delivery_fees"],
                }
                for m in methods
            ]

        return self._cache.fetch(store_id, "dashboard.paymentMethods", compute, bypass_cache=refresh)

    def load_all(self, store_id: str, refresh: bool = False) -> dict[str, CachedResult]:
        """Every widget of the dashboard."""
        return {
            "stats": self.stats(store_id, refresh=refresh),
            "sales_chart": self.sales_chart(store_id, refresh=refresh),
            "top_products": self.top_products(store_id, refresh=refresh),
            "system_status": self.system_status(store_id, refresh=refresh),
            "orders_by_category": self.orders_by_category(store_id, refresh=refresh),
            "payment_methods": self.payment_methods(store_id, refresh=refresh),
        }
