"""Tests for analytics reports over the fixture order history."""

import pytest

from app.services.analytics import AnalyticsService, share


@pytest.fixture
def analytics(orders, cache, clock, tz) -> AnalyticsService:
    return AnalyticsService(orders, cache, clock=clock, tz=tz)


class TestShare:
    def test_rounds(self):
        assert share(1, 3) == 33
        assert share(2, 3) == 67

    def test_zero_whole(self):
        assert share(5, 0) == 0


class TestMonthlyRevenue:
    def test_oldest_month_first(self, analytics):
        result = analytics.monthly_revenue("store1", months=2)
        assert result.data == [
            {"name": "Feb", "date": "2026-02-01", "total": 35.0},
            {"name": "Mar", "date": "2026-03-01", "total": 173.0},
        ]
        assert result.from_cache is False

    def test_empty_months_are_zero(self, analytics):
        result = analytics.monthly_revenue("store1", months=4)
        assert [m["date"] for m in result.data] == ["2025-12-01", "2026-01-01", "2026-02-01", "2026-03-01"]
        assert [m["total"] for m in result.data] == [0.0, 0.0, 35.0, 173.0]

    def test_cached_per_months(self, analytics):
        analytics.monthly_revenue("store1", months=2)
        assert analytics.monthly_revenue("store1", months=2).from_cache is True
        assert analytics.monthly_revenue("store1", months=3).from_cache is False


class TestTopProducts:
    def test_month(self, analytics):
        result = analytics.top_products("store1", limit=10, period="month")
        assert [(p["name"], p["quantity"], p["revenue"]) for p in result.data] == [
            ("X-Burger", 6, 150.0),
            ("Soda", 1, 7.0),
        ]

    def test_day(self, analytics):
        result = analytics.top_products("store1", limit=10, period="day")
        assert [(p["name"], p["quantity"], p["revenue"]) for p in result.data] == [
            ("X-Burger", 5, 125.0),
            ("Soda", 1, 7.0),
        ]

    def test_limit(self, analytics):
        result = analytics.top_products("store1", limit=1, period="month")
        assert [p["name"] for p in result.data] == ["X-Burger"]

    def test_period_is_part_of_key(self, analytics):
        analytics.top_products("store1", limit=5, period="month")
        assert analytics.top_products("store1", limit=5, period="month").from_cache is True
        assert analytics.top_products("store1", limit=5, period="day").from_cache is False

    def test_unknown_period(self, analytics):
        with pytest.raises(ValueError):
            analytics.top_products("store1", period="year")


class TestCustomerStats:
    def test_summary(self, analytics):
        stats = analytics.customer_stats("store1").data["stats"]
        assert stats == {
            "total_customers": 3,
            "new_customers": 2,
            "returning_customers": 1,
            "retention_rate": 33,
        }

    def test_top_customers(self, analytics):
        top = analytics.customer_stats("store1").data["top_customers"]
        assert [c["customer_id"] for c in top] == ["c1", "c2", "c3"]
        assert top[0] == {
            "customer_id": "c1",
            "customer_name": "Ana",
            "order_count": 2,
            "total_spent": 85.0,
            "last_order": "2026-03-18T15:00:00+00:00",
        }


class TestPaymentMethodStats:
    def test_month(self, analytics):
        result = analytics.payment_method_stats("store1", period="month")
        assert result.data == [
            {"name": "Credit Card", "value": 33, "total": 88.0, "percentage": 51, "count": 1},
            {"name": "Pix", "value": 67, "total": 85.0, "percentage": 49, "count": 2},
        ]

    def test_no_orders(self, analytics):
        assert analytics.payment_method_stats("store3").data == []


class TestLoadAll:
    def test_all_reports_cached_then_refreshed(self, analytics, clock):
        first = analytics.load_all("store1", months=2, limit=5)
        assert set(first) == {"monthly_revenue", "top_products", "customer_stats", "payment_methods"}
        assert not any(r.from_cache for r in first.values())

        clock.advance(minutes=1)
        assert all(r.from_cache for r in analytics.load_all("store1", months=2, limit=5).values())

        refreshed = analytics.load_all("store1", months=2, limit=5, refresh=True)
        assert not any(r.from_cache for r in refreshed.values())
        assert all(r.timestamp == clock.now for r in refreshed.values())

    def test_stores_do_not_share_entries(self, analytics):
        analytics.monthly_revenue("store1", months=1)
        other = analytics.monthly_revenue("store2", months=1)
        assert other.from_cache is False
        assert other.data[0]["total"] == 999.0
