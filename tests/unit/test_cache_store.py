"""Tests for cache store backends (DuckDB and in-memory)."""

import pytest

from app.models.common import InvalidCacheKeyError
from app.repositories.common import CacheRepository, MemoryCacheStore

TOP = {"items": [{"name": "X-Burger", "qty": 5}]}
MONTH_5 = {"period": "month", "limit": 5}


class TestGetSet:
    def test_hit_after_set(self, store, clock):
        assert store.set("store1", "topProducts", TOP, MONTH_5)
        entry = store.get("store1", "topProducts", MONTH_5)
        assert entry is not None
        assert entry.data == TOP
        assert entry.created_at == clock.now

    def test_absent(self, store):
        assert store.get("store1", "topProducts", MONTH_5) is None

    def test_params_are_part_of_key(self, store):
        store.set("store1", "topProducts", TOP, MONTH_5)
        assert store.get("store1", "topProducts", {"period": "day", "limit": 5}) is None
        assert store.get("store1", "topProducts", {"limit": 5, "period": "month"}).data == TOP

    def test_missing_params_is_empty_params(self, store):
        store.set("store1", "dashboard.stats", {"daily_orders": 3})
        assert store.get("store1", "dashboard.stats", {}).data == {"daily_orders": 3}
        assert store.get("store1", "dashboard.stats", {"x": 1}) is None

    def test_scopes_are_isolated(self, store):
        store.set("store1", "topProducts", TOP, MONTH_5)
        assert store.get("store2", "topProducts", MONTH_5) is None

    def test_query_types_are_isolated(self, store):
        store.set("store1", "topProducts", TOP, MONTH_5)
        assert store.get("store1", "customerStats", MONTH_5) is None

    def test_payload_types_survive(self, store):
        payload = [{"name": "Feb", "total": 35.5}, {"name": "Mar", "total": 173}]
        store.set("store1", "monthlyRevenue", payload, {"months": 2})
        assert store.get("store1", "monthlyRevenue", {"months": 2}).data == payload

    def test_upsert_keeps_one_record(self, store, clock):
        store.set("store1", "topProducts", {"v": 1}, MONTH_5)
        clock.advance(minutes=5)
        store.set("store1", "topProducts", {"v": 2}, MONTH_5)

        entry = store.get("store1", "topProducts", MONTH_5)
        assert entry.data == {"v": 2}
        assert entry.created_at == clock.now
        assert [r["entries"] for r in store.stats("store1")] == [1]

    def test_unserializable_payload_not_stored(self, store):
        assert store.set("store1", "topProducts", {"bad": object()}, MONTH_5) is False
        assert store.get("store1", "topProducts", MONTH_5) is None

    def test_missing_scope_raises(self, store):
        with pytest.raises(InvalidCacheKeyError):
            store.get("", "topProducts")
        with pytest.raises(InvalidCacheKeyError):
            store.set(None, "topProducts", TOP)


class TestExpiry:
    def test_fresh_just_before_ttl(self, store, clock):
        store.set("store1", "dashboard.stats", {"v": 1})
        clock.advance(minutes=19, seconds=59)
        assert store.get("store1", "dashboard.stats") is not None

    def test_expired_at_ttl(self, store, clock):
        store.set("store1", "dashboard.stats", {"v": 1})
        clock.advance(seconds=1200)
        assert store.get("store1", "dashboard.stats") is None

    def test_reset_by_new_set(self, store, clock):
        store.set("store1", "dashboard.stats", {"v": 1})
        clock.advance(minutes=15)
        store.set("store1", "dashboard.stats", {"v": 2})
        clock.advance(minutes=15)
        assert store.get("store1", "dashboard.stats").data == {"v": 2}

    def test_explicit_created_at(self, store, clock):
        stamp = clock.now
        clock.advance(minutes=15)
        store.set("store1", "dashboard.stats", {"v": 1}, created_at=stamp)
        assert store.get("store1", "dashboard.stats").created_at == stamp
        clock.advance(minutes=5)
        assert store.get("store1", "dashboard.stats") is None

    def test_purge_removes_only_expired(self, store, clock):
        store.set("store1", "dashboard.stats", {"v": 1})
        clock.advance(minutes=10)
        store.set("store1", "dashboard.salesChart", {"v": 2})
        clock.advance(minutes=11)

        assert store.purge_expired() == 1
        assert [r["query_type"] for r in store.stats()] == ["dashboard.salesChart"]


class TestTtlOverrides:
    @pytest.fixture(params=["duckdb", "memory"])
    def short_store(self, request, conn, clock):
        overrides = {"dashboard.systemStatus": 60}
        if request.param == "duckdb":
            return CacheRepository(conn, ttl_overrides=overrides, clock=clock)
        return MemoryCacheStore(ttl_overrides=overrides, clock=clock)

    def test_ttl_for(self, short_store):
        assert short_store.ttl_for("dashboard.systemStatus") == 60
        assert short_store.ttl_for("dashboard.stats") == 1200

    def test_override_expires_first(self, short_store, clock):
        short_store.set("store1", "dashboard.systemStatus", [])
        short_store.set("store1", "dashboard.stats", {})
        clock.advance(minutes=2)
        assert short_store.get("store1", "dashboard.systemStatus") is None
        assert short_store.get("store1", "dashboard.stats") is not None

    def test_purge_honours_override(self, short_store, clock):
        short_store.set("store1", "dashboard.systemStatus", [])
        short_store.set("store1", "dashboard.stats", {})
        clock.advance(minutes=2)
        assert short_store.purge_expired() == 1
        assert [r["query_type"] for r in short_store.stats()] == ["dashboard.stats"]


class TestClear:
    @pytest.fixture
    def filled(self, store):
        store.set("store1", "dashboard.stats", {"v": 1})
        store.set("store1", "dashboard.salesChart", {"v": 2})
        store.set("store1", "analytics.topProducts", {"v": 3}, {"period": "day", "limit": 5})
        store.set("store1", "analytics.topProducts", {"v": 4}, {"period": "month", "limit": 5})
        store.set("store2", "dashboard.stats", {"v": 5})
        return store

    def test_clear_by_pattern(self, filled):
        assert filled.clear_by_pattern("store1", "dashboard.*")
        assert filled.get("store1", "dashboard.stats") is None
        assert filled.get("store1", "dashboard.salesChart") is None
        assert filled.get("store1", "analytics.topProducts", {"period": "day", "limit": 5}) is not None
        assert filled.get("store2", "dashboard.stats") is not None

    def test_clear_exact_key(self, filled):
        assert filled.clear("store1", "analytics.topProducts", {"period": "day", "limit": 5})
        assert filled.get("store1", "analytics.topProducts", {"period": "day", "limit": 5}) is None
        assert filled.get("store1", "analytics.topProducts", {"period": "month", "limit": 5}) is not None

    def test_clear_query_type_all_params(self, filled):
        assert filled.clear("store1", "analytics.topProducts")
        assert filled.get("store1", "analytics.topProducts", {"period": "day", "limit": 5}) is None
        assert filled.get("store1", "analytics.topProducts", {"period": "month", "limit": 5}) is None
        assert filled.get("store1", "dashboard.stats") is not None

    def test_clear_scope(self, filled):
        assert filled.clear("store1")
        assert filled.stats("store1") == []
        assert filled.get("store2", "dashboard.stats") is not None

    def test_params_without_type(self, filled):
        with pytest.raises(InvalidCacheKeyError):
            filled.clear("store1", None, {"period": "day"})

    def test_scope_required(self, filled):
        with pytest.raises(InvalidCacheKeyError):
            filled.clear("")
        with pytest.raises(InvalidCacheKeyError):
            filled.clear_by_pattern("", "dashboard.*")

    def test_stats(self, filled):
        rows = filled.stats("store1")
        assert [(r["query_type"], r["entries"]) for r in rows] == [
            ("analytics.topProducts", 2),
            ("dashboard.salesChart", 1),
            ("dashboard.stats", 1),
        ]


class TestEndToEnd:
    def test_top_products_example(self, store):
        store.set("store1", "topProducts", TOP, {"period": "month", "limit": 5})
        assert store.get("store1", "topProducts", {"period": "month", "limit": 5}).data["items"] == TOP["items"]
        assert store.get("store1", "topProducts", {"period": "day", "limit": 5}) is None
