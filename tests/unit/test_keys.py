"""Tests for cache key construction."""

import pytest

from app.models.common import CacheKey, InvalidCacheKeyError
from app.models.common.keys import canonical_params, matches_pattern


class TestCanonicalParams:
    def test_key_order_does_not_matter(self):
        assert canonical_params({"period": "month", "limit": 5}) == canonical_params({"limit": 5, "period": "month"})

    def test_none_is_empty(self):
        assert canonical_params(None) == canonical_params({}) == "{}"

    def test_nested_values_are_sorted(self):
        assert canonical_params({"f": {"b": 1, "a": 2}}) == '{"f":{"a":2,"b":1}}'

    def test_values_matter(self):
        assert canonical_params({"months": 6}) != canonical_params({"months": 12})

    def test_not_a_mapping(self):
        with pytest.raises(InvalidCacheKeyError):
            canonical_params([("months", 6)])

    def test_not_serializable(self):
        with pytest.raises(InvalidCacheKeyError):
            canonical_params({"when": object()})


class TestCacheKey:
    def test_same_parts_same_hash(self):
        a = CacheKey.build("store1", "topProducts", {"period": "month", "limit": 5})
        b = CacheKey.build("store1", "topProducts", {"limit": 5, "period": "month"})
        assert a == b
        assert a.params_hash == b.params_hash

    def test_different_params_different_hash(self):
        a = CacheKey.build("store1", "topProducts", {"period": "month", "limit": 5})
        b = CacheKey.build("store1", "topProducts", {"period": "day", "limit": 5})
        assert a.params_hash != b.params_hash

    def test_params_round_trip(self):
        key = CacheKey.build("store1", "monthlyRevenue", {"months": 6})
        assert key.params == {"months": 6}

    @pytest.mark.parametrize("scope_id", [None, "", "   "])
    def test_scope_required(self, scope_id):
        with pytest.raises(InvalidCacheKeyError):
            CacheKey.build(scope_id, "dashboard.stats")

    def test_query_type_required(self):
        with pytest.raises(InvalidCacheKeyError):
            CacheKey.build("store1", "")

    def test_is_value_error(self):
        assert issubclass(InvalidCacheKeyError, ValueError)


class TestPattern:
    def test_prefix_wildcard(self):
        assert matches_pattern("dashboard.stats", "dashboard.*")
        assert matches_pattern("dashboard.salesChart", "dashboard.*")

    def test_other_family(self):
        assert not matches_pattern("analytics.topProducts", "dashboard.*")

    def test_dot_is_literal(self):
        assert not matches_pattern("dashboardXstats", "dashboard.*")

    def test_whole_type_must_match(self):
        assert not matches_pattern("old.dashboard.stats", "dashboard.*")

    def test_inner_wildcard(self):
        assert matches_pattern("analytics.topProducts", "*.top*")

    def test_no_wildcard_is_exact(self):
        assert matches_pattern("dashboard.stats", "dashboard.stats")
        assert not matches_pattern("dashboard.stats2", "dashboard.stats")
