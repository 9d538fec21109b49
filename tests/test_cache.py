"""
Tests for the Redis analysis result cache.

Uses the FakeRedis client from conftest; no Redis server is needed.
"""

import logging

import pytest

from facade_energy.analysis.energy_calculator import EnergyCalculator
from facade_energy.cache.result_cache import CACHE_TTL, AnalysisCache
from facade_energy.core.models import Season


@pytest.fixture
def result(design, mumbai):
    return EnergyCalculator().analyze(design, mumbai)


@pytest.fixture
def hourly_result(design, mumbai):
    return EnergyCalculator().analyze(design, mumbai, season="winter", hour=10)


class TestCacheKeys:

    def test_plain_key(self, cache):
        assert cache.key("abc", "Mumbai") == "analysis:abc:Mumbai"

    def test_variant_keys(self, cache):
        assert cache.key("abc", "Mumbai", Season.WINTER, 10) == "analysis:abc:Mumbai:winter:10"
        assert cache.key("abc", "Mumbai", "monsoon") == "analysis:abc:Mumbai:monsoon:all"
        assert cache.key("abc", "Mumbai", hour=7) == "analysis:abc:Mumbai:day:7"

    def test_custom_prefix(self, fake_redis):
        assert AnalysisCache(fake_redis, prefix="test").key("abc", "Delhi") == "test:abc:Delhi"


class TestCacheRoundTrip:

    def test_get_after_set(self, cache, result):
        assert cache.set(result)
        assert cache.get("design-1", "Mumbai") == result

    def test_set_uses_ttl(self, cache, fake_redis, result):
        cache.set(result)
        assert fake_redis.expiry["analysis:design-1:Mumbai"] == CACHE_TTL

        cache.set(result, ttl=60)
        assert fake_redis.expiry["analysis:design-1:Mumbai"] == 60

    def test_variants_stored_separately(self, cache, result, hourly_result):
        cache.set(result)
        cache.set(hourly_result)

        assert cache.get("design-1", "Mumbai", Season.WINTER, 10) == hourly_result
        assert cache.get("design-1", "Mumbai") == result
        assert cache.get("design-1", "Mumbai", Season.WINTER, 11) is None

    def test_miss(self, cache):
        assert cache.get("unknown", "Mumbai") is None

    def test_result_without_id_not_cached(self, cache, design_payload, mumbai, fake_redis):
        anonymous = EnergyCalculator().analyze(design_payload, mumbai)
        assert not cache.set(anonymous)
        assert fake_redis.store == {}

    def test_unreadable_entry_discarded(self, cache, fake_redis):
        fake_redis.store["analysis:design-1:Mumbai"] = "not json"

        assert cache.get("design-1", "Mumbai") is None
        assert "analysis:design-1:Mumbai" not in fake_redis.store


class TestInvalidation:

    def test_invalidate_removes_all_variants(self, cache, fake_redis, result, hourly_result):
        cache.set(result)
        cache.set(hourly_result)
        fake_redis.store["analysis:design-10:Mumbai"] = "{}"

        assert cache.invalidate("design-1") == 2
        assert cache.get("design-1", "Mumbai") is None
        assert list(fake_redis.store) == ["analysis:design-10:Mumbai"]

    def test_invalidate_nothing(self, cache):
        assert cache.invalidate("design-1") == 0

    def test_flush_keeps_other_prefixes(self, cache, fake_redis, result):
        cache.set(result)
        fake_redis.store["session:xyz"] = "keep"

        assert cache.flush() == 1
        assert fake_redis.store == {"session:xyz": "keep"}


class TestDegradedCache:
    """The cache never fails a caller."""

    def test_disabled_cache(self, result):
        cache = AnalysisCache(None)

        assert not cache.enabled
        assert not cache.set(result)
        assert cache.get("design-1", "Mumbai") is None
        assert cache.invalidate("design-1") == 0
        assert cache.status() == {"enabled": False, "connected": False}

    def test_redis_errors_are_misses(self, cache, fake_redis, result, caplog):
        fake_redis.fail = True

        with caplog.at_level(logging.WARNING):
            assert not cache.set(result)
            assert cache.get("design-1", "Mumbai") is None
            assert cache.invalidate("design-1") == 0

        assert "Redis" in caplog.text

    def test_status(self, cache, fake_redis):
        assert cache.status() == {"enabled": True, "connected": True, "ttl_seconds": CACHE_TTL}

        fake_redis.fail = True
        assert cache.status()["connected"] is False
