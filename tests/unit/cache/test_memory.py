"""Tests for the in-memory TTL cache."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from netinsight.cache.memory import TTLCache


class TestTTLCache:
    """Tests for TTLCache."""

    def test_set_then_get(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("public_ip", "203.0.113.7")
        assert cache.get("public_ip") == "203.0.113.7"

    def test_missing_key(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        assert cache.get("nope") is None

    def test_expired_entry_is_evicted(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("public_ip", "203.0.113.7")

        clock.advance(10.5)

        assert cache.get("public_ip") is None
        assert "public_ip" not in cache
        assert len(cache) == 0

    def test_entry_live_at_exact_ttl(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("k", "v")
        clock.advance(10.0)
        assert cache.get("k") == "v"

    def test_expiry_is_lazy(self, clock):
        """Expired entries stay stored until they are looked up."""
        cache = TTLCache(ttl=1.0, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        clock.advance(5.0)

        assert len(cache) == 2
        cache.get("a")
        assert len(cache) == 1

    def test_per_entry_ttl(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("short", "x", ttl=1.0)
        cache.set("long", "y")

        clock.advance(2.0)

        assert cache.get("short") is None
        assert cache.get("long") == "y"

    def test_overwrite_resets_timestamp(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("k", "old")
        clock.advance(8.0)
        cache.set("k", "new")
        clock.advance(8.0)
        assert cache.get("k") == "new"

    def test_disabled_cache_stores_nothing(self, clock):
        cache = TTLCache(ttl=10.0, enabled=False, clock=clock)
        cache.set("k", "v")
        assert cache.get("k") is None
        assert len(cache) == 0
        assert cache.enabled is False

    def test_none_is_not_stored(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("k", None)
        assert "k" not in cache

    def test_invalidate_key(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate("a")

        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_invalidate_all(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate()

        assert len(cache) == 0

    def test_invalidate_missing_key_is_noop(self, clock):
        cache = TTLCache(ttl=10.0, clock=clock)
        cache.invalidate("missing")
        cache.invalidate("missing")
        assert len(cache) == 0

    def test_concurrent_access(self):
        """Writers and readers on many threads should not corrupt entries."""
        cache = TTLCache(ttl=60.0)

        def work(n: int) -> None:
            key = f"location:10.0.{n % 16}.1"
            for _ in range(200):
                cache.set(key, n % 16)
                value = cache.get(key)
                assert value is None or value == n % 16
                if n % 5 == 0:
                    cache.invalidate(key)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(64)))

        assert len(cache) <= 16
