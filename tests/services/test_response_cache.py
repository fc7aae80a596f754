"""Unit tests for ResponseCache."""

import pytest

from anikam.services.response_cache import ResponseCache
from anikam.shared.errors import ApplicationError, ErrorCode


class TestResponseCache:
    """Test cases for ResponseCache."""

    def test_get_returns_stored_value_within_ttl(self, clock):
        cache = ResponseCache(ttl=300, clock=clock)
        cache.set("/anime?q=naruto", {"data": [1]})

        clock.advance(299.9)

        assert cache.get("/anime?q=naruto") == {"data": [1]}

    def test_stored_value_is_isolated_from_callers(self, clock):
        cache = ResponseCache(clock=clock)
        body = {"data": {"mal_id": 1, "title": "Cowboy Bebop"}}
        cache.set("/anime/1", body)

        body["data"]["title"] = "changed before read"
        first = cache.get("/anime/1")
        first["data"]["title"] = "changed after read"

        assert cache.get("/anime/1") == {"data": {"mal_id": 1, "title": "Cowboy Bebop"}}

    def test_entry_expires_exactly_at_ttl(self, clock):
        """Validity is strict: now - timestamp < ttl."""
        cache = ResponseCache(ttl=300, clock=clock)
        cache.set("/anime?q=naruto", {"data": []})

        clock.advance(300)

        assert cache.get("/anime?q=naruto") is None
        # The lookup that found it expired also removed it
        assert len(cache) == 0

    def test_missing_key_returns_none(self, clock):
        cache = ResponseCache(clock=clock)

        assert cache.get("/top/anime") is None

    def test_set_overwrites_and_refreshes_timestamp(self, clock):
        cache = ResponseCache(ttl=10, clock=clock)
        cache.set("/random/anime", {"data": {"mal_id": 1}})
        clock.advance(8)
        cache.set("/random/anime", {"data": {"mal_id": 2}})
        clock.advance(8)

        assert cache.get("/random/anime") == {"data": {"mal_id": 2}}

    def test_stats_count_hits_and_misses(self, clock):
        cache = ResponseCache(ttl=10, clock=clock)
        cache.set("a", 1)

        cache.get("a")
        cache.get("a")
        cache.get("b")
        clock.advance(10)
        cache.get("a")

        assert cache.stats() == {"hits": 2, "misses": 2, "size": 0}

    def test_contains_respects_ttl(self, clock):
        cache = ResponseCache(ttl=5, clock=clock)
        cache.set("a", 1)

        assert "a" in cache
        clock.advance(5)
        assert "a" not in cache
        assert 42 not in cache

    def test_clear_removes_everything(self, clock):
        cache = ResponseCache(clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.clear()

        assert len(cache) == 0
        assert cache.get("a") is None

    def test_unbounded_by_default(self, clock):
        cache = ResponseCache(clock=clock)
        for i in range(500):
            cache.set(f"/anime/{i}", i)

        assert len(cache) == 500

    def test_lru_eviction_when_bounded(self, clock):
        cache = ResponseCache(ttl=60, max_entries=2, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        # Touch "a" so "b" becomes least recently used
        assert cache.get("a") == 1

        cache.set("c", 3)

        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    @pytest.mark.parametrize("kwargs", [{"ttl": 0}, {"ttl": -1}, {"max_entries": 0}])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ApplicationError) as exc_info:
            ResponseCache(**kwargs)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
