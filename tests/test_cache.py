"""Tests for the result cache."""

from __future__ import annotations

from docscout.index.cache import ResultCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestCacheKey:
    """Test cache_key normalisation."""

    def test_defaults(self) -> None:
        assert cache_key("search", query="q", section=None, version=None) == ("search", "q", "all", "latest")

    def test_equivalent_calls_share_key(self) -> None:
        assert cache_key("sections", section=None, version="latest") == cache_key(
            "sections", section="all", version=None
        )

    def test_distinct_operations(self) -> None:
        assert cache_key("api", module="camera", version=None) != cache_key("content", path="camera")


class TestResultCache:
    """Test ResultCache expiry."""

    def test_set_and_get(self) -> None:
        cache = ResultCache(ttl=10)
        key = cache_key("content", path="a.md")

        cache.set(key, "text")

        assert cache.get(key) == "text"
        assert len(cache) == 1

    def test_missing(self) -> None:
        assert ResultCache().get(("search", "nothing")) is None

    def test_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = ResultCache(ttl=10, timer=clock)
        cache.set(("k",), "value")

        clock.now = 5
        assert cache.get(("k",)) == "value"

        clock.now = 11
        assert cache.get(("k",)) is None

    def test_expiry_independent_of_access(self) -> None:
        """Reading an entry does not extend its lifetime."""
        clock = FakeClock()
        cache = ResultCache(ttl=10, timer=clock)
        cache.set(("k",), "value")

        for now in (3, 6, 9):
            clock.now = now
            assert cache.get(("k",)) == "value"

        clock.now = 10.5
        assert cache.get(("k",)) is None

    def test_clear(self) -> None:
        cache = ResultCache()
        cache.set(("k",), "value")

        cache.clear()

        assert len(cache) == 0
