"""
Tests for the in-memory response cache.
"""

from oked_assistant.protocols import ResponseCache
from oked_assistant.repositories import InMemoryResponseCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def make_cache(ttl: int = 3600) -> tuple[InMemoryResponseCache, FakeClock]:
    clock = FakeClock()
    return InMemoryResponseCache(ttl=ttl, clock=clock), clock


def test_satisfies_protocol():
    assert isinstance(InMemoryResponseCache(), ResponseCache)


def test_get_missing_key():
    cache, _ = make_cache()
    assert cache.get("missing") is None


def test_entry_expires_after_ttl():
    cache, clock = make_cache(ttl=3600)
    cache.set("k", {"content": "v"})

    clock.now += 3599
    assert cache.get("k") == {"content": "v"}

    clock.now += 1
    assert cache.get("k") is None
    assert cache.count_all() == 0


def test_entries_expire_independently():
    cache, clock = make_cache(ttl=100)
    cache.set("old", {"n": 1})
    clock.now += 50
    cache.set("new", {"n": 2})
    clock.now += 60

    assert cache.get("old") is None
    assert cache.get("new") == {"n": 2}


def test_per_entry_ttl_override():
    cache, clock = make_cache(ttl=3600)
    cache.set("short", {"n": 1}, ttl=10)
    clock.now += 11
    assert cache.get("short") is None


def test_count_skips_expired_entries():
    cache, clock = make_cache(ttl=10)
    cache.set("a", {})
    cache.set("b", {})
    assert cache.count_all() == 2

    clock.now += 10
    cache.set("c", {})
    assert cache.count_all() == 1


def test_clear_all():
    cache, _ = make_cache()
    cache.set("a", {})
    cache.set("b", {})
    assert cache.clear_all() == 2
    assert cache.count_all() == 0
    assert cache.health_check() is True
