"""Tests for the in-memory TTL cache store."""

import threading
import time

import pytest

from movie_terminal.services.cache_service import CacheService


@pytest.fixture
def cache(clock):
    return CacheService(sweep_interval=600, clock=clock)


def test_cache_set_and_get(cache):
    cache.set("key1", "cached response", ttl=3600)
    found, value = cache.get("key1")
    assert found is True
    assert value == "cached response"


def test_cache_miss(cache):
    found, value = cache.get("nonexistent")
    assert found is False
    assert value is None


def test_cache_stores_falsy_values(cache):
    cache.set("empty", [], ttl=60)
    found, value = cache.get("empty")
    assert found is True
    assert value == []


def test_cache_expired(cache, clock):
    cache.set("expired_key", "old", ttl=60)
    clock.advance(61)
    found, value = cache.get("expired_key")
    assert found is False
    assert value is None
    # Lazy eviction on lookup
    assert len(cache) == 0


def test_cache_entry_live_until_ttl(cache, clock):
    cache.set("key", "value", ttl=60)
    clock.advance(59.9)
    assert cache.get("key") == (True, "value")


def test_set_overwrites_and_resets_expiry(cache, clock):
    cache.set("key", "first", ttl=60)
    clock.advance(50)
    cache.set("key", "second", ttl=60)
    clock.advance(50)
    assert cache.get("key") == (True, "second")


def test_delete_and_clear(cache):
    cache.set("a", 1, ttl=60)
    cache.set("b", 2, ttl=60)
    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") == (False, None)
    cache.clear()
    assert len(cache) == 0


def test_sweep_removes_only_expired(cache, clock):
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=1000)
    clock.advance(11)
    removed = cache.sweep()
    assert removed == 1
    assert len(cache) == 1
    assert cache.get("long") == (True, 2)


def test_invalid_sweep_interval():
    with pytest.raises(ValueError):
        CacheService(sweep_interval=0)


def test_background_sweeper_reclaims_entries():
    cache = CacheService(sweep_interval=0.01)
    cache.set("gone", "value", ttl=0.001)
    with cache:
        deadline = time.monotonic() + 2
        while len(cache) and time.monotonic() < deadline:
            time.sleep(0.01)
    assert len(cache) == 0


def test_close_is_idempotent():
    cache = CacheService(sweep_interval=0.05)
    cache.start()
    cache.start()
    cache.close()
    cache.close()


def test_concurrent_writers_and_readers(cache):
    errors = []

    def worker(n: int):
        try:
            for i in range(200):
                key = f"k{i % 20}"
                cache.set(key, n, ttl=60)
                found, _ = cache.get(key)
                assert found
                cache.sweep()
        except Exception as e:  # pragma: no cover - surfaced below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(cache) == 20
