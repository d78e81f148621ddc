"""
Tests for the result cache.
"""

from __future__ import annotations

import pytest

from vibesearch.domains.ranking.models import LocationResult

from .cache import ResultCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


PLACE = LocationResult(place_id="p1", name="Blue Bottle", similarity_score=0.8)


def test_basic_key_normalizes() -> None:
    assert ResultCache.basic_key("  Cozy Cafe ") == "cozy cafe"


def test_context_key_truncates_notes() -> None:
    cache = ResultCache(notes_prefix_length=5)
    assert cache.context_key("Cozy", "trip: nyc") == "cozy|trip:"


def test_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        ResultCache(max_size=0)


async def test_set_and_get() -> None:
    cache = ResultCache()
    await cache.set("cozy", [PLACE])

    entry = await cache.get("cozy")
    assert entry is not None
    assert entry.results == (PLACE,)
    assert await cache.get("missing") is None


async def test_fifo_eviction_after_capacity() -> None:
    """51 inserts into a 50-entry cache drop the first key only."""
    cache = ResultCache(max_size=50)
    for i in range(51):
        await cache.set(f"q{i}", [PLACE])

    assert len(cache) == 50
    assert "q0" not in cache
    assert "q1" in cache
    assert "q50" in cache
    assert cache.stats()["evictions"] == 1


async def test_reads_do_not_refresh_position() -> None:
    cache = ResultCache(max_size=2)
    await cache.set("a", [PLACE])
    await cache.set("b", [PLACE])
    await cache.get("a")
    await cache.set("c", [PLACE])

    assert cache.keys() == ["b", "c"]


async def test_reset_moves_key_to_back() -> None:
    cache = ResultCache(max_size=2)
    await cache.set("a", [PLACE])
    await cache.set("b", [PLACE])
    await cache.set("a", [])
    await cache.set("c", [PLACE])

    assert cache.keys() == ["a", "c"]
    entry = await cache.get("a")
    assert entry is not None
    assert entry.results == ()


async def test_ttl_expiry() -> None:
    clock = FakeClock()
    cache = ResultCache(context_ttl=300.0, clock=clock)
    await cache.set("cozy|notes", [PLACE])

    clock.now += 299.0
    assert await cache.get("cozy|notes", ttl_seconds=cache.context_ttl) is not None

    clock.now += 2.0
    assert await cache.get("cozy|notes", ttl_seconds=cache.context_ttl) is None
    assert "cozy|notes" not in cache


async def test_no_ttl_never_expires() -> None:
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    await cache.set("cozy", [PLACE])

    clock.now += 1_000_000.0
    assert await cache.get("cozy") is not None


async def test_stats_and_clear() -> None:
    cache = ResultCache()
    await cache.set("cozy", [PLACE])
    await cache.get("cozy")
    await cache.get("other")

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 50.0

    await cache.clear()
    assert len(cache) == 0
    assert cache.keys() == []
