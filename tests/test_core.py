"""Tests for newsdesk/core (TTL cache, single-flight)."""

import asyncio

import pytest

from newsdesk.core.cache import (
    ARTICLES_LIST_KEY,
    CATEGORIES_KEY,
    TTLCache,
    article_key,
    invalidate_article,
    list_key,
)
from newsdesk.core.singleflight import SingleFlight


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestTTLCache:
    def test_get_before_and_after_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", "v", ttl=0.1)

        clock.now = 0.05
        assert cache.get("k") == "v"

        clock.now = 0.15
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_delete_and_clear(self):
        cache = TTLCache()
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert "b" in cache
        cache.clear()
        assert len(cache) == 0

    def test_falsy_values_are_cached(self):
        cache = TTLCache()
        cache.set("empty", [])
        assert cache.get("empty") == []


class TestCacheKeys:
    def test_default_list_key(self):
        assert list_key(None, 20) == ARTICLES_LIST_KEY
        assert list_key("sport", 20) == "articles_list:sport:20:0"
        assert list_key(None, 50, 10) == "articles_list::50:10"

    def test_invalidate_article_leaves_custom_lists(self):
        cache = TTLCache()
        for key in (
            article_key("x"),
            ARTICLES_LIST_KEY,
            list_key("sport", 20),
            list_key("sport", 50),
            CATEGORIES_KEY,
        ):
            cache.set(key, "cached")

        invalidate_article(cache, "x", "sport")

        assert cache.get(article_key("x")) is None
        assert cache.get(ARTICLES_LIST_KEY) is None
        assert cache.get(list_key("sport", 20)) is None
        assert cache.get(CATEGORIES_KEY) is None
        # known staleness: non-default list keys survive until TTL
        assert cache.get(list_key("sport", 50)) == "cached"


class TestSingleFlight:
    def test_concurrent_callers_share_one_call(self):
        async def scenario():
            flights = SingleFlight()
            gate = asyncio.Event()
            calls = 0

            async def work():
                nonlocal calls
                calls += 1
                await gate.wait()
                return "done"

            leader = asyncio.create_task(flights.do("k", work))
            await asyncio.sleep(0)
            follower = asyncio.create_task(flights.do("k", work))
            await asyncio.sleep(0)
            assert flights.in_flight("k")

            gate.set()
            results = await asyncio.gather(leader, follower)
            return calls, results, flights.in_flight("k")

        calls, results, still_running = asyncio.run(scenario())
        assert calls == 1
        assert results == ["done", "done"]
        assert still_running is False

    def test_exception_reaches_every_caller(self):
        async def scenario():
            flights = SingleFlight()
            gate = asyncio.Event()

            async def work():
                await gate.wait()
                raise ValueError("boom")

            leader = asyncio.create_task(flights.do("k", work))
            await asyncio.sleep(0)
            follower = asyncio.create_task(flights.do("k", work))
            await asyncio.sleep(0)
            gate.set()
            return await asyncio.gather(leader, follower, return_exceptions=True)

        results = asyncio.run(scenario())
        assert all(isinstance(r, ValueError) for r in results)

    def test_sequential_calls_run_again(self):
        async def scenario():
            flights = SingleFlight()
            calls = []

            async def work():
                calls.append(1)
                return len(calls)

            first = await flights.do("k", work)
            second = await flights.do("k", work)
            return first, second

        assert asyncio.run(scenario()) == (1, 2)

    def test_distinct_keys_do_not_share(self):
        async def scenario():
            flights = SingleFlight()

            async def work(v):
                await asyncio.sleep(0)
                return v

            return await asyncio.gather(
                flights.do("a", lambda: work("a")),
                flights.do("b", lambda: work("b")),
            )

        assert asyncio.run(scenario()) == ["a", "b"]


@pytest.mark.parametrize("ttl", [0.0, -1.0])
def test_non_positive_ttl_never_hits(ttl):
    cache = TTLCache(clock=FakeClock())
    cache.set("k", "v", ttl=ttl)
    assert cache.get("k") is None
