from __future__ import annotations

from tradeagent.services.cache import MarketCache, connect_redis
from utils.fakes import FakeClock


async def test_entry_is_fresh_until_ttl(cache: MarketCache, clock: FakeClock) -> None:
    await cache.set("prices:usd:default", [{"id": "bitcoin"}])

    clock.advance(119)
    assert await cache.get("prices:usd:default") == [{"id": "bitcoin"}]

    clock.advance(2)
    assert await cache.get("prices:usd:default") is None


async def test_entry_expires_exactly_at_ttl(cache: MarketCache, clock: FakeClock) -> None:
    await cache.set("global", {"data": {}})
    clock.advance(120)
    assert await cache.get("global") is None


async def test_missing_key_is_none(cache: MarketCache) -> None:
    assert await cache.get("nothing-here") is None


async def test_overwrite_resets_freshness(cache: MarketCache, clock: FakeClock) -> None:
    await cache.set("trending", {"v": 1})
    clock.advance(100)
    await cache.set("trending", {"v": 2})
    clock.advance(100)

    assert await cache.get("trending") == {"v": 2}


async def test_values_are_copied_in_and_out(cache: MarketCache) -> None:
    payload = {"ohlc": [{"close": 1.0}]}
    await cache.set("stock-chart:TSLA:3mo:1d", payload)

    payload["ohlc"].append({"close": 2.0})
    first = await cache.get("stock-chart:TSLA:3mo:1d")
    first["ohlc"].clear()

    assert await cache.get("stock-chart:TSLA:3mo:1d") == {"ohlc": [{"close": 1.0}]}


async def test_custom_ttl() -> None:
    clock = FakeClock()
    cache = MarketCache(ttl_seconds=5, clock=clock)
    await cache.set("k", 1)
    clock.advance(4.9)
    assert await cache.get("k") == 1
    clock.advance(0.2)
    assert await cache.get("k") is None


async def test_connect_redis_without_url_returns_none() -> None:
    assert await connect_redis(None) is None
    assert await connect_redis("") is None


class FakeRedis:
    def __init__(self, fail: bool = False) -> None:
        self.store: dict = {}
        self.expiries: dict = {}
        self.fail = fail
        self.closed = False

    async def get(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        if self.fail:
            raise ConnectionError("redis down")
        self.store[key] = value
        self.expiries[key] = ex

    async def close(self):
        self.closed = True


async def test_redis_mirror_receives_writes_with_expiry(clock: FakeClock) -> None:
    redis_client = FakeRedis()
    cache = MarketCache(ttl_seconds=120, clock=clock, redis_client=redis_client)

    await cache.set("indicators:TSLA", {"rsi": 55.0})

    assert redis_client.expiries["indicators:TSLA"] == 120
    assert await cache.get("indicators:TSLA") == {"rsi": 55.0}

    await cache.close()
    assert redis_client.closed
    assert cache.redis is None


async def test_redis_errors_fall_back_to_memory(clock: FakeClock) -> None:
    cache = MarketCache(ttl_seconds=120, clock=clock, redis_client=FakeRedis(fail=True))

    await cache.set("stocks:all", {"global": []})
    assert await cache.get("stocks:all") == {"global": []}
