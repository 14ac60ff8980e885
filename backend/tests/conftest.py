from __future__ import annotations

import pytest

from tradeagent.services.cache import MarketCache
from tradeagent.services.market_data import MarketDataService
from utils.fakes import FakeClock, FakeCoinGeckoClient, FakeYahooClient, make_series


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture
def cache(clock: FakeClock) -> MarketCache:
    return MarketCache(ttl_seconds=120, clock=clock)


@pytest.fixture
def yahoo() -> FakeYahooClient:
    closes = [100.0 + i for i in range(60)]
    return FakeYahooClient(
        series={
            "TSLA": make_series("TSLA", closes),
            "RELIANCE.NS": make_series("RELIANCE.NS", closes, currency="INR"),
            "^NSEI": make_series("^NSEI", closes, currency="INR"),
        },
        failing=("DELISTED",),
    )


@pytest.fixture
def coingecko() -> FakeCoinGeckoClient:
    closes = [30000.0 + 10 * i for i in range(40)]
    return FakeCoinGeckoClient(ohlc={"bitcoin": make_series("bitcoin", closes)})


@pytest.fixture
def market_service(cache: MarketCache, coingecko: FakeCoinGeckoClient, yahoo: FakeYahooClient) -> MarketDataService:
    return MarketDataService(cache, coingecko, yahoo, fanout_timeout=1.0)
