"""
Market Data Service Implementation

Stateless dispatcher over the fixed action set:
prices, chart, stocks, stock-chart, indicators, trending, global.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from tradeagent.schemas.market import (
    MarketAction,
    MarketDataRequest,
    OHLCBar,
    PriceSeries,
    StockChart,
    StockChartMeta,
    SymbolDescriptor,
)
from tradeagent.services.base import UpstreamUnavailableError, ValidationError
from tradeagent.services.cache import MarketCache
from tradeagent.services.data_ingestion import CoinGeckoClient, YahooChartClient, fan_out
from tradeagent.services.data_ingestion.catalog import (
    STOCK_BUCKETS,
    display_symbol,
    is_crypto_id,
    upstream_symbol,
)
from tradeagent.services.indicators import compute_indicators

logger = logging.getLogger(__name__)


def _chart_time_label(timestamp_ms: int) -> str:
    """'Jan 5' style label for chart axes."""
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return f"{dt.strftime('%b')} {dt.day}"


def build_stock_chart(series: PriceSeries) -> StockChart:
    return StockChart(
        meta=StockChartMeta(
            symbol=display_symbol(series.symbol),
            name=series.name,
            currency=series.currency,
            currentPrice=series.current_price,
        ),
        ohlc=[
            OHLCBar(
                timestamp=p.timestamp,
                time=_chart_time_label(p.timestamp),
                open=p.open,
                high=p.high,
                low=p.low,
                close=p.close,
                volume=p.volume,
            )
            for p in series.points
        ],
    )


class MarketDataService:
    """
    Market API surface.

    Every handler builds a deterministic cache key, returns the cached
    payload on a hit, and otherwise fetches, stores and returns.
    """

    def __init__(
        self,
        cache: MarketCache,
        crypto_client: CoinGeckoClient,
        equity_client: YahooChartClient,
        fanout_timeout: Optional[float] = None,
    ):
        self.cache = cache
        self.crypto = crypto_client
        self.equities = equity_client
        self.fanout_timeout = fanout_timeout
        self._handlers = {
            MarketAction.PRICES: self._prices,
            MarketAction.CHART: self._chart,
            MarketAction.STOCKS: self._stocks,
            MarketAction.STOCK_CHART: self._stock_chart,
            MarketAction.INDICATORS: self._indicators,
            MarketAction.TRENDING: self._trending,
            MarketAction.GLOBAL: self._global,
        }

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def dispatch(self, request: MarketDataRequest) -> Any:
        """
        Route a request to its action handler.

        Raises:
            ValidationError: Unknown action or missing parameter
            UpstreamUnavailableError: Single-symbol request with no data
        """
        try:
            action = MarketAction(request.action)
        except ValueError:
            raise ValidationError(self.name, "Unknown action", {"action": request.action})

        return await self._handlers[action](request)

    async def _cached(self, key: str, producer) -> Any:
        cached = await self.cache.get(key)
        if cached is not None:
            return cached
        value = await producer()
        await self.cache.set(key, value)
        return value

    # ============ Crypto ============

    async def _prices(self, request: MarketDataRequest) -> Any:
        key = f"prices:{request.vs_currency}:{request.ids or 'default'}"
        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        try:
            data = await self.crypto.markets(request.vs_currency, request.ids)
        except UpstreamUnavailableError as e:
            logger.warning(f"Prices unavailable: {e.message}")
            return []

        await self.cache.set(key, data)
        return data

    async def _chart(self, request: MarketDataRequest) -> Any:
        if not request.ids:
            raise ValidationError(self.name, "Missing required parameter: ids")

        key = f"chart:{request.ids}:{request.vs_currency}:{request.days}"
        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        try:
            data = await self.crypto.market_chart(request.ids, request.vs_currency, request.days)
        except UpstreamUnavailableError as e:
            logger.warning(f"Chart unavailable for {request.ids}: {e.message}")
            return {"prices": []}

        await self.cache.set(key, data)
        return data

    async def _trending(self, request: MarketDataRequest) -> Any:
        return await self._cached("trending", self._pass_through(self.crypto.trending))

    async def _global(self, request: MarketDataRequest) -> Any:
        return await self._cached("global", self._pass_through(self.crypto.global_stats))

    def _pass_through(self, fetch):
        async def producer():
            try:
                return await fetch()
            except UpstreamUnavailableError as e:
                logger.warning(f"Pass-through unavailable: {e.message}")
                raise UpstreamUnavailableError(self.name, "Unavailable", status_code=502)

        return producer

    # ============ Equities ============

    async def _fetch_quote(self, descriptor: SymbolDescriptor) -> dict:
        """Single quote, cached on its own so a retried batch reuses earlier successes."""
        key = f"quote:{descriptor.symbol}"
        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        quote = await self.equities.fetch_quote(descriptor)
        payload = quote.model_dump(mode="json")
        await self.cache.set(key, payload)
        return payload

    async def _fetch_bucket(self, bucket: str, descriptors: list[SymbolDescriptor]) -> list[dict]:
        try:
            result = await fan_out(descriptors, self._fetch_quote, self.fanout_timeout)
        except Exception as e:
            logger.warning(f"Stock bucket {bucket} unavailable: {e}")
            return []
        return result.results

    async def _stocks(self, request: MarketDataRequest) -> Any:
        async def producer():
            buckets = list(STOCK_BUCKETS.items())
            lists = await asyncio.gather(
                *(self._fetch_bucket(name, descriptors) for name, descriptors in buckets)
            )
            return {name: quotes for (name, _), quotes in zip(buckets, lists)}

        return await self._cached("stocks:all", producer)

    async def _stock_chart(self, request: MarketDataRequest) -> Any:
        raw_symbol = request.symbol or request.ids
        if not raw_symbol:
            raise ValidationError(self.name, "Missing required parameter: symbol")

        symbol = upstream_symbol(raw_symbol)
        chart_range = request.range or "3mo"
        interval = request.interval or "1d"

        async def producer():
            try:
                series = await self.equities.fetch_quote_series(symbol, chart_range, interval)
            except UpstreamUnavailableError as e:
                logger.warning(f"Stock chart unavailable for {symbol}: {e.message}")
                raise UpstreamUnavailableError(self.name, "Stock chart unavailable", status_code=502)
            return build_stock_chart(series).model_dump(mode="json")

        return await self._cached(f"stock-chart:{symbol}:{chart_range}:{interval}", producer)

    # ============ Indicators ============

    async def _indicators(self, request: MarketDataRequest) -> Any:
        raw_symbol = request.symbol or request.ids
        if not raw_symbol:
            raise ValidationError(self.name, "Missing required parameter: symbol")

        crypto = is_crypto_id(raw_symbol)
        symbol = raw_symbol.lower() if crypto else upstream_symbol(raw_symbol)

        async def producer():
            try:
                if crypto:
                    series = await self.crypto.fetch_ohlc_series(symbol, "90")
                else:
                    series = await self.equities.fetch_quote_series(symbol, "1y", "1d")
            except UpstreamUnavailableError as e:
                logger.warning(f"Indicator data unavailable for {symbol}: {e.message}")
                series = None

            if series is None or not series.points:
                raise UpstreamUnavailableError(
                    self.name, "No data available for indicators", status_code=404
                )
            return compute_indicators(series).model_dump(mode="json")

        return await self._cached(f"indicators:{symbol}", producer)
