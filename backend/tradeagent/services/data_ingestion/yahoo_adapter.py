"""
Yahoo Finance Chart Adapter

Fetches equities, indices and commodities from the Yahoo Finance chart API.
Indian stocks use .NS suffix (NSE) or .BO suffix (BSE); the suffix is sent
upstream and stripped for display.
"""

import logging
from typing import Optional

from tradeagent.schemas.market import (
    AssetType,
    PricePoint,
    PriceSeries,
    Quote,
    SymbolDescriptor,
    normalize_points,
)
from tradeagent.services.base import UpstreamUnavailableError
from tradeagent.services.data_ingestion.aggregator import fan_out
from tradeagent.services.data_ingestion.catalog import (
    display_symbol,
    static_currency,
    upstream_symbol,
)
from tradeagent.services.data_ingestion.interface import UpstreamClient

logger = logging.getLogger(__name__)


def _guess_type(symbol: str) -> AssetType:
    if symbol.startswith("^"):
        return AssetType.INDEX
    if symbol.endswith("=F"):
        return AssetType.COMMODITY
    return AssetType.STOCK


def _value_at(values: list, i: int) -> Optional[float]:
    if i < len(values) and values[i] is not None:
        return float(values[i])
    return None


def parse_chart(payload: dict, symbol: str) -> PriceSeries:
    """
    Normalize a chart API payload into a PriceSeries.

    Points with a null close are dropped; the remaining order is kept.
    """
    try:
        result = payload["chart"]["result"][0]
    except (KeyError, IndexError, TypeError):
        result = None
    if not result:
        raise UpstreamUnavailableError("YahooChart", f"No chart result for {symbol}")

    meta = result.get("meta") or {}
    timestamps = result.get("timestamp") or []
    quote = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
    opens = quote.get("open") or []
    highs = quote.get("high") or []
    lows = quote.get("low") or []
    closes = quote.get("close") or []
    volumes = quote.get("volume") or []

    points = []
    for i, ts in enumerate(timestamps):
        close = _value_at(closes, i)
        if close is None:
            continue
        points.append(
            PricePoint(
                timestamp=int(ts) * 1000,
                open=_value_at(opens, i),
                high=_value_at(highs, i),
                low=_value_at(lows, i),
                close=close,
                volume=_value_at(volumes, i),
            )
        )
    points = normalize_points(points)

    last_close = points[-1].close if points else 0.0
    current_price = float(meta.get("regularMarketPrice") or last_close or 0.0)
    previous_close = float(
        meta.get("chartPreviousClose")
        or meta.get("previousClose")
        or (points[-2].close if len(points) > 1 else current_price)
    )
    raw_symbol = meta.get("symbol") or symbol

    return PriceSeries(
        symbol=raw_symbol,
        name=meta.get("shortName") or meta.get("longName") or raw_symbol,
        currency=meta.get("currency") or static_currency(raw_symbol) or "USD",
        current_price=current_price,
        previous_close=previous_close,
        points=points,
    )


class YahooChartClient(UpstreamClient):
    """Adapter for query1.finance.yahoo.com/v8/finance/chart."""

    @property
    def name(self) -> str:
        return "YahooChart"

    def _chart_url(self, symbol: str) -> str:
        return f"{self.base_url}/{symbol.replace('^', '%5E')}"

    async def fetch_quote_series(
        self, symbol: str, range: str = "3mo", interval: str = "1d"
    ) -> PriceSeries:
        """Fetch OHLCV history for range/interval (e.g. 1y/1d)."""
        symbol = upstream_symbol(symbol)
        logger.info(f"Fetching {symbol} chart ({range}/{interval}) from Yahoo Finance...")

        payload = await self._get_json(
            self._chart_url(symbol),
            params={"interval": interval, "range": range},
            symbol=symbol,
        )
        return parse_chart(payload, symbol)

    async def fetch_quote(self, descriptor: SymbolDescriptor) -> Quote:
        """Current price and day change from a 5-day daily chart."""
        series = await self.fetch_quote_series(descriptor.symbol, "5d", "1d")

        last_price = series.current_price or (series.closes[-1] if series.points else 0.0)
        prev_close = series.previous_close or last_price
        change = ((last_price - prev_close) / prev_close) * 100 if prev_close else 0.0

        return Quote(
            id=descriptor.symbol,
            symbol=display_symbol(descriptor.symbol),
            name=descriptor.name,
            type=descriptor.type,
            current_price=last_price,
            price_change_percentage_24h=change,
            currency=series.currency or descriptor.currency or "USD",
        )

    async def fetch_batch_quotes(self, symbols: list[str]) -> list[Quote]:
        descriptors = [
            SymbolDescriptor(
                symbol=upstream_symbol(s),
                name=display_symbol(s),
                type=_guess_type(upstream_symbol(s)),
                currency=static_currency(s),
            )
            for s in symbols
        ]
        result = await fan_out(descriptors, self.fetch_quote)
        return result.results
