"""
CoinGecko Adapter

Fetches crypto prices and history from the public CoinGecko API.
Coins are addressed by id ("bitcoin", "avalanche-2"), batched as a
comma-joined id list.
"""

import logging

from tradeagent.schemas.market import (
    AssetType,
    PricePoint,
    PriceSeries,
    Quote,
    SymbolDescriptor,
    normalize_points,
)
from tradeagent.services.base import UpstreamUnavailableError
from tradeagent.services.data_ingestion.catalog import CRYPTO_IDS
from tradeagent.services.data_ingestion.interface import UpstreamClient

logger = logging.getLogger(__name__)

# Chart range -> CoinGecko days window
RANGE_TO_DAYS = {
    "1d": "1",
    "5d": "5",
    "7d": "7",
    "1mo": "30",
    "3mo": "90",
    "6mo": "180",
    "1y": "365",
    "max": "max",
}


def range_to_days(range: str) -> str:
    """Translate a chart range into a days window; numeric strings pass through."""
    if range in RANGE_TO_DAYS:
        return RANGE_TO_DAYS[range]
    if str(range).isdigit():
        return str(range)
    return "90"


def coin_display_name(coin_id: str) -> str:
    return coin_id[:1].upper() + coin_id[1:]


class CoinGeckoClient(UpstreamClient):
    """Adapter for api.coingecko.com/api/v3."""

    @property
    def name(self) -> str:
        return "CoinGecko"

    # ============ Pass-through endpoints ============

    async def markets(self, vs_currency: str = "usd", ids: str = None) -> list:
        """Market list with cap, rank and 7-day sparkline."""
        data = await self._get_json(
            f"{self.base_url}/coins/markets",
            params={
                "vs_currency": vs_currency,
                "ids": ids or ",".join(CRYPTO_IDS),
                "order": "market_cap_desc",
                "per_page": "50",
                "page": "1",
                "sparkline": "true",
                "price_change_percentage": "1h,24h,7d",
            },
            symbol=ids or "markets",
        )
        if not isinstance(data, list):
            raise UpstreamUnavailableError(self.name, "Malformed markets payload")
        return data

    async def market_chart(self, coin_id: str, vs_currency: str = "usd", days: str = "7") -> dict:
        """Raw {prices: [[timestampMs, price], ...], ...} payload."""
        data = await self._get_json(
            f"{self.base_url}/coins/{coin_id}/market_chart",
            params={"vs_currency": vs_currency, "days": days},
            symbol=coin_id,
        )
        if not isinstance(data, dict) or not isinstance(data.get("prices"), list):
            raise UpstreamUnavailableError(self.name, f"Malformed chart payload for {coin_id}")
        return data

    async def trending(self) -> dict:
        return await self._get_json(f"{self.base_url}/search/trending", symbol="trending")

    async def global_stats(self) -> dict:
        return await self._get_json(f"{self.base_url}/global", symbol="global")

    # ============ Normalized data ============

    async def fetch_ohlc_series(self, coin_id: str, days: str = "90") -> PriceSeries:
        """OHLC candles (no volume) used for indicators."""
        coin_id = coin_id.lower()
        data = await self._get_json(
            f"{self.base_url}/coins/{coin_id}/ohlc",
            params={"vs_currency": "usd", "days": days},
            symbol=coin_id,
        )
        if not isinstance(data, list):
            raise UpstreamUnavailableError(self.name, f"Malformed OHLC payload for {coin_id}")

        points = []
        for row in data:
            if not isinstance(row, list) or len(row) < 5 or row[4] is None:
                continue
            points.append(
                PricePoint(
                    timestamp=int(row[0]),
                    open=row[1],
                    high=row[2],
                    low=row[3],
                    close=row[4],
                )
            )
        points = normalize_points(points)
        last = points[-1].close if points else 0.0
        previous = points[-2].close if len(points) > 1 else last

        return PriceSeries(
            symbol=coin_id,
            name=coin_display_name(coin_id),
            currency="USD",
            current_price=last,
            previous_close=previous,
            points=points,
        )

    async def fetch_quote_series(
        self, symbol: str, range: str = "3mo", interval: str = "1d"
    ) -> PriceSeries:
        """Close-only history; CoinGecko picks granularity from the days window."""
        coin_id = symbol.lower()
        data = await self.market_chart(coin_id, "usd", range_to_days(range))

        points = [
            PricePoint(timestamp=int(row[0]), close=row[1])
            for row in data["prices"]
            if isinstance(row, list) and len(row) >= 2 and row[1] is not None
        ]
        points = normalize_points(points)
        last = points[-1].close if points else 0.0
        previous = points[-2].close if len(points) > 1 else last

        return PriceSeries(
            symbol=coin_id,
            name=coin_display_name(coin_id),
            currency="USD",
            current_price=last,
            previous_close=previous,
            points=points,
        )

    def _to_quote(self, row: dict) -> Quote:
        return Quote(
            id=row["id"],
            symbol=str(row.get("symbol") or row["id"]).upper(),
            name=row.get("name") or coin_display_name(row["id"]),
            type=AssetType.CRYPTO,
            current_price=float(row["current_price"]),
            price_change_percentage_24h=float(row.get("price_change_percentage_24h") or 0.0),
            currency="USD",
        )

    async def fetch_quote(self, descriptor: SymbolDescriptor) -> Quote:
        rows = await self.markets("usd", descriptor.symbol.lower())
        if not rows:
            raise UpstreamUnavailableError(self.name, f"Unknown coin {descriptor.symbol}")
        return self._to_quote(rows[0])

    async def fetch_batch_quotes(self, symbols: list[str]) -> list[Quote]:
        """One comma-joined markets request; malformed rows are skipped."""
        try:
            rows = await self.markets("usd", ",".join(s.lower() for s in symbols))
        except UpstreamUnavailableError as e:
            logger.warning(f"CoinGecko batch unavailable: {e.message}")
            return []

        quotes = []
        for row in rows:
            try:
                quotes.append(self._to_quote(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed CoinGecko row: {e}")
        return quotes
