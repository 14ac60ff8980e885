"""
CONTRACT 1: Market Data

Input: MarketDataRequest
Output: Quote lists, PriceSeries, chart payloads

Upstream clients normalize provider responses into these shapes.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class AssetType(str, Enum):
    CRYPTO = "crypto"
    STOCK = "stock"
    INDEX = "index"
    COMMODITY = "commodity"


class MarketAction(str, Enum):
    PRICES = "prices"
    CHART = "chart"
    STOCKS = "stocks"
    STOCK_CHART = "stock-chart"
    INDICATORS = "indicators"
    TRENDING = "trending"
    GLOBAL = "global"


# =============================================================================
# INPUT: MarketDataRequest
# =============================================================================


class MarketDataRequest(BaseModel):
    """
    Action-dispatched market data request.
    Sent by: Frontend / Context Assembler
    Received by: Market Data Service

    `action` stays a plain string so unknown actions reach the dispatcher
    and are rejected there with a 400.
    """

    action: str = ""
    ids: Optional[str] = None
    vs_currency: str = "usd"
    days: str = "7"
    symbol: Optional[str] = None
    range: Optional[str] = None
    interval: Optional[str] = None

    @field_validator("days", mode="before")
    @classmethod
    def _days_as_string(cls, value):
        return str(value) if value is not None else "7"


# =============================================================================
# OUTPUT: Normalized Market Data
# =============================================================================


class SymbolDescriptor(BaseModel):
    """Catalog entry describing one upstream symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    type: AssetType
    currency: Optional[str] = None


class Quote(BaseModel):
    """Point-in-time price for one asset, normalized across providers."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Upstream symbol or coin id")
    symbol: str = Field(..., description="Display symbol")
    name: str
    type: AssetType
    current_price: float
    price_change_percentage_24h: float = 0.0
    currency: str = "USD"


class PricePoint(BaseModel):
    """Single series point. Only close is guaranteed."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Unix epoch milliseconds")
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: float
    volume: Optional[float] = None


class PriceSeries(BaseModel):
    """Ascending, de-duplicated price history for one symbol."""

    symbol: str
    name: str
    currency: str = "USD"
    current_price: float = 0.0
    previous_close: float = 0.0
    points: list[PricePoint] = Field(default_factory=list)

    @property
    def closes(self) -> list[float]:
        return [p.close for p in self.points]

    @property
    def highs(self) -> list[float]:
        return [p.high for p in self.points if p.high is not None]

    @property
    def lows(self) -> list[float]:
        return [p.low for p in self.points if p.low is not None]

    @property
    def volumes(self) -> list[float]:
        return [p.volume for p in self.points if p.volume is not None]


def normalize_points(points: list[PricePoint]) -> list[PricePoint]:
    """Sort ascending by timestamp and keep the first point per timestamp."""
    seen: set[int] = set()
    result = []
    for point in sorted(points, key=lambda p: p.timestamp):
        if point.timestamp in seen:
            continue
        seen.add(point.timestamp)
        result.append(point)
    return result


class StockChartMeta(BaseModel):
    symbol: str
    name: str
    currency: str
    currentPrice: float


class OHLCBar(BaseModel):
    timestamp: int
    time: str
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: float
    volume: Optional[float] = None


class StockChart(BaseModel):
    """Response payload for the stock-chart action."""

    meta: StockChartMeta
    ohlc: list[OHLCBar]
