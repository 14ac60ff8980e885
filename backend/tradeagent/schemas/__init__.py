"""
TradeAgent Schema Contracts

This module defines all JSON contracts between system components.
"""

from tradeagent.schemas.market import (
    AssetType,
    MarketAction,
    MarketDataRequest,
    SymbolDescriptor,
    Quote,
    PricePoint,
    PriceSeries,
    StockChart,
    StockChartMeta,
    OHLCBar,
)
from tradeagent.schemas.indicators import (
    IndicatorResult,
    MACDData,
    TrendDirection,
    SignalType,
)
from tradeagent.schemas.chat import (
    ChatMessage,
    ChatDocument,
    ChatRequest,
    ChatContext,
)

__all__ = [
    # Market
    "AssetType",
    "MarketAction",
    "MarketDataRequest",
    "SymbolDescriptor",
    "Quote",
    "PricePoint",
    "PriceSeries",
    "StockChart",
    "StockChartMeta",
    "OHLCBar",
    # Indicators
    "IndicatorResult",
    "MACDData",
    "TrendDirection",
    "SignalType",
    # Chat
    "ChatMessage",
    "ChatDocument",
    "ChatRequest",
    "ChatContext",
]
