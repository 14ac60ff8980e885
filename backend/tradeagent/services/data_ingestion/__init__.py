"""
Data Ingestion Service

RESPONSIBILITIES:
    - Fetch crypto data from CoinGecko
    - Fetch equities, indices and commodities from Yahoo Finance
    - Normalize both into Quote / PriceSeries
    - Fan out batches concurrently, tolerating per-symbol failures

NO LLM INVOLVEMENT - Pure data fetching and transformation.
"""

from tradeagent.services.data_ingestion.interface import UpstreamClient
from tradeagent.services.data_ingestion.aggregator import (
    FanOutFailure,
    FanOutResult,
    fan_out,
)
from tradeagent.services.data_ingestion.coingecko_adapter import CoinGeckoClient
from tradeagent.services.data_ingestion.yahoo_adapter import YahooChartClient

__all__ = [
    "UpstreamClient",
    "FanOutFailure",
    "FanOutResult",
    "fan_out",
    "CoinGeckoClient",
    "YahooChartClient",
]
