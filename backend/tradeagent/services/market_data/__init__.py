"""
Market Data Service

CONTRACT:
    Input:  MarketDataRequest (action + parameters)
    Output: JSON-ready payload for that action

Every action is cache-checked first; upstream clients are only called on
a miss.
"""

from tradeagent.services.market_data.service import MarketDataService

__all__ = ["MarketDataService"]
