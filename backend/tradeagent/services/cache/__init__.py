"""
Cache module for TradeAgent.

Provides the TTL response cache shared by all market data components.
"""

from tradeagent.services.cache.ttl_cache import (
    CacheEntry,
    MarketCache,
    connect_redis,
    DEFAULT_TTL_SECONDS,
)

__all__ = [
    "CacheEntry",
    "MarketCache",
    "connect_redis",
    "DEFAULT_TTL_SECONDS",
]
