"""
Time-bounded response cache.

Absorbs upstream rate limits: every market-data action stores its payload
here for a fixed TTL (120s by default). Entries expire lazily - an expired
entry is simply treated as absent on read, nothing evicts it.

When a Redis client is supplied the cache mirrors writes into Redis with a
native expiry and reads through it first, falling back to the in-process map
on any Redis error.
"""

import copy
import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 120.0


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


async def connect_redis(url: Optional[str]) -> Optional[redis.Redis]:
    """
    Open a Redis connection for the cache mirror.
    Returns None when no URL is configured or the server is unreachable.
    """
    if not url:
        return None

    try:
        client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        await client.ping()
        logger.info(f"Redis connected: {url}")
        return client
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory cache only.")
        return None


class MarketCache:
    """
    Key -> (value, stored_at) store with a fixed time-to-live.

    Keys:
    - prices:{vs_currency}:{ids}
    - chart:{id}:{vs_currency}:{days}
    - stocks:all (plus quote:{symbol} per equity)
    - stock-chart:{symbol}:{range}:{interval}
    - indicators:{symbol}
    - trending / global
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        redis_client: Optional[redis.Redis] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._redis = redis_client
        self._entries: dict[str, CacheEntry] = {}

    @property
    def redis(self) -> Optional[redis.Redis]:
        return self._redis

    def _memory_get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            return None
        return copy.deepcopy(entry.value)

    def _memory_set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=copy.deepcopy(value), stored_at=self._clock())

    async def get(self, key: str) -> Optional[Any]:
        """Return a copy of the cached value, or None if absent or expired."""
        if self.redis:
            try:
                raw = await self.redis.get(key)
                if raw is not None:
                    logger.debug(f"Cache hit (redis): {key}")
                    return json.loads(raw)
            except Exception as e:
                logger.debug(f"Redis get failed for {key}: {e}")

        value = self._memory_get(key)
        logger.debug(f"Cache {'hit' if value is not None else 'miss'}: {key}")
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store value under key, overwriting and resetting its freshness."""
        self._memory_set(key, value)

        if self.redis:
            try:
                await self.redis.set(
                    key, json.dumps(value), ex=max(1, math.ceil(self.ttl_seconds))
                )
            except Exception as e:
                logger.debug(f"Redis set failed for {key}: {e}")

    async def close(self) -> None:
        """Close the Redis mirror, if any."""
        if self._redis:
            await self._redis.close()
            self._redis = None
            logger.info("Redis connection closed")
