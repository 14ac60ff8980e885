"""
Upstream Client Interface

Defines the contract every market data provider adapter implements.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp

from tradeagent.schemas.market import PriceSeries, Quote, SymbolDescriptor
from tradeagent.services.base import UpstreamUnavailableError

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json",
}


class UpstreamClient(ABC):
    """
    Upstream Client Contract.

    Translates one provider's responses into Quote / PriceSeries.

    ERROR POLICY:
        Single-symbol methods raise UpstreamUnavailableError on a non-2xx
        status or malformed payload. Batch methods never raise for a
        single symbol - that symbol is simply absent from the result.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = session

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout_seconds),
                headers=DEFAULT_HEADERS,
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, url: str, params: Optional[dict] = None, symbol: str = ""):
        """GET url and decode JSON, mapping every failure to UpstreamUnavailableError."""
        session = await self._ensure_session()
        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    body = await response.text()
                    raise UpstreamUnavailableError(
                        self.name,
                        f"{symbol or url} returned status {response.status}",
                        details={"status": response.status, "body": body[:200]},
                    )
                return await response.json(content_type=None)
        except UpstreamUnavailableError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise UpstreamUnavailableError(
                self.name, f"{symbol or url} request failed: {e}"
            ) from e

    @abstractmethod
    async def fetch_quote_series(
        self, symbol: str, range: str = "3mo", interval: str = "1d"
    ) -> PriceSeries:
        """Fetch history for one symbol."""
        pass

    @abstractmethod
    async def fetch_quote(self, descriptor: SymbolDescriptor) -> Quote:
        """Fetch the current quote for one symbol."""
        pass

    @abstractmethod
    async def fetch_batch_quotes(self, symbols: list[str]) -> list[Quote]:
        """Fetch quotes for many symbols; failed symbols are omitted."""
        pass
