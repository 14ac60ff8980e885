"""
Streaming LLM Relay

Forwards a chat completion request to an OpenAI-compatible gateway with
stream=true and pipes the upstream body back chunk by chunk, without
buffering or reparsing the event stream.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

import aiohttp

from tradeagent.services.base import GatewayError, GatewayErrorKind

logger = logging.getLogger(__name__)

GATEWAY_MESSAGES = {
    GatewayErrorKind.RATE_LIMITED: "Rate limit exceeded. Please try again shortly.",
    GatewayErrorKind.QUOTA_EXHAUSTED: "AI credits exhausted. Please add credits in Settings.",
    GatewayErrorKind.UNAVAILABLE: "AI service unavailable",
}


def classify_status(status: int) -> GatewayErrorKind:
    if status == 429:
        return GatewayErrorKind.RATE_LIMITED
    if status == 402:
        return GatewayErrorKind.QUOTA_EXHAUSTED
    return GatewayErrorKind.UNAVAILABLE


class StreamingRelay:
    """One-directional pipe from the model gateway to the caller."""

    def __init__(
        self,
        gateway_url: str,
        api_key: Optional[str],
        model: str,
        connect_timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.gateway_url = gateway_url
        self.api_key = api_key
        self.model = model
        self._connect_timeout = connect_timeout
        self._session = session

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Session without a total timeout; streams may run for minutes."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=None, sock_connect=self._connect_timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def open_stream(self, messages: list[dict]) -> AsyncIterator[bytes]:
        """
        Start a streamed completion.

        Args:
            messages: Full message list, system prompt first

        Returns:
            Async iterator over raw upstream body chunks

        Raises:
            GatewayError: Missing key, transport failure or non-2xx status
        """
        if not self.api_key:
            raise GatewayError(GatewayErrorKind.UNAVAILABLE, "LLM gateway API key is not configured")

        session = await self._ensure_session()
        try:
            response = await session.post(
                self.gateway_url,
                json={"model": self.model, "messages": messages, "stream": True},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"AI gateway request failed: {e}")
            raise GatewayError(
                GatewayErrorKind.UNAVAILABLE, GATEWAY_MESSAGES[GatewayErrorKind.UNAVAILABLE]
            ) from e

        if not 200 <= response.status < 300:
            body = await response.text()
            response.release()
            kind = classify_status(response.status)
            logger.error(f"AI gateway error: {response.status} {body[:500]}")
            raise GatewayError(kind, GATEWAY_MESSAGES[kind], details={"status": response.status})

        return self._relay(response)

    async def _relay(self, response: aiohttp.ClientResponse) -> AsyncIterator[bytes]:
        """Yield upstream chunks; closing the generator drops the upstream connection."""
        try:
            async for chunk in response.content.iter_any():
                yield chunk
        finally:
            response.close()
