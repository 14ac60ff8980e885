"""
Chat Context Assembly

Builds the system prompt for a chat completion:
    1. Fixed analyst persona and report sections
    2. User-uploaded documents, each under its filename
    3. Live indicator summaries for the requested or mentioned assets

Live summaries go through the market data service's indicators action so
they share its cache and numeric engine.
"""

import asyncio
import logging
from typing import Optional

from tradeagent.schemas.chat import ChatContext, ChatDocument, ChatMessage
from tradeagent.schemas.market import MarketAction, MarketDataRequest
from tradeagent.services.base import ServiceError
from tradeagent.services.llm.prompts import (
    ANALYST_SYSTEM_PROMPT,
    LIVE_DATA_DETECTED_HEADER,
    LIVE_DATA_EXPLICIT_HEADER,
    RAG_DOCUMENT_TEMPLATE,
    RAG_SECTION_HEADER,
)
from tradeagent.services.market_data import MarketDataService

logger = logging.getLogger(__name__)

MAX_DETECTED_ASSETS = 3

# Keyword -> symbol, scanned in this order. First match wins.
ASSET_ALIASES: list[tuple[str, str]] = [
    ("btc", "bitcoin"),
    ("bitcoin", "bitcoin"),
    ("eth", "ethereum"),
    ("ethereum", "ethereum"),
    ("sol", "solana"),
    ("solana", "solana"),
    ("xrp", "ripple"),
    ("ada", "cardano"),
    ("doge", "dogecoin"),
    ("tesla", "TSLA"),
    ("tsla", "TSLA"),
    ("apple", "AAPL"),
    ("aapl", "AAPL"),
    ("nvidia", "NVDA"),
    ("nvda", "NVDA"),
    ("reliance", "RELIANCE.NS"),
    ("tcs", "TCS.NS"),
    ("hdfc", "HDFCBANK.NS"),
    ("infosys", "INFY.NS"),
    ("icici", "ICICIBANK.NS"),
    ("sbi", "SBIN.NS"),
    ("nifty", "^NSEI"),
    ("sensex", "^BSESN"),
]


def detect_assets(text: str, limit: int = MAX_DETECTED_ASSETS) -> list[str]:
    """
    Symbols whose keyword appears in text (case-insensitive substring).

    Ordered by alias table position, de-duplicated by symbol, capped at limit.
    """
    text = (text or "").lower()
    detected: list[str] = []
    for keyword, symbol in ASSET_ALIASES:
        if keyword in text and symbol not in detected:
            detected.append(symbol)
    return detected[:limit]


def _last_user_message(messages: list[ChatMessage]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            return message.content
    return ""


class ContextAssembler:
    """Builds a ChatContext fresh for every chat request."""

    def __init__(self, market_data: MarketDataService):
        self.market_data = market_data

    async def fetch_summary(self, symbol: str) -> Optional[str]:
        """Indicator summary for symbol, or None if it cannot be computed."""
        try:
            result = await self.market_data.dispatch(
                MarketDataRequest(action=MarketAction.INDICATORS.value, symbol=symbol)
            )
        except ServiceError as e:
            logger.warning(f"No live summary for {symbol}: {e.message}")
            return None
        return result.get("summary") or None

    async def build(
        self,
        messages: list[ChatMessage],
        documents: Optional[list[ChatDocument]] = None,
        asset: Optional[str] = None,
    ) -> ChatContext:
        prompt = ANALYST_SYSTEM_PROMPT

        rag_documents = [(doc.name, doc.content) for doc in documents or []]
        if rag_documents:
            prompt += RAG_SECTION_HEADER
            for name, content in rag_documents:
                prompt += RAG_DOCUMENT_TEMPLATE.format(name=name, content=content)

        if asset:
            symbols = [asset]
            header = LIVE_DATA_EXPLICIT_HEADER
        else:
            symbols = detect_assets(_last_user_message(messages))
            header = LIVE_DATA_DETECTED_HEADER

        summaries = await asyncio.gather(*(self.fetch_summary(s) for s in symbols))
        live_summaries = [s for s in summaries if s]
        if live_summaries:
            prompt += header + "\n".join(live_summaries) + "\n"

        logger.info(
            f"Chat context: {len(rag_documents)} documents, "
            f"{len(live_summaries)}/{len(symbols)} live summaries"
        )

        return ChatContext(
            system_prompt=prompt,
            rag_documents=rag_documents,
            live_summaries=live_summaries,
        )
