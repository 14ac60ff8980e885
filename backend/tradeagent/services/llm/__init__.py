"""
LLM Chat Service

CONTRACT:
    Input:  ChatRequest (messages, documents, asset)
    Output: streamed completion tokens

RESPONSIBILITIES:
    - Assemble the analyst system prompt with RAG documents
    - Attach live indicator summaries for requested or mentioned assets
    - Relay the gateway's token stream back unmodified
    - Classify gateway failures (rate limit / quota / generic)

CRITICAL RULES:
    - LLM does NO math - all numbers come from the Indicator Engine
"""

from tradeagent.services.llm.context import (
    ASSET_ALIASES,
    ContextAssembler,
    detect_assets,
)
from tradeagent.services.llm.relay import StreamingRelay, classify_status

__all__ = [
    "ASSET_ALIASES",
    "ContextAssembler",
    "detect_assets",
    "StreamingRelay",
    "classify_status",
]
