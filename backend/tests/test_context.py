from __future__ import annotations

import pytest

from tradeagent.schemas.chat import ChatDocument, ChatMessage
from tradeagent.services.llm import ContextAssembler, detect_assets
from tradeagent.services.llm.prompts import (
    ANALYST_SYSTEM_PROMPT,
    LIVE_DATA_DETECTED_HEADER,
    LIVE_DATA_EXPLICIT_HEADER,
)
from tradeagent.services.market_data import MarketDataService


@pytest.fixture
def assembler(market_service: MarketDataService) -> ContextAssembler:
    return ContextAssembler(market_service)


def _user(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("what about BTC and Tesla", ["bitcoin", "TSLA"]),
        ("Bitcoin vs BTC", ["bitcoin"]),
        ("compare btc, eth, sol and doge", ["bitcoin", "ethereum", "solana"]),
        ("How is NIFTY doing?", ["^NSEI"]),
        ("tell me a joke", []),
        ("", []),
    ],
)
def test_detect_assets(text: str, expected: list) -> None:
    assert detect_assets(text) == expected


async def test_prompt_without_documents_or_assets(assembler: ContextAssembler) -> None:
    context = await assembler.build([_user("hello there")])

    assert context.system_prompt == ANALYST_SYSTEM_PROMPT
    assert context.rag_documents == []
    assert context.live_summaries == []


async def test_documents_appear_under_their_names(assembler: ContextAssembler) -> None:
    documents = [
        ChatDocument(name="q3-report.pdf", content="Revenue grew 12%."),
        ChatDocument(name="notes.txt", content="Watch the 200-day line."),
    ]
    context = await assembler.build([_user("summarize")], documents)

    prompt = context.system_prompt
    assert prompt.startswith(ANALYST_SYSTEM_PROMPT)
    assert "### q3-report.pdf\nRevenue grew 12%." in prompt
    assert "### notes.txt\nWatch the 200-day line." in prompt
    assert prompt.index("q3-report.pdf") < prompt.index("notes.txt")
    assert context.rag_documents == [
        ("q3-report.pdf", "Revenue grew 12%."),
        ("notes.txt", "Watch the 200-day line."),
    ]


async def test_detected_assets_get_live_summaries(assembler: ContextAssembler) -> None:
    context = await assembler.build([_user("what about BTC and Tesla")])

    assert len(context.live_summaries) == 2
    assert context.live_summaries[0].startswith("bitcoin: Price")
    assert context.live_summaries[1].startswith("TSLA: Price")
    assert LIVE_DATA_DETECTED_HEADER in context.system_prompt
    assert context.system_prompt.endswith(context.live_summaries[1] + "\n")


async def test_only_last_user_message_is_scanned(assembler: ContextAssembler) -> None:
    messages = [
        _user("what about tesla"),
        ChatMessage(role="assistant", content="Tesla looks strong, unlike bitcoin."),
        _user("and the broader market?"),
    ]
    context = await assembler.build(messages)

    assert context.live_summaries == []


async def test_explicit_asset_overrides_detection(assembler: ContextAssembler) -> None:
    context = await assembler.build([_user("what about tesla")], asset="RELIANCE.NS")

    assert len(context.live_summaries) == 1
    assert context.live_summaries[0].startswith("RELIANCE.NS: Price ₹159")
    assert LIVE_DATA_EXPLICIT_HEADER in context.system_prompt
    assert LIVE_DATA_DETECTED_HEADER not in context.system_prompt


async def test_failed_summary_is_skipped(assembler: ContextAssembler) -> None:
    context = await assembler.build([_user("anything")], asset="DELISTED")

    assert context.live_summaries == []
    assert context.system_prompt == ANALYST_SYSTEM_PROMPT


async def test_summaries_share_the_indicator_cache(
    assembler: ContextAssembler, market_service: MarketDataService
) -> None:
    await assembler.build([_user("tesla?")])
    await assembler.build([_user("tesla again?")])

    assert market_service.equities.calls == [("series", "TSLA", "1y", "1d")]
