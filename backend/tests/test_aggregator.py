from __future__ import annotations

import asyncio

import pytest

from tradeagent.schemas.market import AssetType, SymbolDescriptor
from tradeagent.services.base import UpstreamUnavailableError
from tradeagent.services.data_ingestion import fan_out


def _descriptor(symbol: str) -> SymbolDescriptor:
    return SymbolDescriptor(symbol=symbol, name=symbol, type=AssetType.STOCK)


@pytest.mark.parametrize(
    "symbols",
    [
        ["AAPL", "MSFT", "BAD1", "NVDA", "BAD2"],
        ["BAD1", "BAD2", "AAPL", "MSFT", "NVDA"],
        ["AAPL", "MSFT", "NVDA", "BAD1", "BAD2"],
        ["BAD1", "AAPL", "MSFT", "NVDA", "BAD2"],
    ],
)
@pytest.mark.parametrize("failure_delay", [0.0, 0.01])
async def test_partial_failure_keeps_successes(symbols: list, failure_delay: float) -> None:
    async def fetch(descriptor: SymbolDescriptor) -> str:
        if descriptor.symbol.startswith("BAD"):
            await asyncio.sleep(failure_delay)
            raise UpstreamUnavailableError("YahooChart", f"{descriptor.symbol} returned status 404")
        return descriptor.symbol

    result = await fan_out([_descriptor(s) for s in symbols], fetch)

    assert sorted(result.results) == ["AAPL", "MSFT", "NVDA"]
    assert [f.symbol_id for f in result.failures] == ["BAD1", "BAD2"]
    assert "status 404" in result.failures[0].reason


async def test_none_counts_as_failure() -> None:
    async def fetch(symbol: str):
        return None if symbol == "EMPTY" else symbol

    result = await fan_out(["A", "EMPTY"], fetch)

    assert result.results == ["A"]
    assert result.failures[0].symbol_id == "EMPTY"
    assert result.failures[0].reason == "no data"


async def test_deadline_turns_slow_fetch_into_failure() -> None:
    async def fetch(symbol: str) -> str:
        if symbol == "SLOW":
            await asyncio.sleep(5)
        return symbol

    result = await fan_out(["FAST", "SLOW"], fetch, deadline=0.05)

    assert result.results == ["FAST"]
    assert result.failures[0].symbol_id == "SLOW"
    assert "deadline" in result.failures[0].reason


async def test_all_tasks_run_concurrently() -> None:
    started = []
    release = asyncio.Event()

    async def fetch(symbol: str) -> str:
        started.append(symbol)
        if len(started) == 3:
            release.set()
        await release.wait()
        return symbol

    result = await asyncio.wait_for(fan_out(["A", "B", "C"], fetch), timeout=1)

    assert sorted(result.results) == ["A", "B", "C"]
    assert result.failures == []


async def test_empty_input() -> None:
    async def fetch(symbol: str) -> str:
        return symbol

    result = await fan_out([], fetch)
    assert result.results == []
    assert result.failures == []
