"""
Concurrent fan-out across an upstream client.

Every symbol is fetched as an independent task. The join is a full
barrier: all tasks run to completion (success, failure or deadline) and
only the successes are returned. Failures never propagate; they are
reported in a parallel diagnostics list.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Iterable, Optional, TypeVar

logger = logging.getLogger(__name__)

DescriptorT = TypeVar("DescriptorT")
ResultT = TypeVar("ResultT")


@dataclass
class FanOutFailure:
    """Why one symbol is missing from a fan-out result."""

    symbol_id: str
    reason: str


@dataclass
class FanOutResult(Generic[ResultT]):
    results: list[ResultT] = field(default_factory=list)
    failures: list[FanOutFailure] = field(default_factory=list)


def _symbol_id(descriptor) -> str:
    return str(getattr(descriptor, "symbol", descriptor))


async def fan_out(
    descriptors: Iterable[DescriptorT],
    fetch: Callable[[DescriptorT], Awaitable[Optional[ResultT]]],
    deadline: Optional[float] = None,
) -> FanOutResult[ResultT]:
    """
    Run fetch(descriptor) for every descriptor concurrently.

    Args:
        descriptors: Symbols (or catalog descriptors) to fetch
        fetch: Single-symbol coroutine; returning None counts as a failure
        deadline: Per-task timeout in seconds; a timeout is a per-symbol failure

    Returns:
        FanOutResult with successes in completion-independent order
    """
    descriptors = list(descriptors)

    async def _run(descriptor):
        if deadline is None:
            return await fetch(descriptor)
        return await asyncio.wait_for(fetch(descriptor), timeout=deadline)

    outcomes = await asyncio.gather(
        *(_run(d) for d in descriptors), return_exceptions=True
    )

    result: FanOutResult[ResultT] = FanOutResult()
    for descriptor, outcome in zip(descriptors, outcomes):
        symbol_id = _symbol_id(descriptor)
        if isinstance(outcome, asyncio.TimeoutError):
            result.failures.append(FanOutFailure(symbol_id, f"deadline of {deadline}s exceeded"))
        elif isinstance(outcome, asyncio.CancelledError):
            raise outcome
        elif isinstance(outcome, BaseException):
            result.failures.append(FanOutFailure(symbol_id, str(outcome) or type(outcome).__name__))
        elif outcome is None:
            result.failures.append(FanOutFailure(symbol_id, "no data"))
        else:
            result.results.append(outcome)

    if result.failures:
        logger.warning(
            f"Fan-out: {len(result.results)}/{len(descriptors)} succeeded, "
            f"failed: {', '.join(f.symbol_id for f in result.failures)}"
        )

    return result
