from __future__ import annotations

from typing import Optional

import aiohttp
import pytest

from tradeagent.services.base import GatewayError, GatewayErrorKind
from tradeagent.services.llm import StreamingRelay, classify_status
from utils.fakes import FakeGatewayResponse, FakeGatewaySession


def _relay(session: FakeGatewaySession, api_key: Optional[str] = "test-key") -> StreamingRelay:
    return StreamingRelay(
        "https://gateway.example/v1/chat/completions",
        api_key,
        "test-model",
        session=session,
    )


MESSAGES = [
    {"role": "system", "content": "You are TradeAgent."},
    {"role": "user", "content": "hi"},
]


@pytest.mark.parametrize(
    "status,kind",
    [
        (429, GatewayErrorKind.RATE_LIMITED),
        (402, GatewayErrorKind.QUOTA_EXHAUSTED),
        (500, GatewayErrorKind.UNAVAILABLE),
        (503, GatewayErrorKind.UNAVAILABLE),
        (400, GatewayErrorKind.UNAVAILABLE),
    ],
)
def test_classify_status(status: int, kind: GatewayErrorKind) -> None:
    assert classify_status(status) == kind


async def test_stream_is_forwarded_unchanged() -> None:
    chunks = [b'data: {"choices":[{"delta":{"content":"Hel"}}]}\n\n', b"data: [DONE]\n\n"]
    response = FakeGatewayResponse(200, chunks)
    session = FakeGatewaySession(response)

    stream = await _relay(session).open_stream(MESSAGES)
    received = [chunk async for chunk in stream]

    assert received == chunks
    assert response.closed

    url, body, headers = session.posts[0]
    assert url == "https://gateway.example/v1/chat/completions"
    assert body == {"model": "test-model", "messages": MESSAGES, "stream": True}
    assert headers["Authorization"] == "Bearer test-key"


async def test_abandoned_stream_closes_upstream() -> None:
    response = FakeGatewayResponse(200, [b"a", b"b", b"c"])
    stream = await _relay(FakeGatewaySession(response)).open_stream(MESSAGES)

    assert await stream.__anext__() == b"a"
    await stream.aclose()

    assert response.closed


@pytest.mark.parametrize(
    "status,expected_code",
    [(429, 429), (402, 402), (500, 500), (502, 500)],
)
async def test_gateway_status_is_classified(status: int, expected_code: int) -> None:
    response = FakeGatewayResponse(status, body="upstream said no")

    with pytest.raises(GatewayError) as exc_info:
        await _relay(FakeGatewaySession(response)).open_stream(MESSAGES)

    assert exc_info.value.status_code == expected_code
    assert response.released


async def test_rate_limit_message() -> None:
    with pytest.raises(GatewayError) as exc_info:
        await _relay(FakeGatewaySession(FakeGatewayResponse(429))).open_stream(MESSAGES)

    assert "Rate limit" in exc_info.value.message


async def test_missing_api_key_is_unavailable() -> None:
    session = FakeGatewaySession(FakeGatewayResponse(200))

    with pytest.raises(GatewayError) as exc_info:
        await _relay(session, api_key=None).open_stream(MESSAGES)

    assert exc_info.value.kind == GatewayErrorKind.UNAVAILABLE
    assert exc_info.value.status_code == 500
    assert session.posts == []


async def test_transport_failure_is_unavailable() -> None:
    session = FakeGatewaySession(error=aiohttp.ClientConnectionError("refused"))

    with pytest.raises(GatewayError) as exc_info:
        await _relay(session).open_stream(MESSAGES)

    assert exc_info.value.status_code == 500


async def test_close_closes_session() -> None:
    session = FakeGatewaySession()
    await _relay(session).close()
    assert session.closed
