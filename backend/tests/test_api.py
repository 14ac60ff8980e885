from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tradeagent.core.config import Settings
from tradeagent.main import create_app
from tradeagent.services.llm import ContextAssembler, StreamingRelay
from tradeagent.services.market_data import MarketDataService
from utils.fakes import FakeGatewayResponse, FakeGatewaySession, make_series


SSE_CHUNKS = [
    b'data: {"choices":[{"delta":{"content":"Bitcoin"}}]}\n\n',
    b'data: {"choices":[{"delta":{"content":" looks firm."}}]}\n\n',
    b"data: [DONE]\n\n",
]


@pytest.fixture
def gateway() -> FakeGatewaySession:
    return FakeGatewaySession(FakeGatewayResponse(200, SSE_CHUNKS))


@pytest.fixture
def client(market_service: MarketDataService, gateway: FakeGatewaySession):
    app = create_app(Settings(llm_api_key="test-key"), init_on_startup=False)
    app.state.market_data = market_service
    app.state.context_assembler = ContextAssembler(market_service)
    app.state.relay = StreamingRelay(
        "https://gateway.example/v1/chat/completions", "test-key", "test-model", session=gateway
    )
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ============ Market data ============


def test_market_data_prices(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={"action": "prices"})

    assert response.status_code == 200
    assert response.json()[0]["id"] == "bitcoin"


def test_market_data_indicators(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={"action": "indicators", "symbol": "TSLA"})

    assert response.status_code == 200
    body = response.json()
    assert body["trend"] == "Bullish"
    assert body["summary"].startswith("TSLA: Price $159")


def test_unknown_action_is_400(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={"action": "explode"})

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown action"}


def test_missing_action_is_400(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={})
    assert response.status_code == 400


def test_stock_chart_failure_is_502(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={"action": "stock-chart", "symbol": "DELISTED"})

    assert response.status_code == 502
    assert response.json() == {"error": "Stock chart unavailable"}


def test_indicators_with_zero_close_is_served(client: TestClient, market_service: MarketDataService) -> None:
    market_service.equities.series["ZERO"] = make_series("ZERO", [0.0] + [10.0] * 59)

    for _ in range(2):
        response = client.post("/api/v1/market-data", json={"action": "indicators", "symbol": "ZERO"})
        assert response.status_code == 200
        assert response.json()["volatility"] == 0.0


def test_indicators_without_data_is_404(client: TestClient) -> None:
    response = client.post("/api/v1/market-data", json={"action": "indicators", "symbol": "DELISTED"})

    assert response.status_code == 404
    assert response.json() == {"error": "No data available for indicators"}


def test_trending_unavailable_is_502(client: TestClient, market_service: MarketDataService) -> None:
    market_service.crypto.available = False

    response = client.post("/api/v1/market-data", json={"action": "trending"})

    assert response.status_code == 502
    assert "error" in response.json()


@pytest.mark.parametrize("body", [b"{not json", b"[1, 2]"])
def test_malformed_body_is_500(client: TestClient, body: bytes) -> None:
    response = client.post(
        "/api/v1/market-data", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 500
    assert response.json()["error"].startswith("Malformed request body")


# ============ Chat ============


def test_chat_streams_gateway_bytes(client: TestClient, gateway: FakeGatewaySession) -> None:
    response = client.post(
        "/api/v1/chat",
        json={
            "messages": [{"role": "user", "content": "what about BTC?"}],
            "documents": [{"name": "thesis.md", "content": "Long bitcoin."}],
        },
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.content == b"".join(SSE_CHUNKS)

    _, payload, _ = gateway.posts[0]
    system = payload["messages"][0]
    assert system["role"] == "system"
    assert "### thesis.md\nLong bitcoin." in system["content"]
    assert "bitcoin: Price" in system["content"]
    assert payload["messages"][1] == {"role": "user", "content": "what about BTC?"}
    assert payload["stream"] is True


@pytest.mark.parametrize("status", [429, 402, 500])
def test_chat_gateway_errors(client: TestClient, gateway: FakeGatewaySession, status: int) -> None:
    gateway.response = FakeGatewayResponse(status, body="nope")

    response = client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == status
    assert "error" in response.json()


def test_chat_without_api_key_is_500(client: TestClient) -> None:
    client.app.state.relay.api_key = None

    response = client.post("/api/v1/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 500
    assert response.json() == {"error": "LLM gateway API key is not configured"}


def test_chat_malformed_body_is_500(client: TestClient) -> None:
    response = client.post("/api/v1/chat", json={"messages": "not-a-list"})
    assert response.status_code == 500
