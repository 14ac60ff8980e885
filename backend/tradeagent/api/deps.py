"""
Request-scoped access to the services built during application startup.
"""

from fastapi import Request

from tradeagent.services.llm import ContextAssembler, StreamingRelay
from tradeagent.services.market_data import MarketDataService


def get_market_data_service(request: Request) -> MarketDataService:
    return request.app.state.market_data


def get_context_assembler(request: Request) -> ContextAssembler:
    return request.app.state.context_assembler


def get_streaming_relay(request: Request) -> StreamingRelay:
    return request.app.state.relay
