"""
TradeAgent Services

Service layer containing all business logic:
market data ingestion, caching, indicators and the chat relay.
"""

from tradeagent.services.base import (
    ServiceError,
    ValidationError,
    UpstreamUnavailableError,
    GatewayError,
    GatewayErrorKind,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "UpstreamUnavailableError",
    "GatewayError",
    "GatewayErrorKind",
]
