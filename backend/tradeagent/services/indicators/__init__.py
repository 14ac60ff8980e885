"""
Indicator Engine Service

CONTRACT:
    Input:  PriceSeries
    Output: IndicatorResult

RESPONSIBILITIES:
    - Calculate RSI, SMA, EMA, MACD
    - Detect support/resistance levels
    - Calculate return volatility
    - Score trend, signal and confidence
    - Format the one-line summary used as chat context

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from tradeagent.services.indicators.service import (
    compute_indicators,
    format_price,
    format_summary,
)

__all__ = [
    "compute_indicators",
    "format_price",
    "format_summary",
]
