"""
CONTRACT 2: Indicator Engine

Input: PriceSeries
Output: IndicatorResult

This module performs ALL mathematical calculations.
Pure Python/NumPy - NO LLM involvement.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TrendDirection(str, Enum):
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    SIDEWAYS = "Sideways"
    NEUTRAL = "Neutral"


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


# =============================================================================
# OUTPUT: IndicatorResult
# =============================================================================


class MACDData(BaseModel):
    macd: float
    signal: float
    histogram: float


class IndicatorResult(BaseModel):
    """
    Complete indicator analysis for one symbol.

    `summary` is the single-line digest embedded into chat context.
    """

    name: str
    price: float
    rsi: float
    sma20: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    macd: Optional[MACDData] = None
    support: float
    resistance: float
    volatility: float
    currency: str = "USD"
    trend: TrendDirection
    signal: SignalType
    confidence: int = Field(..., ge=10, le=95)
    summary: str
