"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
NO LLM INVOLVEMENT - All math is deterministic.

Every function takes plain sequences of floats and returns the indicator
value at the end of the series (None when history is insufficient).
"""

from typing import Optional, Sequence

import numpy as np

from tradeagent.schemas.indicators import MACDData, SignalType, TrendDirection


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(closes: Sequence[float], period: int) -> Optional[float]:
    """Simple Moving Average of the trailing `period` closes."""
    if len(closes) < period:
        return None
    return float(np.mean(np.asarray(closes[-period:], dtype=float)))


def ema(closes: Sequence[float], period: int) -> Optional[float]:
    """Exponential Moving Average, seeded with the SMA of the first `period` closes."""
    if len(closes) < period:
        return None

    data = np.asarray(closes, dtype=float)
    multiplier = 2 / (period + 1)

    # Start with SMA
    result = float(np.mean(data[:period]))

    for price in data[period:]:
        result = (price - result) * multiplier + result

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Relative Strength Index over the trailing `period` price changes.

    Single-window average gain / average loss, not the running smoothed RSI.
    50 with insufficient history or a flat window, 100 when nothing fell.
    """
    if len(closes) < period + 1:
        return 50.0

    deltas = np.diff(np.asarray(closes[-(period + 1):], dtype=float))
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = np.sum(gains) / period
    avg_loss = np.sum(losses) / period

    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))


def rsi_label(value: float) -> str:
    if value > 70:
        return "overbought"
    if value < 30:
        return "oversold"
    return "neutral"


def macd(closes: Sequence[float]) -> Optional[MACDData]:
    """
    MACD (Moving Average Convergence Divergence).

    Signal line is approximated as 0.8 x MACD line rather than a 9-period
    EMA of it; downstream consumers rely on this exact ratio.
    """
    fast_ema = ema(closes, 12)
    slow_ema = ema(closes, 26)
    if fast_ema is None or slow_ema is None:
        return None

    macd_line = fast_ema - slow_ema
    signal_line = macd_line * 0.8
    return MACDData(macd=macd_line, signal=signal_line, histogram=macd_line - signal_line)


# =============================================================================
# LEVELS & VOLATILITY
# =============================================================================


def support_resistance(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float] = (),
    window: int = 20,
) -> tuple[float, float]:
    """
    (support, resistance) = (min of trailing lows, max of trailing highs).
    Close-only series fall back to closes.
    """
    highs = highs if len(highs) else closes
    lows = lows if len(lows) else closes
    if not len(highs) or not len(lows):
        return 0.0, 0.0

    support = float(np.min(np.asarray(lows[-window:], dtype=float)))
    resistance = float(np.max(np.asarray(highs[-window:], dtype=float)))
    return support, resistance


def volatility(closes: Sequence[float]) -> float:
    """
    Standard deviation of simple returns over the full series, in percent.
    Returns from a zero close are skipped.
    """
    if len(closes) < 2:
        return 0.0

    data = np.asarray(closes, dtype=float)
    previous = data[:-1]
    valid = previous != 0
    if not valid.any():
        return 0.0

    returns = np.diff(data)[valid] / previous[valid]
    return float(np.std(returns) * 100)


def volume_trend(volumes: Sequence[float]) -> str:
    """Compare the latest volume with the series average."""
    if not len(volumes):
        return "normal"

    avg_volume = float(np.mean(np.asarray(volumes, dtype=float)))
    last_volume = float(volumes[-1] or 0)

    if last_volume > avg_volume * 1.2:
        return "above avg"
    if last_volume < avg_volume * 0.8:
        return "below avg"
    return "normal"


# =============================================================================
# TREND & SIGNAL
# =============================================================================


def trend_direction(
    price: float, sma20: Optional[float], sma50: Optional[float]
) -> TrendDirection:
    if sma20 is None or sma50 is None:
        return TrendDirection.NEUTRAL
    if price > sma20 > sma50:
        return TrendDirection.BULLISH
    if price < sma20 < sma50:
        return TrendDirection.BEARISH
    return TrendDirection.SIDEWAYS


def composite_signal(
    trend: TrendDirection, rsi_value: float, macd_data: Optional[MACDData]
) -> tuple[SignalType, int]:
    """
    Score trend, RSI extremes and MACD momentum into (signal, confidence).
    Confidence is clamped to [10, 95].
    """
    confidence = 50
    if trend == TrendDirection.BULLISH:
        confidence += 15
    elif trend == TrendDirection.BEARISH:
        confidence -= 15
    if rsi_value < 30:
        confidence += 10
    elif rsi_value > 70:
        confidence -= 10
    if macd_data is not None and macd_data.histogram > 0:
        confidence += 7

    confidence = max(10, min(95, confidence))

    if confidence > 65:
        signal = SignalType.BUY
    elif confidence < 40:
        signal = SignalType.SELL
    else:
        signal = SignalType.HOLD

    return signal, confidence
