"""
Indicator Engine Service Implementation

Builds an IndicatorResult (and its one-line summary) from a PriceSeries.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.
"""

from typing import Optional

from tradeagent.schemas.indicators import IndicatorResult, MACDData
from tradeagent.schemas.market import PriceSeries
from tradeagent.services.indicators.calculations import (
    sma,
    rsi,
    rsi_label,
    macd,
    support_resistance,
    volatility,
    volume_trend,
    trend_direction,
    composite_signal,
)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "INR": "₹",
    "GBP": "£",
    "EUR": "€",
    "JPY": "¥",
    "HKD": "HK$",
    "CNY": "¥",
    "KRW": "₩",
    "SGD": "S$",
    "AUD": "A$",
}


def format_price(value: float, currency: str = "USD") -> str:
    """Currency symbol, thousands separators, at most two decimals."""
    symbol = CURRENCY_SYMBOLS.get(currency, "$")
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{symbol}{text}"


def _fmt_optional(value: Optional[float], currency: str) -> str:
    return format_price(value, currency) if value is not None else "N/A"


def format_summary(
    name: str,
    price: float,
    currency: str,
    trend: str,
    rsi_value: float,
    macd_data: Optional[MACDData],
    support: float,
    resistance: float,
    volatility_pct: float,
    volume_label: str,
    sma20: Optional[float],
    sma50: Optional[float],
    sma200: Optional[float],
    signal: str,
    confidence: int,
) -> str:
    """Single-line, pipe-delimited digest consumed by the chat context."""
    if macd_data is None:
        macd_label = "N/A"
    else:
        macd_label = "bullish" if macd_data.histogram > 0 else "bearish"

    parts = [
        f"{name}: Price {format_price(price, currency)}",
        f"Currency: {currency}",
        f"Trend: {trend}",
        f"RSI: {rsi_value:.1f} ({rsi_label(rsi_value)})",
        f"MACD: {macd_label}",
        f"Support: {format_price(support, currency)}",
        f"Resistance: {format_price(resistance, currency)}",
        f"Volatility: {volatility_pct:.2f}%",
        f"Volume: {volume_label}",
        f"SMA20: {_fmt_optional(sma20, currency)}",
        f"SMA50: {_fmt_optional(sma50, currency)}",
        f"SMA200: {_fmt_optional(sma200, currency)}",
        f"Signal: {signal} (confidence: {confidence}%)",
    ]
    return " | ".join(parts)


def compute_indicators(series: PriceSeries, name: Optional[str] = None) -> IndicatorResult:
    """
    Calculate all indicators for one series.

    Raises:
        ValueError: If the series has no points
    """
    closes = series.closes
    if not closes:
        raise ValueError(f"Insufficient data for {series.symbol}")

    highs = series.highs
    lows = series.lows
    name = name or series.name
    price = series.current_price or closes[-1]
    currency = series.currency or "USD"

    rsi_value = rsi(closes)
    sma20 = sma(closes, 20)
    sma50 = sma(closes, 50)
    sma200 = sma(closes, 200)
    macd_data = macd(closes)
    support, resistance = support_resistance(highs, lows, closes)
    volatility_pct = volatility(closes)
    trend = trend_direction(price, sma20, sma50)
    signal, confidence = composite_signal(trend, rsi_value, macd_data)

    summary = format_summary(
        name=name,
        price=price,
        currency=currency,
        trend=trend.value,
        rsi_value=rsi_value,
        macd_data=macd_data,
        support=support,
        resistance=resistance,
        volatility_pct=volatility_pct,
        volume_label=volume_trend(series.volumes),
        sma20=sma20,
        sma50=sma50,
        sma200=sma200,
        signal=signal.value,
        confidence=confidence,
    )

    return IndicatorResult(
        name=name,
        price=price,
        rsi=rsi_value,
        sma20=sma20,
        sma50=sma50,
        sma200=sma200,
        macd=macd_data,
        support=support,
        resistance=resistance,
        volatility=volatility_pct,
        currency=currency,
        trend=trend,
        signal=signal,
        confidence=confidence,
        summary=summary,
    )
