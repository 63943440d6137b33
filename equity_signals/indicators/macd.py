"""MACD (Moving Average Convergence Divergence).

- MACD line: fast EMA(12) - slow EMA(26)
- Signal line: EMA(9) of the MACD line
- Histogram: MACD line - signal line

A crossover is reported when the MACD line moved to the other side of the
signal line on the latest bar; otherwise the histogram's direction tells
whether momentum is building or fading.
"""

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import ZERO, ema_series, quantize
from equity_signals.models import Bar, MACDResult, MACDSignal, closes, sort_bars

FAST_PERIOD = 12
SLOW_PERIOD = 26
SIGNAL_PERIOD = 9

_INTERPRETATIONS = {
    MACDSignal.BULLISH_CROSSOVER: "Bullish crossover, buy signal",
    MACDSignal.BEARISH_CROSSOVER: "Bearish crossover, sell signal",
    MACDSignal.BULLISH_MOMENTUM: "Strong bullish momentum",
    MACDSignal.BULLISH_WEAKENING: "Bullish but weakening momentum",
    MACDSignal.BEARISH_MOMENTUM: "Strong bearish momentum",
    MACDSignal.BEARISH_WEAKENING: "Bearish but weakening momentum",
    MACDSignal.NEUTRAL: "Neutral momentum",
}


def _insufficient(reason: str) -> MACDResult:
    return MACDResult(
        macd_line=ZERO,
        signal_line=ZERO,
        histogram=ZERO,
        signal=MACDSignal.NEUTRAL,
        interpretation=reason,
    )


def macd_line(
    prices: Sequence[Decimal],
    fast_period: int = FAST_PERIOD,
    slow_period: int = SLOW_PERIOD,
) -> list[Decimal]:
    """MACD line values, one per price from index ``slow_period - 1`` on."""
    fast = ema_series(prices, fast_period)
    slow = ema_series(prices, slow_period)
    if not fast or not slow:
        return []

    # fast[i] belongs to price i + fast - 1, slow[j] to price j + slow - 1
    offset = slow_period - fast_period
    return [fast[j + offset] - slow[j] for j in range(len(slow))]


def calculate_macd(
    bars: Sequence[Bar] | None,
    fast_period: int = FAST_PERIOD,
    slow_period: int = SLOW_PERIOD,
    signal_period: int = SIGNAL_PERIOD,
) -> MACDResult:
    """
    Calculate MACD line, signal line and histogram for the latest bar.

    Args:
        bars: Bars in any order (sorted here)
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: Signal line EMA period

    Returns:
        MACDResult; zeros and NEUTRAL with fewer than
        ``slow_period + signal_period`` bars
    """
    if not bars or len(bars) < slow_period + signal_period:
        return _insufficient("insufficient data for MACD calculation")

    prices = closes(sort_bars(bars))
    macd_values = macd_line(prices, fast_period, slow_period)
    signal_values = ema_series(macd_values, signal_period)
    if len(signal_values) < 2:
        return _insufficient("insufficient data for MACD signal line")

    # signal_values[k] pairs with macd_values[k + signal_period - 1]
    aligned_macd = macd_values[signal_period - 1 :]

    current_macd = aligned_macd[-1]
    current_signal = signal_values[-1]
    histogram = current_macd - current_signal

    signal = _determine_signal(
        aligned_macd[-2], signal_values[-2], current_macd, current_signal
    )
    return MACDResult(
        macd_line=current_macd,
        signal_line=current_signal,
        histogram=histogram,
        signal=signal,
        interpretation=_interpret(current_macd, current_signal, histogram, signal),
    )


def _determine_signal(
    previous_macd: Decimal,
    previous_signal: Decimal,
    current_macd: Decimal,
    current_signal: Decimal,
) -> MACDSignal:
    previous_above = previous_macd > previous_signal
    current_above = current_macd > current_signal

    if not previous_above and current_above:
        return MACDSignal.BULLISH_CROSSOVER
    if previous_above and not current_above:
        return MACDSignal.BEARISH_CROSSOVER

    current_histogram = current_macd - current_signal
    previous_histogram = previous_macd - previous_signal
    if current_histogram == 0 and previous_histogram == 0:
        return MACDSignal.NEUTRAL

    if current_above:
        if current_histogram > previous_histogram:
            return MACDSignal.BULLISH_MOMENTUM
        return MACDSignal.BULLISH_WEAKENING

    if current_histogram < previous_histogram:
        return MACDSignal.BEARISH_MOMENTUM
    return MACDSignal.BEARISH_WEAKENING


def _interpret(
    macd: Decimal, signal_line: Decimal, histogram: Decimal, signal: MACDSignal
) -> str:
    base = (
        f"MACD: {quantize(macd)}, Signal: {quantize(signal_line)}, "
        f"Histogram: {quantize(histogram)}"
    )
    return f"{base} - {_INTERPRETATIONS[signal]}"
