"""RSI (Relative Strength Index).

Momentum oscillator in [0, 100]:
- RSI >= 70: overbought (potential sell)
- RSI <= 30: oversold (potential buy)
- otherwise neutral
"""

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import HUNDRED, ONE, ZERO, div, format_decimal
from equity_signals.models import Bar, RSIResult, RSISignal, closes, sort_bars

DEFAULT_PERIOD = 14
OVERBOUGHT_THRESHOLD = Decimal("70")
OVERSOLD_THRESHOLD = Decimal("30")


def _insufficient(reason: str) -> RSIResult:
    return RSIResult(value=ZERO, signal=RSISignal.NEUTRAL, interpretation=reason)


def calculate_rsi(bars: Sequence[Bar] | None, period: int = DEFAULT_PERIOD) -> RSIResult:
    """
    Calculate RSI using Wilder's smoothing over the whole window.

    The first ``period`` price changes seed the average gain and loss; every
    later change is folded in as ``(avg * (period - 1) + change) / period``.

    Args:
        bars: Bars in any order (sorted here)
        period: RSI period

    Returns:
        RSIResult; value 0 and NEUTRAL when there are fewer than
        ``period + 1`` bars
    """
    if not bars or len(bars) < period + 1:
        return _insufficient("insufficient data for RSI calculation")

    prices = closes(sort_bars(bars))

    gains: list[Decimal] = []
    losses: list[Decimal] = []
    for previous, current in zip(prices, prices[1:]):
        change = current - previous
        if change > 0:
            gains.append(change)
            losses.append(ZERO)
        else:
            gains.append(ZERO)
            losses.append(abs(change))

    avg_gain = div(sum(gains[:period], ZERO), Decimal(period))
    avg_loss = div(sum(losses[:period], ZERO), Decimal(period))

    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = div(avg_gain * (period - 1) + gain, Decimal(period))
        avg_loss = div(avg_loss * (period - 1) + loss, Decimal(period))

    if avg_loss == 0:
        # No losses in the window saturates the index, a flat series included
        rsi = HUNDRED
    else:
        rs = div(avg_gain, avg_loss)
        rsi = HUNDRED - div(HUNDRED, ONE + rs, 2)

    signal = _determine_signal(rsi)
    return RSIResult(value=rsi, signal=signal, interpretation=_interpret(rsi, signal))


def _determine_signal(rsi: Decimal) -> RSISignal:
    if rsi >= OVERBOUGHT_THRESHOLD:
        return RSISignal.OVERBOUGHT
    if rsi <= OVERSOLD_THRESHOLD:
        return RSISignal.OVERSOLD
    return RSISignal.NEUTRAL


def _interpret(rsi: Decimal, signal: RSISignal) -> str:
    base = f"RSI: {format_decimal(rsi)}"
    if signal == RSISignal.OVERBOUGHT:
        return base + " - Overbought condition, potential sell signal"
    if signal == RSISignal.OVERSOLD:
        return base + " - Oversold condition, potential buy signal"
    return base + " - Neutral zone, trend continuation likely"
