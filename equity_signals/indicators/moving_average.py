"""Moving averages (SMA and EMA) and the short/long SMA pair.

Each average also reports where the latest price sits relative to it:
more than 2% above is strongly bullish, above is bullish, and the same
thresholds mirrored below.
"""

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import (
    HUNDRED,
    ZERO,
    div,
    ema_series,
    format_decimal,
)
from equity_signals.models import (
    Bar,
    MovingAverageCrossoverResult,
    MovingAverageResult,
    MovingAverageSignal,
    MovingAverageType,
    closes,
    sort_bars,
)

SHORT_PERIOD = 20
LONG_PERIOD = 50

STRONG_THRESHOLD = Decimal("2")  # percent

_INTERPRETATIONS = {
    MovingAverageSignal.STRONG_BULLISH: "Strong bullish trend, price well above MA",
    MovingAverageSignal.BULLISH: "Bullish trend, price above MA",
    MovingAverageSignal.NEUTRAL: "Neutral, price near MA",
    MovingAverageSignal.BEARISH: "Bearish trend, price below MA",
    MovingAverageSignal.STRONG_BEARISH: "Strong bearish trend, price well below MA",
}


def _insufficient(period: int, ma_type: MovingAverageType) -> MovingAverageResult:
    return MovingAverageResult(
        value=ZERO,
        period=period,
        ma_type=ma_type,
        signal=MovingAverageSignal.NEUTRAL,
        interpretation=f"insufficient data for {ma_type.value}({period}) calculation",
    )


def calculate_sma(bars: Sequence[Bar] | None, period: int) -> MovingAverageResult:
    """
    Simple moving average of the last ``period`` prices.

    Args:
        bars: Bars in any order (sorted here)
        period: Averaging period

    Returns:
        MovingAverageResult; value 0 and NEUTRAL with fewer than ``period`` bars
    """
    if not bars or len(bars) < period:
        return _insufficient(period, MovingAverageType.SMA)

    prices = closes(sort_bars(bars))
    value = div(sum(prices[-period:], ZERO), Decimal(period))
    return _build(value, prices[-1], period, MovingAverageType.SMA)


def calculate_ema(bars: Sequence[Bar] | None, period: int) -> MovingAverageResult:
    """
    Exponential moving average seeded with the SMA of the first ``period`` prices.

    Args:
        bars: Bars in any order (sorted here)
        period: EMA period

    Returns:
        MovingAverageResult; value 0 and NEUTRAL with fewer than ``period`` bars
    """
    if not bars or len(bars) < period:
        return _insufficient(period, MovingAverageType.EMA)

    prices = closes(sort_bars(bars))
    value = ema_series(prices, period)[-1]
    return _build(value, prices[-1], period, MovingAverageType.EMA)


def calculate_crossover(
    bars: Sequence[Bar] | None,
    short_period: int = SHORT_PERIOD,
    long_period: int = LONG_PERIOD,
) -> MovingAverageCrossoverResult:
    """Short and long SMA with the latest price.

    An average without enough bars is reported with value 0.
    """
    ordered = sort_bars(bars)
    current_price = ordered[-1].last_price if ordered else ZERO
    short = calculate_sma(ordered, short_period)
    long = calculate_sma(ordered, long_period)
    interpretation = (
        f"SMA({short_period}): {format_decimal(short.value)}, "
        f"SMA({long_period}): {format_decimal(long.value)}, "
        f"Price: {format_decimal(current_price)}"
    )
    return MovingAverageCrossoverResult(
        current_price=current_price,
        short=short,
        long=long,
        interpretation=interpretation,
    )


def _build(
    value: Decimal, price: Decimal, period: int, ma_type: MovingAverageType
) -> MovingAverageResult:
    signal = _determine_signal(price, value)
    return MovingAverageResult(
        value=value,
        period=period,
        ma_type=ma_type,
        signal=signal,
        interpretation=(
            f"{ma_type.value}({period}): {format_decimal(value)} - {_INTERPRETATIONS[signal]}"
        ),
    )


def _determine_signal(price: Decimal, average: Decimal) -> MovingAverageSignal:
    if average == 0:
        return MovingAverageSignal.NEUTRAL

    percent_diff = div(price - average, average) * HUNDRED
    if percent_diff > STRONG_THRESHOLD:
        return MovingAverageSignal.STRONG_BULLISH
    if percent_diff > 0:
        return MovingAverageSignal.BULLISH
    if percent_diff < -STRONG_THRESHOLD:
        return MovingAverageSignal.STRONG_BEARISH
    if percent_diff < 0:
        return MovingAverageSignal.BEARISH
    return MovingAverageSignal.NEUTRAL
