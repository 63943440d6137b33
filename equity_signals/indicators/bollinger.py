"""Bollinger Bands.

- Middle band: SMA(20)
- Upper/lower band: middle +/- 2 standard deviations of the window

Price touching or crossing a band marks an overbought/oversold condition,
and a price in the outer fifth of the band width is approaching that band.
Unusually narrow bands are reported as a squeeze.
"""

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import (
    ZERO,
    div,
    format_decimal,
    sample_variance,
    sqrt_approx,
)
from equity_signals.models import (
    Bar,
    BollingerBandsResult,
    BollingerSignal,
    closes,
    sort_bars,
)

DEFAULT_PERIOD = 20
DEFAULT_STD_DEV_MULTIPLIER = Decimal("2.0")

# Band width below this fraction of the middle band is a squeeze
SQUEEZE_THRESHOLD = Decimal("0.05")
APPROACHING_UPPER_POSITION = Decimal("0.80")
APPROACHING_LOWER_POSITION = Decimal("0.20")

_INTERPRETATIONS = {
    BollingerSignal.OVERBOUGHT: "Price at or above upper band, overbought condition",
    BollingerSignal.APPROACHING_UPPER: "Price approaching upper band, potential resistance",
    BollingerSignal.OVERSOLD: "Price at or below lower band, oversold condition",
    BollingerSignal.APPROACHING_LOWER: "Price approaching lower band, potential support",
    BollingerSignal.SQUEEZE: "Band squeeze, low volatility, potential breakout",
    BollingerSignal.NEUTRAL: "Price inside the bands, neutral condition",
}


def _insufficient(reason: str) -> BollingerBandsResult:
    return BollingerBandsResult(
        upper_band=ZERO,
        middle_band=ZERO,
        lower_band=ZERO,
        signal=BollingerSignal.NEUTRAL,
        interpretation=reason,
    )


def calculate_bollinger_bands(
    bars: Sequence[Bar] | None,
    period: int = DEFAULT_PERIOD,
    std_dev_multiplier: Decimal = DEFAULT_STD_DEV_MULTIPLIER,
) -> BollingerBandsResult:
    """
    Calculate Bollinger Bands over the last ``period`` bars.

    Args:
        bars: Bars in any order (sorted here)
        period: SMA/stddev window
        std_dev_multiplier: Band distance in standard deviations

    Returns:
        BollingerBandsResult; zeros and NEUTRAL with fewer than ``period`` bars
    """
    if not bars or len(bars) < period:
        return _insufficient("insufficient data for Bollinger Bands calculation")

    prices = closes(sort_bars(bars))[-period:]

    middle = div(sum(prices, ZERO), Decimal(period))
    std_dev = sqrt_approx(sample_variance(prices, middle))
    width = std_dev * std_dev_multiplier
    upper = middle + width
    lower = middle - width

    current_price = prices[-1]
    signal = _determine_signal(current_price, upper, middle, lower)
    return BollingerBandsResult(
        upper_band=upper,
        middle_band=middle,
        lower_band=lower,
        current_price=current_price,
        signal=signal,
        interpretation=_interpret(current_price, upper, middle, lower, signal, period),
    )


def _determine_signal(
    price: Decimal, upper: Decimal, middle: Decimal, lower: Decimal
) -> BollingerSignal:
    band_width = upper - lower
    if band_width == 0:
        # Flat window, there is no band to touch
        return BollingerSignal.SQUEEZE
    if price >= upper:
        return BollingerSignal.OVERBOUGHT
    if price <= lower:
        return BollingerSignal.OVERSOLD
    if band_width < middle * SQUEEZE_THRESHOLD:
        return BollingerSignal.SQUEEZE

    # Position inside the band: 0 at the lower band, 1 at the upper band
    position = div(price - lower, band_width)
    if position >= APPROACHING_UPPER_POSITION:
        return BollingerSignal.APPROACHING_UPPER
    if position <= APPROACHING_LOWER_POSITION:
        return BollingerSignal.APPROACHING_LOWER
    return BollingerSignal.NEUTRAL


def _interpret(
    price: Decimal,
    upper: Decimal,
    middle: Decimal,
    lower: Decimal,
    signal: BollingerSignal,
    period: int,
) -> str:
    base = (
        f"BB({period}): Upper={format_decimal(upper)}, Middle={format_decimal(middle)}, "
        f"Lower={format_decimal(lower)}, Price={format_decimal(price)}"
    )
    return f"{base} - {_INTERPRETATIONS[signal]}"
