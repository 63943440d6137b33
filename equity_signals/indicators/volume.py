"""Volume analysis.

Compares the latest volume with its recent average and combines that with
the latest price step:
- high volume (>= 1.5x average) confirms the move (strong signal)
- low volume (<= 0.5x average) marks a weak move
- high volume without a price change suggests accumulation/distribution

Also accumulates the volume-price trend (VPT) over the whole series.
"""

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import ZERO, div, format_decimal
from equity_signals.models import Bar, VolumeResult, VolumeSignal, closes, sort_bars, volumes

DEFAULT_PERIOD = 20
HIGH_VOLUME_THRESHOLD = Decimal("1.5")
LOW_VOLUME_THRESHOLD = Decimal("0.5")

_INTERPRETATIONS = {
    VolumeSignal.STRONG_BULLISH: "High volume with price increase, strong bullish signal",
    VolumeSignal.BULLISH: "Low volume with price increase, weak bullish signal",
    VolumeSignal.STRONG_BEARISH: "High volume with price decrease, strong bearish signal",
    VolumeSignal.BEARISH: "Low volume with price decrease, weak bearish signal",
    VolumeSignal.ACCUMULATION: "High volume, potential accumulation/distribution",
    VolumeSignal.NEUTRAL: "Normal volume activity",
}


def _insufficient(reason: str) -> VolumeResult:
    return VolumeResult(
        current_volume=ZERO,
        average_volume=ZERO,
        relative_volume=ZERO,
        signal=VolumeSignal.NEUTRAL,
        interpretation=reason,
    )


def analyze_volume(bars: Sequence[Bar] | None, period: int = DEFAULT_PERIOD) -> VolumeResult:
    """
    Analyze the latest volume against its ``period`` average.

    Args:
        bars: Bars in any order (sorted here); missing volume counts as 0
        period: Averaging window for volume

    Returns:
        VolumeResult; zeros and NEUTRAL with fewer than ``period`` bars
    """
    if not bars or len(bars) < period:
        return _insufficient("insufficient data for volume analysis")

    ordered = sort_bars(bars)
    prices = closes(ordered)
    vols = volumes(ordered)

    window = vols[-period:]
    average = div(Decimal(sum(window)), Decimal(len(window)), 2)
    current = Decimal(vols[-1])
    vpt = volume_price_trend(prices, vols)

    if average == 0:
        return VolumeResult(
            current_volume=current,
            average_volume=ZERO,
            relative_volume=ZERO,
            volume_price_trend=vpt,
            signal=VolumeSignal.NEUTRAL,
            interpretation="No volume traded in window - Normal volume activity",
        )

    relative = div(current, average)
    signal = _determine_signal(prices, relative)
    return VolumeResult(
        current_volume=current,
        average_volume=average,
        relative_volume=relative,
        volume_price_trend=vpt,
        signal=signal,
        interpretation=_interpret(vols[-1], average, relative, vpt, signal),
    )


def volume_price_trend(prices: Sequence[Decimal], vols: Sequence[int]) -> Decimal:
    """VPT = sum of volume * (price - previous price) / previous price.

    Steps with a zero previous price contribute nothing.
    """
    vpt = ZERO
    for i in range(1, min(len(prices), len(vols))):
        previous = prices[i - 1]
        if previous > 0:
            vpt += Decimal(vols[i]) * div(prices[i] - previous, previous, 6)
    return vpt


def _determine_signal(prices: Sequence[Decimal], relative: Decimal) -> VolumeSignal:
    if len(prices) < 2:
        return VolumeSignal.NEUTRAL

    price_up = prices[-1] > prices[-2]
    price_down = prices[-1] < prices[-2]
    high_volume = relative >= HIGH_VOLUME_THRESHOLD
    low_volume = relative <= LOW_VOLUME_THRESHOLD

    if high_volume and price_up:
        return VolumeSignal.STRONG_BULLISH
    if high_volume and price_down:
        return VolumeSignal.STRONG_BEARISH
    if low_volume and price_up:
        return VolumeSignal.BULLISH
    if low_volume and price_down:
        return VolumeSignal.BEARISH
    if high_volume:
        return VolumeSignal.ACCUMULATION
    return VolumeSignal.NEUTRAL


def format_volume(volume: int) -> str:
    """Format a volume with M/K units."""
    if volume >= 10_000_000:
        return f"{volume / 1_000_000:.1f}M"
    if volume >= 100_000:
        return f"{volume / 1_000:.0f}K"
    return str(volume)


def _interpret(
    current: int, average: Decimal, relative: Decimal, vpt: Decimal, signal: VolumeSignal
) -> str:
    base = (
        f"Volume: {format_volume(current)}, Avg: {format_decimal(average, 0)}, "
        f"Relative: {format_decimal(relative)}x, VPT: {format_decimal(vpt, 0)}"
    )
    return f"{base} - {_INTERPRETATIONS[signal]}"
