"""Feature extraction for the heuristic predictor.

All features are computed over the most recent ``window`` bars and are
plain ratios (price change, momentum, volume trend) or normalized
indicator readings in roughly [-1, 1]. Every ratio guards its denominator
and falls back to zero.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import ZERO, div, ema, sma, stddev
from equity_signals.models import Bar, Features, closes, volumes

DEFAULT_WINDOW = 10

MOMENTUM_LOOKBACK = 5
VOLUME_TREND_BARS = 3
FAST_EMA_PERIOD = 5
SLOW_EMA_PERIOD = 10
SMA_PERIOD = 10


class FeatureExtractor:
    """Extract the scalar feature bundle from chronologically sorted bars."""

    def __init__(self, window: int = DEFAULT_WINDOW):
        self.window = window

    def extract(self, bars: Sequence[Bar]) -> Features:
        """
        Compute all features from the last ``window`` bars.

        Args:
            bars: Bars in chronological order

        Returns:
            Features; all zero when fewer than ``window`` bars are given
        """
        if len(bars) < self.window:
            return Features()

        recent = bars[-self.window :]
        prices = closes(recent)
        vols = volumes(recent)

        return Features(
            current_price=bars[-1].last_price,
            price_change=price_change(prices),
            volatility=stddev(prices),
            momentum=momentum(prices),
            volume_trend=volume_trend(vols),
            relative_volume=relative_volume(vols),
            rsi_signal=rsi_signal(prices),
            macd_signal=macd_signal(prices),
            ma_signal=ma_signal(prices),
        )


def price_change(prices: Sequence[Decimal]) -> Decimal:
    """(last - first) / first."""
    if len(prices) < 2 or prices[0] == 0:
        return ZERO
    return div(prices[-1] - prices[0], prices[0])


def momentum(prices: Sequence[Decimal], lookback: int = MOMENTUM_LOOKBACK) -> Decimal:
    """(last - price ``lookback`` positions from the end) / that price."""
    if len(prices) < lookback:
        return ZERO
    past = prices[len(prices) - lookback]
    if past == 0:
        return ZERO
    return div(prices[-1] - past, past)


def volume_trend(vols: Sequence[int], bars: int = VOLUME_TREND_BARS) -> Decimal:
    """Change of the average volume of the last ``bars`` versus the first ``bars``.

    Averages are integer (floor) averages of the raw volumes.
    """
    if len(vols) < 5:
        return ZERO
    recent = sum(vols[-bars:]) // bars
    earliest = vols[: min(bars, len(vols))]
    past = sum(earliest) // len(earliest)
    if past == 0:
        return ZERO
    return div(Decimal(recent - past), Decimal(past))


def relative_volume(vols: Sequence[int]) -> Decimal:
    """Latest volume over the mean volume of the window."""
    total = sum(vols)
    if not vols or total == 0:
        return ZERO
    return div(Decimal(vols[-1] * len(vols)), Decimal(total))


def rsi_signal(prices: Sequence[Decimal]) -> Decimal:
    """Share of up-moves mapped to [-1, 1]: 2 * gains / (gains + losses) - 1."""
    if len(prices) < 5:
        return ZERO
    gains = 0
    losses = 0
    for previous, current in zip(prices, prices[1:]):
        if current > previous:
            gains += 1
        elif current < previous:
            losses += 1
    moves = gains + losses
    if moves == 0:
        return ZERO
    return div(Decimal(2 * gains - moves), Decimal(moves))


def macd_signal(prices: Sequence[Decimal]) -> Decimal:
    """(EMA(5) - EMA(10)) relative to the current price."""
    if len(prices) < SLOW_EMA_PERIOD or prices[-1] == 0:
        return ZERO
    spread = ema(prices, FAST_EMA_PERIOD) - ema(prices, SLOW_EMA_PERIOD)
    return div(spread, prices[-1])


def ma_signal(prices: Sequence[Decimal]) -> Decimal:
    """(price - SMA(10)) / SMA(10)."""
    if len(prices) < SMA_PERIOD:
        return ZERO
    average = sma(prices, SMA_PERIOD)
    if average == 0:
        return ZERO
    return div(prices[-1] - average, average)
