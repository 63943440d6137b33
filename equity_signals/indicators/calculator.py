"""IndicatorLibrary: runs all five indicators over one bar sequence."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.bollinger import (
    DEFAULT_PERIOD as BOLLINGER_PERIOD,
    DEFAULT_STD_DEV_MULTIPLIER,
    calculate_bollinger_bands,
)
from equity_signals.indicators.macd import (
    FAST_PERIOD,
    SIGNAL_PERIOD,
    SLOW_PERIOD,
    calculate_macd,
)
from equity_signals.indicators.moving_average import (
    LONG_PERIOD,
    SHORT_PERIOD,
    calculate_crossover,
)
from equity_signals.indicators.numeric import ZERO
from equity_signals.indicators.rsi import DEFAULT_PERIOD as RSI_PERIOD, calculate_rsi
from equity_signals.indicators.volume import DEFAULT_PERIOD as VOLUME_PERIOD, analyze_volume
from equity_signals.models import (
    Bar,
    BollingerBandsResult,
    MACDResult,
    MovingAverageCrossoverResult,
    RSIResult,
    VolumeResult,
    sort_bars,
)


@dataclass(frozen=True)
class IndicatorSnapshot:
    """All indicator results for the latest bar of a sequence."""

    current_price: Decimal
    rsi: RSIResult
    macd: MACDResult
    bollinger: BollingerBandsResult
    moving_average: MovingAverageCrossoverResult
    volume: VolumeResult


class IndicatorLibrary:
    """Stateless calculator for the RSI, MACD, Bollinger, MA and volume indicators.

    Periods are fixed at construction; every call is independent and safe
    to run concurrently.
    """

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,
        macd_fast_period: int = FAST_PERIOD,
        macd_slow_period: int = SLOW_PERIOD,
        macd_signal_period: int = SIGNAL_PERIOD,
        bollinger_period: int = BOLLINGER_PERIOD,
        bollinger_std_dev: Decimal = DEFAULT_STD_DEV_MULTIPLIER,
        ma_short_period: int = SHORT_PERIOD,
        ma_long_period: int = LONG_PERIOD,
        volume_period: int = VOLUME_PERIOD,
    ):
        self.rsi_period = rsi_period
        self.macd_fast_period = macd_fast_period
        self.macd_slow_period = macd_slow_period
        self.macd_signal_period = macd_signal_period
        self.bollinger_period = bollinger_period
        self.bollinger_std_dev = bollinger_std_dev
        self.ma_short_period = ma_short_period
        self.ma_long_period = ma_long_period
        self.volume_period = volume_period

    def rsi(self, bars: Sequence[Bar] | None) -> RSIResult:
        return calculate_rsi(bars, self.rsi_period)

    def macd(self, bars: Sequence[Bar] | None) -> MACDResult:
        return calculate_macd(
            bars, self.macd_fast_period, self.macd_slow_period, self.macd_signal_period
        )

    def bollinger(self, bars: Sequence[Bar] | None) -> BollingerBandsResult:
        return calculate_bollinger_bands(bars, self.bollinger_period, self.bollinger_std_dev)

    def moving_average(self, bars: Sequence[Bar] | None) -> MovingAverageCrossoverResult:
        return calculate_crossover(bars, self.ma_short_period, self.ma_long_period)

    def volume(self, bars: Sequence[Bar] | None) -> VolumeResult:
        return analyze_volume(bars, self.volume_period)

    def calculate_all(self, bars: Sequence[Bar] | None) -> IndicatorSnapshot:
        """
        Calculate every indicator for the given bars.

        Args:
            bars: Bars in any order

        Returns:
            IndicatorSnapshot with one result per indicator
        """
        ordered = sort_bars(bars)
        return IndicatorSnapshot(
            current_price=ordered[-1].last_price if ordered else ZERO,
            rsi=self.rsi(ordered),
            macd=self.macd(ordered),
            bollinger=self.bollinger(ordered),
            moving_average=self.moving_average(ordered),
            volume=self.volume(ordered),
        )
