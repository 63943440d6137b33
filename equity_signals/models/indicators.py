"""Indicator result models.

Each indicator has its own closed signal enum. ``is_bullish``,
``is_bearish`` and ``is_neutral`` partition the enum, so at most one of
them is true for any result.
"""

from decimal import Decimal
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class RSISignal(str, Enum):
    """RSI zone."""

    OVERBOUGHT = "overbought"  # RSI >= 70
    OVERSOLD = "oversold"  # RSI <= 30
    NEUTRAL = "neutral"


class MACDSignal(str, Enum):
    """MACD line position relative to its signal line."""

    BULLISH_CROSSOVER = "bullish_crossover"
    BEARISH_CROSSOVER = "bearish_crossover"
    BULLISH_MOMENTUM = "bullish_momentum"  # above signal, histogram growing
    BULLISH_WEAKENING = "bullish_weakening"  # above signal, histogram shrinking
    BEARISH_MOMENTUM = "bearish_momentum"  # below signal, histogram falling
    BEARISH_WEAKENING = "bearish_weakening"  # below signal, histogram rising
    NEUTRAL = "neutral"


class BollingerSignal(str, Enum):
    """Price position relative to the Bollinger Bands."""

    OVERBOUGHT = "overbought"  # price >= upper band
    APPROACHING_UPPER = "approaching_upper"  # top 20% of the band width
    APPROACHING_LOWER = "approaching_lower"  # bottom 20% of the band width
    OVERSOLD = "oversold"  # price <= lower band
    SQUEEZE = "squeeze"  # bands narrower than 5% of the middle band
    NEUTRAL = "neutral"


class MovingAverageSignal(str, Enum):
    """Price position relative to a moving average."""

    STRONG_BULLISH = "strong_bullish"  # price > 2% above MA
    BULLISH = "bullish"
    NEUTRAL = "neutral"
    BEARISH = "bearish"
    STRONG_BEARISH = "strong_bearish"  # price > 2% below MA


class MovingAverageType(str, Enum):
    SMA = "SMA"
    EMA = "EMA"


class VolumeSignal(str, Enum):
    """Price/volume relationship on the latest bar."""

    STRONG_BULLISH = "strong_bullish"  # high volume, price up
    BULLISH = "bullish"  # low volume, price up
    ACCUMULATION = "accumulation"  # high volume, price flat
    NEUTRAL = "neutral"
    BEARISH = "bearish"  # low volume, price down
    STRONG_BEARISH = "strong_bearish"  # high volume, price down


class _IndicatorResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    interpretation: str

    bullish_signals: ClassVar[frozenset] = frozenset()
    bearish_signals: ClassVar[frozenset] = frozenset()

    @property
    def is_bullish(self) -> bool:
        return self.signal in self.bullish_signals

    @property
    def is_bearish(self) -> bool:
        return self.signal in self.bearish_signals

    @property
    def is_neutral(self) -> bool:
        return not (self.is_bullish or self.is_bearish)


class RSIResult(_IndicatorResult):
    value: Decimal
    signal: RSISignal

    bullish_signals: ClassVar[frozenset] = frozenset({RSISignal.OVERSOLD})
    bearish_signals: ClassVar[frozenset] = frozenset({RSISignal.OVERBOUGHT})


class MACDResult(_IndicatorResult):
    macd_line: Decimal
    signal_line: Decimal
    histogram: Decimal
    signal: MACDSignal

    bullish_signals: ClassVar[frozenset] = frozenset({MACDSignal.BULLISH_CROSSOVER, MACDSignal.BULLISH_MOMENTUM})
    bearish_signals: ClassVar[frozenset] = frozenset({MACDSignal.BEARISH_CROSSOVER, MACDSignal.BEARISH_MOMENTUM})


class BollingerBandsResult(_IndicatorResult):
    upper_band: Decimal
    middle_band: Decimal
    lower_band: Decimal
    current_price: Decimal = Decimal("0")
    signal: BollingerSignal

    bullish_signals: ClassVar[frozenset] = frozenset({BollingerSignal.OVERSOLD, BollingerSignal.APPROACHING_LOWER})
    bearish_signals: ClassVar[frozenset] = frozenset({BollingerSignal.OVERBOUGHT, BollingerSignal.APPROACHING_UPPER})

    @property
    def band_width(self) -> Decimal:
        """Get the distance between the upper and lower band."""
        return self.upper_band - self.lower_band


class MovingAverageResult(_IndicatorResult):
    value: Decimal
    period: int
    ma_type: MovingAverageType = MovingAverageType.SMA
    signal: MovingAverageSignal

    bullish_signals: ClassVar[frozenset] = frozenset({MovingAverageSignal.BULLISH, MovingAverageSignal.STRONG_BULLISH})
    bearish_signals: ClassVar[frozenset] = frozenset({MovingAverageSignal.BEARISH, MovingAverageSignal.STRONG_BEARISH})


class MovingAverageCrossoverResult(BaseModel):
    """Short and long SMA reported side by side with the current price.

    The directional call is made by the moving-average strategy; the
    predicates here only report strict full alignment, so degraded
    (all zero) results stay neutral.
    """

    model_config = ConfigDict(frozen=True)

    current_price: Decimal
    short: MovingAverageResult
    long: MovingAverageResult
    interpretation: str

    @property
    def is_bullish(self) -> bool:
        return (
            self.current_price > self.short.value
            and self.current_price > self.long.value
            and self.short.value > self.long.value
        )

    @property
    def is_bearish(self) -> bool:
        return (
            self.current_price < self.short.value
            and self.current_price < self.long.value
            and self.short.value < self.long.value
        )

    @property
    def is_neutral(self) -> bool:
        return not (self.is_bullish or self.is_bearish)


class VolumeResult(_IndicatorResult):
    current_volume: Decimal
    average_volume: Decimal
    relative_volume: Decimal
    volume_price_trend: Decimal = Decimal("0")
    signal: VolumeSignal

    bullish_signals: ClassVar[frozenset] = frozenset({VolumeSignal.STRONG_BULLISH, VolumeSignal.BULLISH})
    bearish_signals: ClassVar[frozenset] = frozenset({VolumeSignal.STRONG_BEARISH, VolumeSignal.BEARISH})

    @property
    def is_high_volume(self) -> bool:
        """Check if the latest volume is at least 1.5x the average."""
        return self.relative_volume >= Decimal("1.5")
