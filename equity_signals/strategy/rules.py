"""Built-in strategies: one per indicator.

Each maps its indicator result to BUY/SELL/NEUTRAL with a fixed confidence:

    RSI              oversold BUY 75, overbought SELL 75
    MACD             crossover 85, momentum 70
    Bollinger Bands  band touch 80, other bullish/bearish 65
    Moving Average   full alignment 80, partial alignment 65
    Volume Analysis  strong 75, weak 60

Anything else is NEUTRAL 50.
"""

from decimal import Decimal

from equity_signals.indicators.calculator import IndicatorSnapshot
from equity_signals.models import (
    BollingerSignal,
    MACDSignal,
    StrategyResult,
    StrategySignal,
    VolumeSignal,
)
from equity_signals.strategy.registry import register_strategy


def _result(name: str, signal: StrategySignal, confidence: str, interpretation: str) -> StrategyResult:
    return StrategyResult(
        name=name,
        signal=signal,
        confidence=Decimal(confidence),
        interpretation=interpretation,
    )


@register_strategy("rsi")
class RsiStrategy:
    """Mean reversion on RSI extremes."""

    name = "RSI"

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        rsi = snapshot.rsi
        if rsi.is_bullish:
            return _result(self.name, StrategySignal.BUY, "75", rsi.interpretation)
        if rsi.is_bearish:
            return _result(self.name, StrategySignal.SELL, "75", rsi.interpretation)
        return _result(self.name, StrategySignal.NEUTRAL, "50", rsi.interpretation)


@register_strategy("macd")
class MacdStrategy:
    """Trend following on MACD crossovers and momentum."""

    name = "MACD"

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        macd = snapshot.macd
        if macd.is_bullish:
            confidence = "85" if macd.signal == MACDSignal.BULLISH_CROSSOVER else "70"
            return _result(self.name, StrategySignal.BUY, confidence, macd.interpretation)
        if macd.is_bearish:
            confidence = "85" if macd.signal == MACDSignal.BEARISH_CROSSOVER else "70"
            return _result(self.name, StrategySignal.SELL, confidence, macd.interpretation)
        return _result(self.name, StrategySignal.NEUTRAL, "50", macd.interpretation)


@register_strategy("bollinger_bands")
class BollingerBandsStrategy:
    """Mean reversion on band touches."""

    name = "Bollinger Bands"

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        bands = snapshot.bollinger
        if bands.is_bullish:
            confidence = "80" if bands.signal == BollingerSignal.OVERSOLD else "65"
            return _result(self.name, StrategySignal.BUY, confidence, bands.interpretation)
        if bands.is_bearish:
            confidence = "80" if bands.signal == BollingerSignal.OVERBOUGHT else "65"
            return _result(self.name, StrategySignal.SELL, confidence, bands.interpretation)
        return _result(self.name, StrategySignal.NEUTRAL, "50", bands.interpretation)


@register_strategy("moving_average")
class MovingAverageStrategy:
    """Trend following on price / SMA(20) / SMA(50) alignment."""

    name = "Moving Average"

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        ma = snapshot.moving_average
        price = ma.current_price
        short = ma.short.value
        long = ma.long.value

        if price > short and price > long and short > long:
            signal, confidence = StrategySignal.BUY, "80"
        elif price <= short and price <= long and short <= long:
            signal, confidence = StrategySignal.SELL, "80"
        elif price > short and short > long:
            signal, confidence = StrategySignal.BUY, "65"
        elif price <= short and short <= long:
            signal, confidence = StrategySignal.SELL, "65"
        else:
            signal, confidence = StrategySignal.NEUTRAL, "50"

        return _result(self.name, signal, confidence, ma.interpretation)


@register_strategy("volume")
class VolumeStrategy:
    """Confirmation from volume behind the latest price move."""

    name = "Volume Analysis"

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        volume = snapshot.volume
        if volume.is_bullish:
            confidence = "75" if volume.signal == VolumeSignal.STRONG_BULLISH else "60"
            return _result(self.name, StrategySignal.BUY, confidence, volume.interpretation)
        if volume.is_bearish:
            confidence = "75" if volume.signal == VolumeSignal.STRONG_BEARISH else "60"
            return _result(self.name, StrategySignal.SELL, confidence, volume.interpretation)
        return _result(self.name, StrategySignal.NEUTRAL, "50", volume.interpretation)
