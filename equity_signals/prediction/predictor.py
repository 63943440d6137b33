"""Heuristic price-direction predictor.

A fixed-weight linear score over the extracted features:

    score = 0.30 * price_change
          + 0.25 * momentum
          + 0.15 * volume_trend
          + 0.30 * mean(rsi_signal, macd_signal, ma_signal)

Scores beyond +/-0.05 give a BULLISH/BEARISH call with target
``price * (1 + score)``; otherwise NEUTRAL with target = current price.

Confidence starts at 50 and is adjusted for volatility, volume regime and
the number of strong indicator readings, capped at 85. Deterministic and
exception-free: faults are returned as NEUTRAL results.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import ONE, ZERO, div, format_decimal, quantize
from equity_signals.models import (
    Bar,
    Features,
    MAX_PREDICTION_CONFIDENCE,
    PredictionDirection,
    PredictionResult,
    sort_bars,
)
from equity_signals.prediction.features import FeatureExtractor

logger = logging.getLogger(__name__)

DEFAULT_MIN_BARS = 20

TREND_WEIGHT = Decimal("0.3")
MOMENTUM_WEIGHT = Decimal("0.25")
VOLUME_WEIGHT = Decimal("0.15")
TECHNICAL_WEIGHT = Decimal("0.3")

DIRECTION_THRESHOLD = Decimal("0.05")

BASE_CONFIDENCE = Decimal("50")
LOW_VOLATILITY = Decimal("0.02")
HIGH_VOLATILITY = Decimal("0.05")
LOW_VOLATILITY_BONUS = Decimal("15")
HIGH_VOLATILITY_PENALTY = Decimal("10")
NORMAL_VOLUME_RANGE = (Decimal("0.5"), Decimal("2.0"))
NORMAL_VOLUME_BONUS = Decimal("10")
STRONG_SIGNAL_LEVEL = Decimal("0.3")
STRONG_SIGNAL_BONUS = 8


class HeuristicPredictor:
    """Predict direction, target price and confidence from recent bars."""

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        min_bars: int = DEFAULT_MIN_BARS,
    ):
        self.extractor = extractor or FeatureExtractor()
        self.min_bars = min_bars

    def predict(self, symbol: str, bars: Sequence[Bar] | None) -> PredictionResult:
        """
        Score the latest bars and predict the next move.

        Args:
            symbol: Symbol the bars belong to
            bars: Bars in any order

        Returns:
            PredictionResult (NEUTRAL / 0 on insufficient data or error)
        """
        length = len(bars) if bars else 0
        logger.info("Generating prediction for %s (%d bars)", symbol, length)

        if length < self.min_bars or length < self.extractor.window:
            return self._neutral(
                symbol,
                length,
                f"insufficient data: {length} bars, at least "
                f"{max(self.min_bars, self.extractor.window)} required",
            )

        try:
            features = self.extractor.extract(sort_bars(bars))
            score = self.score(features)
            direction, target = self.direction_and_target(score, features.current_price)
            confidence = self.confidence(features)
        except Exception as e:
            logger.exception("Error generating prediction for %s", symbol)
            return self._neutral(symbol, length, f"error: {e}")

        logger.debug("%s features: %s, score %s", symbol, features.as_dict(), score)
        return PredictionResult(
            symbol=symbol,
            direction=direction,
            target_price=target,
            confidence=confidence,
            interpretation=(
                f"Prediction: {direction.value.title()} direction "
                f"({quantize(confidence, 0)}% confidence) - "
                f"Target: {format_decimal(target)}"
            ),
            input_length=length,
        )

    @staticmethod
    def technical_score(features: Features) -> Decimal:
        """Mean of the three normalized indicator signals."""
        return div(features.rsi_signal + features.macd_signal + features.ma_signal, Decimal(3))

    @classmethod
    def score(cls, features: Features) -> Decimal:
        return (
            features.price_change * TREND_WEIGHT
            + features.momentum * MOMENTUM_WEIGHT
            + features.volume_trend * VOLUME_WEIGHT
            + cls.technical_score(features) * TECHNICAL_WEIGHT
        )

    @staticmethod
    def direction_and_target(
        score: Decimal, current_price: Decimal
    ) -> tuple[PredictionDirection, Decimal]:
        if score > DIRECTION_THRESHOLD:
            return PredictionDirection.BULLISH, current_price * (ONE + score)
        if score < -DIRECTION_THRESHOLD:
            return PredictionDirection.BEARISH, current_price * (ONE + score)
        return PredictionDirection.NEUTRAL, current_price

    @staticmethod
    def confidence(features: Features) -> Decimal:
        confidence = BASE_CONFIDENCE

        if features.volatility < LOW_VOLATILITY:
            confidence += LOW_VOLATILITY_BONUS
        elif features.volatility > HIGH_VOLATILITY:
            confidence -= HIGH_VOLATILITY_PENALTY

        low, high = NORMAL_VOLUME_RANGE
        if low < features.relative_volume < high:
            confidence += NORMAL_VOLUME_BONUS

        strong = sum(
            1
            for value in (features.rsi_signal, features.macd_signal, features.ma_signal)
            if abs(value) > STRONG_SIGNAL_LEVEL
        )
        confidence += Decimal(strong * STRONG_SIGNAL_BONUS)

        return min(confidence, MAX_PREDICTION_CONFIDENCE)

    @staticmethod
    def _neutral(symbol: str, length: int, interpretation: str) -> PredictionResult:
        return PredictionResult(
            symbol=symbol,
            direction=PredictionDirection.NEUTRAL,
            target_price=ZERO,
            confidence=ZERO,
            interpretation=interpretation,
            input_length=length,
        )
