"""Technical analysis pipeline.

bars -> IndicatorLibrary -> StrategyEvaluator -> Aggregator -> AnalysisResult

Never raises: short input degrades to HOLD with zero confidence and any
unexpected fault is reported in the result notes.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.calculator import IndicatorLibrary
from equity_signals.models import AnalysisResult, Bar, Recommendation
from equity_signals.strategy import Aggregator, StrategyEvaluator

logger = logging.getLogger(__name__)

DEFAULT_MIN_BARS = 20


class TechnicalAnalyzer:
    """Composes indicators, strategies and the aggregator for one symbol."""

    def __init__(
        self,
        library: IndicatorLibrary | None = None,
        evaluator: StrategyEvaluator | None = None,
        aggregator: Aggregator | None = None,
        min_bars: int = DEFAULT_MIN_BARS,
    ):
        self.library = library or IndicatorLibrary()
        self.evaluator = evaluator or StrategyEvaluator()
        self.aggregator = aggregator or Aggregator()
        self.min_bars = min_bars

    def analyze(self, symbol: str, bars: Sequence[Bar] | None) -> AnalysisResult:
        """
        Run every strategy over ``bars`` and aggregate the calls.

        Args:
            symbol: Symbol the bars belong to
            bars: Bars in any order

        Returns:
            AnalysisResult (HOLD / 0 on insufficient data or error)
        """
        length = len(bars) if bars else 0
        logger.info("Performing technical analysis for %s (%d bars)", symbol, length)

        if length == 0:
            return self._neutral(symbol, 0, "insufficient data: no historical data available")
        if length < self.min_bars:
            return self._neutral(
                symbol,
                length,
                f"insufficient data: {length} bars, at least {self.min_bars} required",
            )

        try:
            snapshot = self.library.calculate_all(bars)
            strategies = self.evaluator.evaluate(snapshot)
            overall = self.aggregator.combine(strategies)
            notes = self.aggregator.summarize(strategies)
        except Exception as e:
            logger.exception("Error performing technical analysis for %s", symbol)
            return self._neutral(symbol, length, f"error: {e}")

        logger.info(
            "%s: %s (confidence %s, buy %s%%, sell %s%%)",
            symbol,
            overall.recommendation.value,
            overall.confidence,
            overall.buy_percentage,
            overall.sell_percentage,
        )
        return AnalysisResult(
            symbol=symbol,
            recommendation=overall.recommendation,
            confidence=overall.confidence,
            strategies=strategies,
            notes=notes,
            input_length=length,
        )

    @staticmethod
    def _neutral(symbol: str, length: int, notes: str) -> AnalysisResult:
        return AnalysisResult(
            symbol=symbol,
            recommendation=Recommendation.HOLD,
            confidence=Decimal("0"),
            strategies=[],
            notes=notes,
            input_length=length,
        )
