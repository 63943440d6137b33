"""Aggregator: folds weighted strategy calls into one recommendation.

Each strategy's weight is its confidence / 100. BUY and SELL weights are
summed separately; NEUTRAL weights only count towards the total. The
winning side's share of the total (in percent) is the confidence, and a
share of 70% or more upgrades the call to STRONG_BUY / STRONG_SELL.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from equity_signals.indicators.numeric import HUNDRED, ZERO, div, quantize
from equity_signals.models import Recommendation, StrategyResult, StrategySignal

STRONG_THRESHOLD = Decimal("70")
TIE_CONFIDENCE = Decimal("50")


@dataclass(frozen=True)
class OverallAnalysis:
    """Aggregated recommendation with the buy/sell percentages behind it."""

    recommendation: Recommendation
    confidence: Decimal
    buy_percentage: Decimal = ZERO
    sell_percentage: Decimal = ZERO


class Aggregator:
    """Combine strategy results into one recommendation and confidence."""

    def combine(self, strategies: Sequence[StrategyResult]) -> OverallAnalysis:
        if not strategies:
            return OverallAnalysis(Recommendation.HOLD, ZERO)

        buy_score = ZERO
        sell_score = ZERO
        total_weight = ZERO
        for strategy in strategies:
            weight = div(strategy.confidence, HUNDRED, 2)
            total_weight += weight
            if strategy.signal == StrategySignal.BUY:
                buy_score += weight
            elif strategy.signal == StrategySignal.SELL:
                sell_score += weight

        if total_weight == 0:
            return OverallAnalysis(Recommendation.HOLD, ZERO)

        buy_pct = div(buy_score, total_weight, 2) * HUNDRED
        if buy_score + sell_score == total_weight:
            # No neutral weight: the shares are complements and must sum to 100
            sell_pct = HUNDRED - buy_pct
        else:
            sell_pct = div(sell_score, total_weight, 2) * HUNDRED

        if buy_pct > sell_pct:
            recommendation = (
                Recommendation.STRONG_BUY if buy_pct >= STRONG_THRESHOLD else Recommendation.BUY
            )
            confidence = buy_pct
        elif sell_pct > buy_pct:
            recommendation = (
                Recommendation.STRONG_SELL if sell_pct >= STRONG_THRESHOLD else Recommendation.SELL
            )
            confidence = sell_pct
        else:
            recommendation = Recommendation.HOLD
            confidence = TIE_CONFIDENCE

        return OverallAnalysis(
            recommendation=recommendation,
            confidence=quantize(confidence, 2),
            buy_percentage=quantize(buy_pct, 2),
            sell_percentage=quantize(sell_pct, 2),
        )

    @staticmethod
    def summarize(strategies: Sequence[StrategyResult]) -> str:
        """Build the notes text listing every strategy's call."""
        lines = ["Technical Analysis Summary:"]
        for strategy in strategies:
            lines.append(
                f"• {strategy.name}: {strategy.signal.value} "
                f"({quantize(strategy.confidence, 0)}% confidence)"
            )
        return "\n".join(lines) + "\n"
