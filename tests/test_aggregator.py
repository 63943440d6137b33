"""Tests for the weighted aggregator."""

import pytest
from decimal import Decimal

import numpy as np

from equity_signals.models import Recommendation, StrategyResult, StrategySignal
from equity_signals.strategy import Aggregator


def _strategy(signal: StrategySignal, confidence, name: str = "S") -> StrategyResult:
    return StrategyResult(name=name, signal=signal, confidence=Decimal(str(confidence)))


BUY = StrategySignal.BUY
SELL = StrategySignal.SELL
NEUTRAL = StrategySignal.NEUTRAL

# Confidences the built-in rules can produce for BUY/SELL calls
RULE_CONFIDENCES = [60, 65, 70, 75, 80, 85]


class TestCombine:
    """Tests for Aggregator.combine."""

    def test_empty_is_hold_zero(self):
        overall = Aggregator().combine([])
        assert overall.recommendation == Recommendation.HOLD
        assert overall.confidence == Decimal("0")

    def test_zero_total_weight_is_hold_zero(self):
        overall = Aggregator().combine([_strategy(BUY, 0), _strategy(SELL, 0)])
        assert overall.recommendation == Recommendation.HOLD
        assert overall.confidence == Decimal("0")

    def test_all_neutral_is_hold_50(self):
        overall = Aggregator().combine([_strategy(NEUTRAL, 50)] * 5)
        assert overall.recommendation == Recommendation.HOLD
        assert overall.confidence == Decimal("50")
        assert overall.buy_percentage == overall.sell_percentage == Decimal("0")

    def test_tie_is_hold_50(self):
        overall = Aggregator().combine([_strategy(BUY, 75), _strategy(SELL, 75)])
        assert overall.recommendation == Recommendation.HOLD
        assert overall.confidence == Decimal("50")

    def test_buy_majority(self):
        # RSI SELL 75, MACD/BB/Volume NEUTRAL 50, MA BUY 80
        strategies = [
            _strategy(SELL, 75),
            _strategy(NEUTRAL, 50),
            _strategy(NEUTRAL, 50),
            _strategy(BUY, 80),
            _strategy(NEUTRAL, 50),
        ]
        overall = Aggregator().combine(strategies)
        # 0.80 / 3.05 = 0.26, 0.75 / 3.05 = 0.25
        assert overall.recommendation == Recommendation.BUY
        assert overall.confidence == Decimal("26")
        assert overall.buy_percentage == Decimal("26")
        assert overall.sell_percentage == Decimal("25")

    def test_strong_buy_at_70_percent(self):
        strategies = [_strategy(BUY, 70), _strategy(NEUTRAL, 30)]
        overall = Aggregator().combine(strategies)
        assert overall.recommendation == Recommendation.STRONG_BUY
        assert overall.confidence == Decimal("70")

    def test_strong_sell(self):
        strategies = [_strategy(SELL, 85), _strategy(SELL, 75), _strategy(NEUTRAL, 50)]
        overall = Aggregator().combine(strategies)
        # 1.60 / 2.10 = 0.76
        assert overall.recommendation == Recommendation.STRONG_SELL
        assert overall.confidence == Decimal("76")

    def test_sell_below_strong_threshold(self):
        strategies = [_strategy(SELL, 60), _strategy(NEUTRAL, 50)]
        overall = Aggregator().combine(strategies)
        # 0.60 / 1.10 = 0.55
        assert overall.recommendation == Recommendation.SELL
        assert overall.confidence == Decimal("55")

    def test_shares_without_neutral_sum_to_100(self):
        strategies = [_strategy(BUY, 60), _strategy(BUY, 65), _strategy(SELL, 75)]
        overall = Aggregator().combine(strategies)
        # 1.25 / 2.00 = 0.625 rounds up; sell takes the remainder
        assert overall.buy_percentage == Decimal("63")
        assert overall.sell_percentage == Decimal("37")
        assert overall.recommendation == Recommendation.BUY

    def test_confidence_has_two_digits(self):
        overall = Aggregator().combine([_strategy(BUY, 80), _strategy(NEUTRAL, 50)])
        assert overall.confidence.as_tuple().exponent == -2

    @pytest.mark.parametrize("seed", range(20))
    def test_percentages_bounded(self, seed):
        rng = np.random.default_rng(seed)
        strategies = []
        for _ in range(5):
            signal = [BUY, SELL, NEUTRAL][int(rng.integers(0, 3))]
            confidence = 50 if signal == NEUTRAL else int(rng.choice(RULE_CONFIDENCES))
            strategies.append(_strategy(signal, confidence))
        overall = Aggregator().combine(strategies)

        total = overall.buy_percentage + overall.sell_percentage
        assert total <= Decimal("100")
        if any(s.signal == NEUTRAL for s in strategies):
            assert total < Decimal("100")
        assert Decimal("0") <= overall.confidence <= Decimal("100")


class TestSummarize:
    def test_notes_format(self):
        strategies = [
            _strategy(SELL, 75, "RSI"),
            _strategy(NEUTRAL, 50, "MACD"),
        ]
        notes = Aggregator.summarize(strategies)
        assert notes == (
            "Technical Analysis Summary:\n"
            "• RSI: SELL (75% confidence)\n"
            "• MACD: NEUTRAL (50% confidence)\n"
        )
