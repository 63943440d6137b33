"""StrategyEvaluator: runs strategies in registry order."""

from __future__ import annotations

import logging
from typing import Sequence

from equity_signals.indicators.calculator import IndicatorSnapshot
from equity_signals.models import StrategyResult
from equity_signals.strategy import rules  # noqa: F401  (registers the built-ins)
from equity_signals.strategy.protocol import Strategy
from equity_signals.strategy.registry import create_strategy, get_entry, strategy_keys

logger = logging.getLogger(__name__)

# Built-in strategies in the order they appear in every AnalysisResult
DEFAULT_STRATEGY_ORDER: tuple[str, ...] = strategy_keys()


class StrategyEvaluator:
    """Evaluate an indicator snapshot into an ordered list of strategy calls."""

    def __init__(self, strategies: Sequence[Strategy] | None = None):
        if strategies is None:
            strategies = [create_strategy(key) for key in strategy_keys()]
        for strategy in strategies:
            if not isinstance(strategy, Strategy):
                raise TypeError(f"{strategy!r} does not implement the Strategy protocol")
        self.strategies: list[Strategy] = list(strategies)

    @classmethod
    def from_keys(cls, keys: Sequence[str]) -> StrategyEvaluator:
        """Build an evaluator from registered keys, kept in registry order.

        Raises:
            KeyError: If a key is not registered.
        """
        entries = sorted({get_entry(key) for key in keys}, key=lambda e: e.position)
        return cls([entry.strategy_cls() for entry in entries])

    def evaluate(self, snapshot: IndicatorSnapshot) -> list[StrategyResult]:
        results = [strategy.evaluate(snapshot) for strategy in self.strategies]
        for result in results:
            logger.debug(
                "%s -> %s (%s)", result.name, result.signal.value, result.confidence
            )
        return results
