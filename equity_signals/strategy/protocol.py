"""Strategy protocol: every strategy turns an indicator snapshot into a call."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from equity_signals.indicators.calculator import IndicatorSnapshot
from equity_signals.models import StrategyResult


@runtime_checkable
class Strategy(Protocol):
    """Protocol that all strategies must implement.

    Strategies are stateless: the same snapshot always produces the same
    StrategyResult.
    """

    @property
    def name(self) -> str:
        """Display name used in results (e.g., 'Bollinger Bands')."""
        ...

    def evaluate(self, snapshot: IndicatorSnapshot) -> StrategyResult:
        """Map the relevant indicator result to BUY/SELL/NEUTRAL plus confidence.

        Args:
            snapshot: All indicator results for the latest bar.

        Returns:
            StrategyResult with a fixed confidence from the rule table.
        """
        ...
