"""Strategy layer.

Public API:
- Strategy: Protocol that all strategies must implement
- register_strategy: Decorator to register a strategy class
- create_strategy: Instantiate a registered strategy by key
- strategy_keys / display_names: Registered strategies in evaluation order
- StrategyEvaluator: Runs strategies over an indicator snapshot
- Aggregator: Combines strategy calls into one recommendation

Importing this package auto-registers all built-in strategies.
"""

from equity_signals.strategy.protocol import Strategy
from equity_signals.strategy.registry import (
    StrategyEntry,
    create_strategy,
    display_names,
    register_strategy,
    strategy_keys,
)

# Import built-in strategies to trigger auto-registration
import equity_signals.strategy.rules  # noqa: F401

from equity_signals.strategy.aggregator import Aggregator, OverallAnalysis
from equity_signals.strategy.evaluator import DEFAULT_STRATEGY_ORDER, StrategyEvaluator

__all__ = [
    "Aggregator",
    "DEFAULT_STRATEGY_ORDER",
    "OverallAnalysis",
    "Strategy",
    "StrategyEntry",
    "StrategyEvaluator",
    "create_strategy",
    "display_names",
    "register_strategy",
    "strategy_keys",
]
