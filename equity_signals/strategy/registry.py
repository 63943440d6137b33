"""Strategy registry.

Strategies register under a short key together with their display name and
their position in the analysis. The registration order of the built-in
rules is the order strategies appear in every AnalysisResult.

Usage:
    @register_strategy("rsi")
    class RsiStrategy:
        name = "RSI"
        ...

    keys = strategy_keys()          # ("rsi", "macd", ...)
    strategy = create_strategy("rsi")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyEntry:
    """A registered strategy class with its key and evaluation position."""

    key: str
    strategy_cls: type
    position: int

    @property
    def display_name(self) -> str:
        return self.strategy_cls.name


# key -> entry, in registration order
_REGISTRY: dict[str, StrategyEntry] = {}


def register_strategy(key: str):
    """Register a strategy class under ``key``.

    The class must carry a non-empty ``name``; it becomes the strategy name
    in results, so two strategies may not share one.

    Raises:
        ValueError: If the key or the display name is already taken.
        TypeError: If the class has no display name.
    """

    def decorator(cls):
        name = getattr(cls, "name", None)
        if not isinstance(name, str) or not name:
            raise TypeError(f"{cls.__name__} must define a non-empty 'name'")
        if key in _REGISTRY:
            raise ValueError(
                f"Strategy key '{key}' is already taken by {_REGISTRY[key].strategy_cls.__name__}"
            )
        for entry in _REGISTRY.values():
            if entry.display_name == name:
                raise ValueError(f"Strategy name '{name}' is already used by '{entry.key}'")

        _REGISTRY[key] = StrategyEntry(key=key, strategy_cls=cls, position=len(_REGISTRY))
        logger.debug("Registered strategy %s (%s) at position %d", key, name, len(_REGISTRY) - 1)
        return cls

    return decorator


def get_entry(key: str) -> StrategyEntry:
    entry = _REGISTRY.get(key)
    if entry is None:
        known = ", ".join(_REGISTRY) or "(none)"
        raise KeyError(f"No strategy registered as '{key}'; known keys: {known}")
    return entry


def create_strategy(key: str, **kwargs: Any):
    """Instantiate the strategy registered as ``key``."""
    return get_entry(key).strategy_cls(**kwargs)


def strategy_keys() -> tuple[str, ...]:
    """Registered keys in evaluation order."""
    return tuple(entry.key for entry in sorted(_REGISTRY.values(), key=lambda e: e.position))


def display_names() -> dict[str, str]:
    """Map each registered key to the name its results carry."""
    return {key: _REGISTRY[key].display_name for key in strategy_keys()}
