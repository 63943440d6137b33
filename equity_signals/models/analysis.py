"""Strategy and aggregated analysis result models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Results below this confidence are flagged so a cache can skip them
TECHNICAL_CACHE_MIN_CONFIDENCE = Decimal("30")


def cache_key(symbol: str, length: int) -> str:
    """Cache key for a result computed from ``length`` bars: 'SYMBOL_LENGTH'."""
    return f"{symbol}_{length}"


class StrategySignal(str, Enum):
    """Normalized call of a single strategy."""

    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class Recommendation(str, Enum):
    """Overall recommendation."""

    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"


class StrategyResult(BaseModel):
    """One indicator's normalized call plus confidence."""

    model_config = ConfigDict(frozen=True)

    name: str
    signal: StrategySignal
    confidence: Decimal = Field(ge=0, le=100)
    interpretation: str = ""

    @property
    def weight(self) -> Decimal:
        """Confidence as a fraction."""
        return self.confidence / 100


class AnalysisResult(BaseModel):
    """Technical analysis outcome for one symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    recommendation: Recommendation
    confidence: Decimal = Field(ge=0, le=100)
    strategies: list[StrategyResult] = Field(default_factory=list)
    notes: str = ""
    input_length: int = 0

    @property
    def passed_strategies(self) -> list[str]:
        """Names of strategies with a BUY or SELL call."""
        return [s.name for s in self.strategies if s.signal != StrategySignal.NEUTRAL]

    @property
    def strategies_passed(self) -> int:
        return len(self.passed_strategies)

    @property
    def total_strategies(self) -> int:
        return len(self.strategies)

    @property
    def cache_key(self) -> str:
        return cache_key(self.symbol, self.input_length)

    @property
    def skip_cache(self) -> bool:
        """True when the result is too weak to be worth caching."""
        return self.confidence < TECHNICAL_CACHE_MIN_CONFIDENCE
