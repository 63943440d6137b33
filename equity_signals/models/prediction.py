"""Feature bundle and prediction result models."""

from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from equity_signals.models.analysis import cache_key

# Predictions below this confidence are flagged so a cache can skip them
PREDICTION_CACHE_MIN_CONFIDENCE = Decimal("40")

# Upper bound on heuristic prediction confidence
MAX_PREDICTION_CONFIDENCE = Decimal("85")


class PredictionDirection(str, Enum):
    """Expected direction of the next move."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


@dataclass
class Features:
    """Scalar features extracted from the recent bar window."""

    current_price: Decimal = Decimal("0")
    price_change: Decimal = Decimal("0")
    volatility: Decimal = Decimal("0")
    momentum: Decimal = Decimal("0")
    volume_trend: Decimal = Decimal("0")
    relative_volume: Decimal = Decimal("0")
    rsi_signal: Decimal = Decimal("0")
    macd_signal: Decimal = Decimal("0")
    ma_signal: Decimal = Decimal("0")

    def as_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class PredictionResult(BaseModel):
    """Direction, target price and confidence from the heuristic scorer."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    direction: PredictionDirection
    target_price: Decimal = Decimal("0")
    confidence: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_PREDICTION_CONFIDENCE)
    interpretation: str = ""
    input_length: int = 0

    @property
    def is_bullish(self) -> bool:
        return self.direction == PredictionDirection.BULLISH

    @property
    def is_bearish(self) -> bool:
        return self.direction == PredictionDirection.BEARISH

    @property
    def is_neutral(self) -> bool:
        return self.direction == PredictionDirection.NEUTRAL

    @property
    def cache_key(self) -> str:
        return cache_key(self.symbol, self.input_length)

    @property
    def skip_cache(self) -> bool:
        """True when the prediction is too weak to be worth caching."""
        return self.confidence < PREDICTION_CACHE_MIN_CONFIDENCE
