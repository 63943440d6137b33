"""Data models: bars, indicator results, strategy/analysis and prediction results."""

from equity_signals.models.analysis import (
    AnalysisResult,
    Recommendation,
    StrategyResult,
    StrategySignal,
    TECHNICAL_CACHE_MIN_CONFIDENCE,
    cache_key,
)
from equity_signals.models.bar import Bar, closes, sort_bars, volumes
from equity_signals.models.indicators import (
    BollingerBandsResult,
    BollingerSignal,
    MACDResult,
    MACDSignal,
    MovingAverageCrossoverResult,
    MovingAverageResult,
    MovingAverageSignal,
    MovingAverageType,
    RSIResult,
    RSISignal,
    VolumeResult,
    VolumeSignal,
)
from equity_signals.models.prediction import (
    Features,
    MAX_PREDICTION_CONFIDENCE,
    PREDICTION_CACHE_MIN_CONFIDENCE,
    PredictionDirection,
    PredictionResult,
)

__all__ = [
    "AnalysisResult",
    "Bar",
    "BollingerBandsResult",
    "BollingerSignal",
    "Features",
    "MACDResult",
    "MACDSignal",
    "MAX_PREDICTION_CONFIDENCE",
    "MovingAverageCrossoverResult",
    "MovingAverageResult",
    "MovingAverageSignal",
    "MovingAverageType",
    "PREDICTION_CACHE_MIN_CONFIDENCE",
    "PredictionDirection",
    "PredictionResult",
    "Recommendation",
    "RSIResult",
    "RSISignal",
    "StrategyResult",
    "StrategySignal",
    "TECHNICAL_CACHE_MIN_CONFIDENCE",
    "VolumeResult",
    "VolumeSignal",
    "cache_key",
    "closes",
    "sort_bars",
    "volumes",
]
