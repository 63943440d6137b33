"""Technical analysis and heuristic price prediction for equity bars.

The indicator, strategy and prediction packages are pure computation with
no I/O. ``AnalysisEngine`` puts both pipelines behind an optional result
cache; ``build_engine`` wires everything from ``AnalysisSettings``.
"""

from equity_signals.analyzer import TechnicalAnalyzer
from equity_signals.cache import InMemoryResultCache, ResultCache
from equity_signals.config import AnalysisSettings, get_settings
from equity_signals.engine import AnalysisEngine, build_engine
from equity_signals.models import (
    AnalysisResult,
    Bar,
    PredictionDirection,
    PredictionResult,
    Recommendation,
    StrategyResult,
    StrategySignal,
)
from equity_signals.prediction import FeatureExtractor, HeuristicPredictor

__all__ = [
    "AnalysisEngine",
    "AnalysisResult",
    "AnalysisSettings",
    "Bar",
    "FeatureExtractor",
    "HeuristicPredictor",
    "InMemoryResultCache",
    "PredictionDirection",
    "PredictionResult",
    "Recommendation",
    "ResultCache",
    "StrategyResult",
    "StrategySignal",
    "TechnicalAnalyzer",
    "build_engine",
    "get_settings",
]
