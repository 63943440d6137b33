"""Heuristic prediction pipeline: feature extraction and fixed-weight scoring."""

from equity_signals.prediction.features import DEFAULT_WINDOW, FeatureExtractor
from equity_signals.prediction.predictor import HeuristicPredictor

__all__ = [
    "DEFAULT_WINDOW",
    "FeatureExtractor",
    "HeuristicPredictor",
]
