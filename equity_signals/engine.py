"""Analysis engine: the pipelines behind an optional result cache.

Concurrent requests for the same ``(symbol, input_length)`` key are
serialized on a per-key lock, so only the first one computes and the rest
read its cached result.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterator, Sequence, TypeVar

from pydantic import BaseModel

from equity_signals.analyzer import TechnicalAnalyzer
from equity_signals.cache import (
    InMemoryResultCache,
    NAMESPACE_PREDICTION,
    NAMESPACE_TECHNICAL,
    ResultCache,
)
from equity_signals.config import AnalysisSettings, get_settings
from equity_signals.indicators.calculator import IndicatorLibrary
from equity_signals.models import (
    AnalysisResult,
    Bar,
    PREDICTION_CACHE_MIN_CONFIDENCE,
    PredictionResult,
    TECHNICAL_CACHE_MIN_CONFIDENCE,
    cache_key,
)
from equity_signals.prediction import FeatureExtractor, HeuristicPredictor
from equity_signals.strategy import Aggregator, StrategyEvaluator

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


@dataclass
class _KeyLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class AnalysisEngine:
    """Facade over TechnicalAnalyzer and HeuristicPredictor with caching."""

    def __init__(
        self,
        analyzer: TechnicalAnalyzer | None = None,
        predictor: HeuristicPredictor | None = None,
        technical_cache: ResultCache[AnalysisResult] | None = None,
        prediction_cache: ResultCache[PredictionResult] | None = None,
        technical_min_confidence: Decimal = TECHNICAL_CACHE_MIN_CONFIDENCE,
        prediction_min_confidence: Decimal = PREDICTION_CACHE_MIN_CONFIDENCE,
    ):
        self.analyzer = analyzer or TechnicalAnalyzer()
        self.predictor = predictor or HeuristicPredictor()
        self.technical_cache = technical_cache
        self.prediction_cache = prediction_cache
        self.technical_min_confidence = technical_min_confidence
        self.prediction_min_confidence = prediction_min_confidence
        self._locks: dict[str, _KeyLock] = {}
        self._locks_guard = threading.Lock()

    def analyze(self, symbol: str, bars: Sequence[Bar] | None) -> AnalysisResult:
        return self._cached(
            NAMESPACE_TECHNICAL,
            self.technical_cache,
            cache_key(symbol, len(bars) if bars else 0),
            lambda: self.analyzer.analyze(symbol, bars),
            self.technical_min_confidence,
        )

    def predict(self, symbol: str, bars: Sequence[Bar] | None) -> PredictionResult:
        return self._cached(
            NAMESPACE_PREDICTION,
            self.prediction_cache,
            cache_key(symbol, len(bars) if bars else 0),
            lambda: self.predictor.predict(symbol, bars),
            self.prediction_min_confidence,
        )

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key``; it is discarded once no caller waits on it."""
        with self._locks_guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[key]

    def _cached(
        self,
        namespace: str,
        cache: ResultCache[ResultT] | None,
        key: str,
        compute: Callable[[], ResultT],
        min_confidence: Decimal,
    ) -> ResultT:
        if cache is None:
            return compute()

        with self._key_lock(f"{namespace}:{key}"):
            cached = cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s:%s", namespace, key)
                return cached

            result = compute()
            cache.put(key, result, skip_if=result.confidence < min_confidence)
            return result


def build_engine(settings: AnalysisSettings | None = None) -> AnalysisEngine:
    """Wire the full analysis stack from settings."""
    settings = settings or get_settings()

    library = IndicatorLibrary(
        rsi_period=settings.rsi_period,
        macd_fast_period=settings.macd_fast_period,
        macd_slow_period=settings.macd_slow_period,
        macd_signal_period=settings.macd_signal_period,
        bollinger_period=settings.bollinger_period,
        bollinger_std_dev=settings.bollinger_std_dev,
        ma_short_period=settings.ma_short_period,
        ma_long_period=settings.ma_long_period,
        volume_period=settings.volume_period,
    )
    if settings.strategies:
        evaluator = StrategyEvaluator.from_keys(settings.strategies)
    else:
        evaluator = StrategyEvaluator()
    analyzer = TechnicalAnalyzer(
        library=library,
        evaluator=evaluator,
        aggregator=Aggregator(),
        min_bars=settings.min_bars,
    )
    predictor = HeuristicPredictor(
        extractor=FeatureExtractor(window=settings.feature_window),
        min_bars=settings.min_bars,
    )

    technical_cache = prediction_cache = None
    if settings.cache_enabled:
        technical_cache = InMemoryResultCache(
            AnalysisResult, NAMESPACE_TECHNICAL, ttl=settings.technical_cache_ttl
        )
        prediction_cache = InMemoryResultCache(
            PredictionResult, NAMESPACE_PREDICTION, ttl=settings.prediction_cache_ttl
        )

    return AnalysisEngine(
        analyzer=analyzer,
        predictor=predictor,
        technical_cache=technical_cache,
        prediction_cache=prediction_cache,
        technical_min_confidence=settings.technical_cache_min_confidence,
        prediction_min_confidence=settings.prediction_cache_min_confidence,
    )
