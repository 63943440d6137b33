"""Tests for the result cache and the caching engine facade."""

import logging
import threading
import time
import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from equity_signals.analyzer import TechnicalAnalyzer
from equity_signals.cache import (
    InMemoryResultCache,
    NAMESPACE_PREDICTION,
    NAMESPACE_TECHNICAL,
    ResultCache,
)
from equity_signals.config import AnalysisSettings
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
from equity_signals.prediction import HeuristicPredictor


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 2, 5, tzinfo=timezone.utc)


def _make_bars(prices, symbol: str = "ACME") -> list[Bar]:
    return [
        Bar(symbol=symbol, last_price=Decimal(str(p)), volume=1000, timestamp=START + timedelta(days=i))
        for i, p in enumerate(prices)
    ]


def _analysis(confidence="80", symbol: str = "ACME", length: int = 25) -> AnalysisResult:
    return AnalysisResult(
        symbol=symbol,
        recommendation=Recommendation.STRONG_BUY,
        confidence=Decimal(confidence),
        strategies=[
            StrategyResult(
                name="RSI",
                signal=StrategySignal.BUY,
                confidence=Decimal("75"),
                interpretation="RSI: 25.00 - Oversold condition, potential buy signal",
            )
        ],
        notes="Technical Analysis Summary:\n• RSI: BUY (75% confidence)\n",
        input_length=length,
    )


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class CountingAnalyzer(TechnicalAnalyzer):
    """Returns a fixed result and counts calls."""

    def __init__(self, result: AnalysisResult, delay: float = 0.0):
        super().__init__()
        self.result = result
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def analyze(self, symbol, bars):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.result


class CountingPredictor(HeuristicPredictor):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def predict(self, symbol, bars):
        self.calls += 1
        return super().predict(symbol, bars)


# ---------------------------------------------------------------------------
# Cache adapter tests
# ---------------------------------------------------------------------------

class TestInMemoryResultCache:
    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL, ttl=300, clock=clock)

    def test_satisfies_protocol(self, cache):
        assert isinstance(cache, ResultCache)

    def test_put_and_get(self, cache):
        result = _analysis()
        assert cache.put(result.cache_key, result) is True

        cached = cache.get("ACME_25")
        assert cached == result
        assert cached is not result
        assert cached.strategies[0].signal == StrategySignal.BUY
        assert cached.confidence == Decimal("80")

    def test_miss(self, cache):
        assert cache.get("ACME_25") is None
        assert cache.stats.misses == 1
        assert cache.stats.hit_rate == 0.0

    def test_skip_if(self, cache):
        result = _analysis("20")
        assert cache.put(result.cache_key, result, skip_if=result.skip_cache) is False
        assert cache.get(result.cache_key) is None
        assert cache.stats.skips == 1
        assert len(cache) == 0

    def test_ttl_expiry(self, cache, clock):
        cache.put("ACME_25", _analysis())
        clock.now += 299
        assert cache.get("ACME_25") is not None
        clock.now += 1
        assert cache.get("ACME_25") is None
        assert len(cache) == 0

    def test_no_ttl(self, clock):
        cache = InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL, clock=clock)
        cache.put("ACME_25", _analysis())
        clock.now += 1_000_000
        assert cache.get("ACME_25") is not None

    def test_stats(self, cache):
        cache.put("ACME_25", _analysis())
        cache.get("ACME_25")
        cache.get("ACME_25")
        cache.get("OTHER_25")
        assert cache.stats.hits == 2
        assert cache.stats.misses == 1
        assert cache.stats.stores == 1
        assert cache.stats.hit_rate == pytest.approx(2 / 3)

    def test_delete_and_clear(self, cache):
        cache.put("A_25", _analysis(symbol="A"))
        cache.put("B_25", _analysis(symbol="B"))
        assert cache.delete("A_25") is True
        assert cache.delete("A_25") is False
        assert len(cache) == 1
        cache.clear()
        assert len(cache) == 0

    def test_unreadable_entry_is_a_miss(self, clock, caplog):
        # An analysis payload cannot be read back as a prediction
        cache = InMemoryResultCache(PredictionResult, NAMESPACE_PREDICTION, clock=clock)
        cache.put("ACME_25", _analysis())

        with caplog.at_level(logging.WARNING):
            assert cache.get("ACME_25") is None

        assert cache.stats.hits == 0
        assert cache.stats.misses == 1
        assert len(cache) == 0
        assert "Cache decode error" in caplog.text

    def test_prediction_roundtrip(self):
        cache = InMemoryResultCache(PredictionResult, NAMESPACE_PREDICTION, ttl=600)
        result = PredictionResult(
            symbol="ACME",
            direction=PredictionDirection.BULLISH,
            target_price=Decimal("161.2345"),
            confidence=Decimal("83"),
            interpretation="Prediction: Bullish direction (83% confidence) - Target: 161.23",
            input_length=30,
        )
        cache.put(result.cache_key, result)
        assert cache.get("ACME_30") == result


# ---------------------------------------------------------------------------
# Engine tests
# ---------------------------------------------------------------------------

class TestAnalysisEngine:
    def test_second_call_hits_cache(self):
        analyzer = CountingAnalyzer(_analysis())
        engine = AnalysisEngine(
            analyzer=analyzer,
            technical_cache=InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL),
        )
        bars = _make_bars(range(100, 125))

        first = engine.analyze("ACME", bars)
        second = engine.analyze("ACME", bars)
        assert first == second
        assert analyzer.calls == 1

    def test_different_length_is_a_different_key(self):
        analyzer = CountingAnalyzer(_analysis())
        engine = AnalysisEngine(
            analyzer=analyzer,
            technical_cache=InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL),
        )
        engine.analyze("ACME", _make_bars(range(100, 125)))
        engine.analyze("ACME", _make_bars(range(100, 126)))
        assert analyzer.calls == 2

    def test_low_confidence_not_cached(self):
        analyzer = CountingAnalyzer(_analysis("29.99"))
        cache = InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL)
        engine = AnalysisEngine(analyzer=analyzer, technical_cache=cache)
        bars = _make_bars(range(100, 125))

        engine.analyze("ACME", bars)
        engine.analyze("ACME", bars)
        assert analyzer.calls == 2
        assert cache.stats.skips == 2

    def test_without_cache_always_computes(self):
        analyzer = CountingAnalyzer(_analysis())
        engine = AnalysisEngine(analyzer=analyzer)
        bars = _make_bars(range(100, 125))
        engine.analyze("ACME", bars)
        engine.analyze("ACME", bars)
        assert analyzer.calls == 2

    def test_prediction_cached_above_40(self):
        predictor = CountingPredictor()
        engine = AnalysisEngine(
            predictor=predictor,
            prediction_cache=InMemoryResultCache(PredictionResult, NAMESPACE_PREDICTION),
        )
        bars = _make_bars([100] * 25)

        result = engine.predict("ACME", bars)
        assert result.confidence == Decimal("75")
        assert engine.predict("ACME", bars) == result
        assert predictor.calls == 1

    def test_insufficient_prediction_not_cached(self):
        predictor = CountingPredictor()
        engine = AnalysisEngine(
            predictor=predictor,
            prediction_cache=InMemoryResultCache(PredictionResult, NAMESPACE_PREDICTION),
        )
        engine.predict("ACME", _make_bars([100] * 5))
        engine.predict("ACME", _make_bars([100] * 5))
        assert predictor.calls == 2

    def test_concurrent_duplicates_collapse(self):
        analyzer = CountingAnalyzer(_analysis(), delay=0.05)
        engine = AnalysisEngine(
            analyzer=analyzer,
            technical_cache=InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL),
        )
        bars = _make_bars(range(100, 125))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: engine.analyze("ACME", bars), range(8)))

        assert analyzer.calls == 1
        assert all(r == results[0] for r in results)

    def test_key_locks_released(self):
        analyzer = CountingAnalyzer(_analysis())
        cache = InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL)
        engine = AnalysisEngine(analyzer=analyzer, technical_cache=cache)

        for i in range(200):
            engine.analyze(f"SYM{i}", _make_bars(range(100, 125), symbol=f"SYM{i}"))
        cache.clear()

        assert analyzer.calls == 200
        assert engine._locks == {}

    def test_key_locks_released_after_concurrent_use(self):
        analyzer = CountingAnalyzer(_analysis(), delay=0.01)
        engine = AnalysisEngine(
            analyzer=analyzer,
            technical_cache=InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL),
        )
        bars = _make_bars(range(100, 125))

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: engine.analyze(f"SYM{i % 4}", bars), range(32)))

        assert analyzer.calls == 4
        assert engine._locks == {}

    def test_key_lock_released_when_compute_raises(self):
        class FailingAnalyzer(TechnicalAnalyzer):
            def analyze(self, symbol, bars):
                raise RuntimeError("boom")

        engine = AnalysisEngine(
            analyzer=FailingAnalyzer(),
            technical_cache=InMemoryResultCache(AnalysisResult, NAMESPACE_TECHNICAL),
        )
        with pytest.raises(RuntimeError):
            engine.analyze("ACME", _make_bars(range(100, 125)))
        assert engine._locks == {}


class TestBuildEngine:
    def test_default_wiring(self):
        engine = build_engine(AnalysisSettings())
        assert isinstance(engine.technical_cache, InMemoryResultCache)
        assert isinstance(engine.prediction_cache, InMemoryResultCache)
        assert engine.technical_cache.ttl == 300
        assert engine.prediction_cache.ttl == 600
        assert engine.analyzer.min_bars == 20
        assert engine.predictor.extractor.window == 10

    def test_settings_flow_through(self):
        settings = AnalysisSettings(
            rsi_period=7,
            min_bars=30,
            feature_window=12,
            cache_enabled=False,
        )
        engine = build_engine(settings)
        assert engine.technical_cache is None
        assert engine.prediction_cache is None
        assert engine.analyzer.library.rsi_period == 7
        assert engine.analyzer.min_bars == 30
        assert engine.predictor.min_bars == 30
        assert engine.predictor.extractor.window == 12

    def test_strategy_selection(self):
        engine = build_engine(AnalysisSettings(strategies=["volume", "moving_average"]))
        result = engine.analyze("ACME", _make_bars([100 + 2 * i for i in range(25)]))
        assert [s.name for s in result.strategies] == ["Moving Average", "Volume Analysis"]

    def test_unknown_strategy_key(self):
        with pytest.raises(KeyError):
            build_engine(AnalysisSettings(strategies=["rsi", "nope"]))

    def test_end_to_end(self):
        engine = build_engine(AnalysisSettings())
        bars = _make_bars([100 + 2 * i for i in range(25)])
        analysis = engine.analyze("ACME", bars)
        prediction = engine.predict("ACME", bars)
        assert analysis.recommendation in (Recommendation.BUY, Recommendation.STRONG_BUY)
        assert prediction.direction == PredictionDirection.BULLISH
