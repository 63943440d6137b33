"""Tests for analysis settings."""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from equity_signals.config import AnalysisSettings, get_settings


class TestAnalysisSettings:
    def test_defaults(self):
        settings = AnalysisSettings()
        assert settings.rsi_period == 14
        assert (settings.macd_fast_period, settings.macd_slow_period, settings.macd_signal_period) == (12, 26, 9)
        assert settings.bollinger_period == 20
        assert settings.bollinger_std_dev == Decimal("2.0")
        assert (settings.ma_short_period, settings.ma_long_period) == (20, 50)
        assert settings.volume_period == 20
        assert settings.min_bars == 20
        assert settings.feature_window == 10
        assert settings.technical_cache_min_confidence == Decimal("30")
        assert settings.prediction_cache_min_confidence == Decimal("40")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("EQUITY_SIGNALS_RSI_PERIOD", "9")
        monkeypatch.setenv("EQUITY_SIGNALS_CACHE_ENABLED", "false")
        settings = AnalysisSettings()
        assert settings.rsi_period == 9
        assert settings.cache_enabled is False

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValidationError):
            AnalysisSettings(rsi_period=0)

    def test_rejects_inverted_macd_periods(self):
        with pytest.raises(ValidationError, match="macd_fast_period"):
            AnalysisSettings(macd_fast_period=30, macd_slow_period=26)

    def test_rejects_inverted_ma_periods(self):
        with pytest.raises(ValidationError, match="ma_short_period"):
            AnalysisSettings(ma_short_period=60)

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_strategies_from_env(self, monkeypatch):
        assert AnalysisSettings().strategies == []
        monkeypatch.setenv("EQUITY_SIGNALS_STRATEGIES", '["rsi", "macd"]')
        assert AnalysisSettings().strategies == ["rsi", "macd"]
