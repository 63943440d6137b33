"""Analysis configuration."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Analysis settings loaded from environment variables (EQUITY_SIGNALS_*)."""

    model_config = SettingsConfigDict(
        env_prefix="EQUITY_SIGNALS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Indicator periods
    rsi_period: int = Field(default=14, gt=0)
    macd_fast_period: int = Field(default=12, gt=0)
    macd_slow_period: int = Field(default=26, gt=0)
    macd_signal_period: int = Field(default=9, gt=0)
    bollinger_period: int = Field(default=20, gt=1)
    bollinger_std_dev: Decimal = Field(default=Decimal("2.0"), gt=0)
    ma_short_period: int = Field(default=20, gt=0)
    ma_long_period: int = Field(default=50, gt=0)
    volume_period: int = Field(default=20, gt=0)

    # Pipelines
    min_bars: int = Field(default=20, ge=1)
    feature_window: int = Field(default=10, ge=5)
    # Registered strategy keys to run; empty runs all of them
    strategies: list[str] = Field(default_factory=list)

    # Cache
    cache_enabled: bool = True
    technical_cache_min_confidence: Decimal = Decimal("30")
    prediction_cache_min_confidence: Decimal = Decimal("40")
    technical_cache_ttl: float = Field(default=300.0, gt=0)
    prediction_cache_ttl: float = Field(default=600.0, gt=0)

    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_period_order(self) -> AnalysisSettings:
        if self.macd_fast_period >= self.macd_slow_period:
            raise ValueError("macd_fast_period must be shorter than macd_slow_period")
        if self.ma_short_period >= self.ma_long_period:
            raise ValueError("ma_short_period must be shorter than ma_long_period")
        return self


@lru_cache
def get_settings() -> AnalysisSettings:
    """Get cached settings instance."""
    return AnalysisSettings()
