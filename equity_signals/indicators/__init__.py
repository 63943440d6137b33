"""Technical indicators (pure math, no I/O)."""

from equity_signals.indicators.bollinger import calculate_bollinger_bands
from equity_signals.indicators.calculator import IndicatorLibrary, IndicatorSnapshot
from equity_signals.indicators.macd import calculate_macd, macd_line
from equity_signals.indicators.moving_average import (
    calculate_crossover,
    calculate_ema,
    calculate_sma,
)
from equity_signals.indicators.numeric import (
    div,
    ema,
    ema_series,
    format_decimal,
    mean,
    quantize,
    returns,
    sample_variance,
    sma,
    sqrt_approx,
    stddev,
    to_decimal,
    variance,
)
from equity_signals.indicators.rsi import calculate_rsi
from equity_signals.indicators.volume import analyze_volume, volume_price_trend

__all__ = [
    "IndicatorLibrary",
    "IndicatorSnapshot",
    "analyze_volume",
    "calculate_bollinger_bands",
    "calculate_crossover",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "div",
    "ema",
    "ema_series",
    "format_decimal",
    "macd_line",
    "mean",
    "quantize",
    "returns",
    "sample_variance",
    "sma",
    "sqrt_approx",
    "stddev",
    "to_decimal",
    "variance",
    "volume_price_trend",
]
