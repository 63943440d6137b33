"""Fixed-point arithmetic helpers shared by indicators and the predictor.

All monetary and percentage math runs on ``Decimal`` values. Divisions are
rounded half-up at an explicit scale (4 fractional digits unless a caller
asks for another one) so results are reproducible digit for digit.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Sequence

# Internal working scale and the scale used for display strings
SCALE = 4
DISPLAY_SCALE = 2

# Babylonian iterations for sqrt_approx; fixed so output digits never depend
# on a convergence test
SQRT_ITERATIONS = 10

ZERO = Decimal("0")
ONE = Decimal("1")
TWO = Decimal("2")
HUNDRED = Decimal("100")

_CONTEXT = Context(prec=50, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """Convert ints, strings, floats and Decimals to ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    ``None`` maps to zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize(value: Decimal, scale: int = SCALE) -> Decimal:
    """Round ``value`` half-up to ``scale`` fractional digits."""
    return value.quantize(ONE.scaleb(-scale), rounding=ROUND_HALF_UP, context=_CONTEXT)


def div(numerator: Decimal, denominator: Decimal, scale: int = SCALE) -> Decimal:
    """Divide and round half-up to ``scale`` fractional digits.

    Raises:
        ZeroDivisionError: If ``denominator`` is zero. Callers guard every
            denominator that can legitimately be zero.
    """
    return quantize(
        _CONTEXT.divide(to_decimal(numerator), to_decimal(denominator)), scale
    )


def format_decimal(value: Decimal, scale: int = DISPLAY_SCALE) -> str:
    """Format a value for display (half-up, ``scale`` digits)."""
    return str(quantize(to_decimal(value), scale))


def mean(values: Sequence[Decimal], scale: int = 6) -> Decimal:
    """Arithmetic mean at ``scale`` digits; zero for an empty sequence."""
    if not values:
        return ZERO
    return div(sum(values, ZERO), Decimal(len(values)), scale)


def sma(values: Sequence[Decimal], period: int) -> Decimal:
    """
    Simple moving average of the last ``period`` values.

    Degrades instead of failing: with fewer than ``period`` values the last
    available value is returned, and an empty sequence yields zero.

    Args:
        values: Chronologically ordered values
        period: Averaging period

    Returns:
        SMA rounded to 4 digits
    """
    if not values:
        return ZERO
    if len(values) < period:
        return values[-1]
    window = values[-period:]
    return div(sum(window, ZERO), Decimal(period), SCALE)


def ema(values: Sequence[Decimal], period: int) -> Decimal:
    """
    Exponential moving average ending at the last value.

    The seed is the value ``period`` steps from the end; the multiplier
    ``2 / (period + 1)`` is rounded to 4 digits and applied forward to the
    end of the sequence.

    Args:
        values: Chronologically ordered values
        period: EMA period

    Returns:
        Latest EMA value (last value when input is shorter than ``period``)
    """
    if not values:
        return ZERO
    if len(values) < period:
        return values[-1]

    multiplier = div(TWO, Decimal(period + 1), SCALE)
    with localcontext(_CONTEXT):
        result = values[-period]
        for value in values[len(values) - period + 1:]:
            result = value * multiplier + result * (ONE - multiplier)
    return result


def ema_series(values: Sequence[Decimal], period: int) -> list[Decimal]:
    """
    Full EMA series seeded with the SMA of the first ``period`` values.

    The first element corresponds to ``values[period - 1]``; the series is
    ``len(values) - period + 1`` long. Seed and smoothing factor are rounded
    to 6 digits.

    Args:
        values: Chronologically ordered values
        period: EMA period

    Returns:
        List of EMA values, empty when there are fewer than ``period`` values
    """
    if period <= 0 or len(values) < period:
        return []

    smoothing = div(TWO, Decimal(period + 1), 6)
    current = div(sum(values[:period], ZERO), Decimal(period), 6)
    result = [current]
    with localcontext(_CONTEXT):
        for value in values[period:]:
            current = value * smoothing + current * (ONE - smoothing)
            result.append(current)
    return result


def returns(values: Sequence[Decimal], scale: int = 6) -> list[Decimal]:
    """Stepwise returns ``(p[i] - p[i-1]) / p[i-1]``.

    A zero previous value yields a zero return for that step.
    """
    result = []
    for previous, current in zip(values, values[1:]):
        if previous == 0:
            result.append(ZERO)
        else:
            result.append(div(current - previous, previous, scale))
    return result


def variance(values: Sequence[Decimal], scale: int = 6) -> Decimal:
    """Population variance (divides by ``n``)."""
    if not values:
        return ZERO
    avg = mean(values, scale)
    with localcontext(_CONTEXT):
        total = sum(((v - avg) ** 2 for v in values), ZERO)
    return div(total, Decimal(len(values)), scale)


def sample_variance(values: Sequence[Decimal], avg: Decimal, scale: int = 6) -> Decimal:
    """Sample variance (divides by ``n - 1``) around a precomputed mean."""
    if len(values) <= 1:
        return ZERO
    with localcontext(_CONTEXT):
        total = sum(((v - avg) * (v - avg) for v in values), ZERO)
    return div(total, Decimal(len(values) - 1), scale)


def sqrt_approx(value: Decimal) -> Decimal:
    """
    Square root by the Babylonian method.

    Seeds with ``value / 2`` and runs exactly ``SQRT_ITERATIONS`` iterations,
    every division rounded to 6 digits. Zero and negative inputs return zero,
    as do inputs too small to be represented at 6 digits.
    """
    if value <= 0:
        return ZERO

    x = div(value, TWO, 6)
    if x == 0:
        return ZERO
    for _ in range(SQRT_ITERATIONS):
        x = div(x + div(value, x, 6), TWO, 6)
    return x


def stddev(values: Sequence[Decimal]) -> Decimal:
    """Standard deviation of the stepwise returns of ``values``."""
    step_returns = returns(values)
    if not step_returns:
        return ZERO
    return sqrt_approx(variance(step_returns))
