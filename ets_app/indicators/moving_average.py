"""SMA and EMA calculations over closing prices"""

from collections.abc import Sequence

from ..data.models import PriceBar
from .series import IndicatorSeries, normalize_period


def calculate_sma(bars: Sequence[PriceBar], period: int) -> IndicatorSeries[float]:
    """
    Simple moving average of close.

    Indices before period - 1 hold the sentinel 0.

    Args:
        bars: Bars in chronological order
        period: Window length

    Returns:
        Series aligned with bars
    """
    period = normalize_period(period)
    closes = [bar.close for bar in bars]
    results = []

    for i in range(len(closes)):
        if i < period - 1:
            results.append(0.0)
        else:
            window = closes[i - period + 1:i + 1]
            results.append(sum(window) / period)

    return IndicatorSeries.from_values(results, warmup=period - 1)


def ema_of_values(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential smoothing with a growing-window warm-up.

    result[0] is values[0]; for 0 < i < period the result is the mean of
    values[0..i] (the window grows one value at a time rather than being
    seeded from a fixed period-length average); from i = period on the
    standard recursion with multiplier 2 / (period + 1) applies.
    """
    period = normalize_period(period)
    multiplier = 2.0 / (period + 1)
    results: list[float] = []

    for i, value in enumerate(values):
        if i == 0:
            results.append(value)
        elif i < period:
            results.append(sum(values[0:i + 1]) / (i + 1))
        else:
            results.append((value - results[i - 1]) * multiplier + results[i - 1])

    return results


def calculate_ema(bars: Sequence[PriceBar], period: int) -> IndicatorSeries[float]:
    """
    Exponential moving average of close.

    Every index carries a number (see ema_of_values for the warm-up rule);
    indices before period - 1 are flagged invalid.
    """
    period = normalize_period(period)
    closes = [bar.close for bar in bars]
    return IndicatorSeries.from_values(ema_of_values(closes, period), warmup=period - 1)
