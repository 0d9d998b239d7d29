"""Bollinger Bands calculation"""

import math
from collections.abc import Sequence

from ..data.models import PriceBar
from .models import Band
from .series import IndicatorSeries, normalize_period


def calculate_bollinger_bands(
    bars: Sequence[PriceBar],
    period: int = 20,
    std_dev: float = 2.0
) -> IndicatorSeries[Band]:
    """
    Calculate Bollinger Bands over close.

    middle = SMA(close, period)
    upper/lower = middle +/- population standard deviation * std_dev

    The population (divide by period) deviation is used, not the sample one.

    Args:
        bars: Bars in chronological order
        period: Window length (default 20)
        std_dev: Deviation multiplier (default 2.0)

    Returns:
        Series of bands; indices before period - 1 hold Band(0, 0, 0)
    """
    period = normalize_period(period)
    closes = [bar.close for bar in bars]
    results = []

    for i in range(len(closes)):
        if i < period - 1:
            results.append(Band.empty())
            continue

        window = closes[i - period + 1:i + 1]
        sma = sum(window) / period
        variance = sum((close - sma) ** 2 for close in window) / period
        std = math.sqrt(variance)

        results.append(Band(
            upper=sma + (std * std_dev),
            middle=sma,
            lower=sma - (std * std_dev),
        ))

    return IndicatorSeries.from_values(results, warmup=period - 1)
