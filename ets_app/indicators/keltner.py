"""Keltner Channel calculation"""

from collections.abc import Sequence

from ..data.models import PriceBar
from .atr import calculate_atr
from .models import Band
from .moving_average import calculate_ema
from .series import IndicatorSeries, normalize_period


def calculate_keltner_channel(
    bars: Sequence[PriceBar],
    period: int = 20,
    atr_multiplier: float = 2.0
) -> IndicatorSeries[Band]:
    """
    Calculate the Keltner Channel

    middle = EMA(close, period)
    upper/lower = middle +/- ATR(period) * atr_multiplier

    Args:
        bars: Bars in chronological order
        period: EMA and ATR length (default 20)
        atr_multiplier: ATR multiplier (default 2.0)

    Returns:
        Series of bands; indices before period - 1 hold Band(0, 0, 0)
    """
    period = normalize_period(period)
    ema_values = calculate_ema(bars, period)
    atr_values = calculate_atr(bars, period)
    results = []

    for i in range(len(bars)):
        if i < period - 1:
            results.append(Band.empty())
            continue

        middle = ema_values[i]
        atr = atr_values[i]
        results.append(Band(
            upper=middle + (atr * atr_multiplier),
            middle=middle,
            lower=middle - (atr * atr_multiplier),
        ))

    return IndicatorSeries.from_values(results, warmup=period - 1)
