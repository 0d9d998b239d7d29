"""MACD (Moving Average Convergence Divergence) calculation"""

from collections.abc import Sequence

from ..data.models import PriceBar
from .models import MACDPoint
from .moving_average import calculate_ema, ema_of_values
from .series import IndicatorSeries, normalize_period


def calculate_macd(
    bars: Sequence[PriceBar],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9
) -> IndicatorSeries[MACDPoint]:
    """
    Calculate MACD, its signal line and histogram

    macd[i] = EMA(fast)[i] - EMA(slow)[i], defined from the first bar through
    the EMAs' own warm-up. The signal line smooths the MACD line with the same
    growing-window warm-up as the plain EMA.

    Args:
        bars: Bars in chronological order
        fast_period: Fast EMA length (default 12)
        slow_period: Slow EMA length (default 26)
        signal_period: Signal line length (default 9)

    Returns:
        Series flagged valid once both the slow EMA and the signal line warmed up
    """
    slow_period = normalize_period(slow_period)
    signal_period = normalize_period(signal_period)

    fast_ema = calculate_ema(bars, fast_period)
    slow_ema = calculate_ema(bars, slow_period)

    macd_line = [fast_ema[i] - slow_ema[i] for i in range(len(bars))]
    signal_line = ema_of_values(macd_line, signal_period)

    results = [
        MACDPoint(
            macd=macd_line[i],
            signal=signal_line[i],
            histogram=macd_line[i] - signal_line[i],
        )
        for i in range(len(bars))
    ]

    return IndicatorSeries.from_values(results, warmup=slow_period + signal_period - 2)
