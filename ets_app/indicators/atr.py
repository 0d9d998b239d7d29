"""ATR (Average True Range) calculation"""

from collections.abc import Sequence
from typing import Optional

from ..data.models import PriceBar
from .series import IndicatorSeries, normalize_period


def calculate_true_range(current: PriceBar, previous: Optional[PriceBar] = None) -> float:
    """
    Calculate True Range for a single bar

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    Args:
        current: Current bar
        previous: Previous bar (None for first bar)

    Returns:
        True Range value
    """
    if previous is None:
        # First bar case - use high-low range
        return current.high - current.low

    range_hl = current.high - current.low
    range_hc = abs(current.high - previous.close)
    range_lc = abs(current.low - previous.close)

    return max(range_hl, range_hc, range_lc)


def calculate_atr(bars: Sequence[PriceBar], period: int = 14) -> IndicatorSeries[float]:
    """
    Calculate Average True Range for every bar

    result[0] = TR[0]; for 0 < i < period the mean of TR[0..i]; from
    i = period on, recursive smoothing
    ATR[i] = (ATR[i-1] * (period - 1) + TR[i]) / period.

    Args:
        bars: Bars in chronological order
        period: ATR period (default 14)

    Returns:
        Series aligned with bars, flagged valid from index period - 1
    """
    period = normalize_period(period)
    results: list[float] = []
    true_ranges: list[float] = []

    for i, bar in enumerate(bars):
        previous = bars[i - 1] if i > 0 else None
        tr = calculate_true_range(bar, previous)
        true_ranges.append(tr)

        if i == 0:
            results.append(tr)
        elif i < period:
            results.append(sum(true_ranges) / len(true_ranges))
        else:
            results.append((results[i - 1] * (period - 1) + tr) / period)

    return IndicatorSeries.from_values(results, warmup=period - 1)
