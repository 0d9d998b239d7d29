"""RSI (Relative Strength Index) calculation"""

from collections.abc import Sequence

from ..data.models import PriceBar
from .series import IndicatorSeries, normalize_period

NEUTRAL_RSI = 50.0


def calculate_rsi(bars: Sequence[PriceBar], period: int = 14) -> IndicatorSeries[float]:
    """
    Calculate RSI using simple trailing averages.

    For each bar from index `period` on, average gain and average loss are the
    plain means of the last `period` close-to-close gains and losses (no
    Wilder smoothing). RSI = 100 - 100 / (1 + avg_gain / avg_loss), and 100
    when there were no losses in the window.

    Args:
        bars: Bars in chronological order
        period: Lookback length (default 14)

    Returns:
        Series in [0, 100]; indices before `period` hold the neutral 50
    """
    period = normalize_period(period)
    results = []
    gains: list[float] = []
    losses: list[float] = []

    for i in range(len(bars)):
        if i == 0:
            results.append(NEUTRAL_RSI)
            continue

        change = bars[i].close - bars[i - 1].close
        gains.append(max(change, 0.0))
        losses.append(max(-change, 0.0))

        if i < period:
            results.append(NEUTRAL_RSI)
            continue

        avg_gain = sum(gains[-period:]) / period
        avg_loss = sum(losses[-period:]) / period

        if avg_loss == 0:
            results.append(100.0)
        else:
            rs = avg_gain / avg_loss
            results.append(100 - (100 / (1 + rs)))

    return IndicatorSeries.from_values(results, warmup=period)
