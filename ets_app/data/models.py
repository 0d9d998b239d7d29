"""
Canonical data models for externally supplied market and macro data.

Price bars and macro snapshots are immutable once created; the engine only
derives new values from them.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PriceBar:
    """OHLCV bar. Sequences are ordered by strictly increasing timestamp."""
    ts: datetime        # Bar timestamp
    open: float         # Opening price
    high: float         # High price
    low: float          # Low price
    close: float        # Closing price
    volume: float       # Traded volume

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def body(self) -> float:
        return abs(self.close - self.open)

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open


@dataclass(frozen=True)
class EconomicData:
    """Per-date macro snapshot; every field except the date may be missing."""
    date: datetime
    gdp_growth: Optional[float] = None
    unemployment: Optional[float] = None
    inflation: Optional[float] = None
    yield_curve: Optional[float] = None
    fed_funds: Optional[float] = None
    consumer_sentiment: Optional[float] = None

    # Derived by the cycle classifier's smoothing pass
    gdp_trend: Optional[float] = None
    unemployment_trend: Optional[float] = None

    def replace(self, **changes) -> "EconomicData":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)
