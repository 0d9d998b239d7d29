"""Indicator value models"""

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Band:
    """Upper/middle/lower envelope value at one bar."""
    upper: float
    middle: float
    lower: float

    @classmethod
    def empty(cls) -> "Band":
        """Warm-up sentinel."""
        return cls(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class MACDPoint:
    """MACD line, signal line and histogram at one bar."""
    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class TechnicalIndicators:
    """Indicator snapshot for a single bar."""
    # Bollinger Bands
    bollinger_upper: float
    bollinger_middle: float
    bollinger_lower: float

    # RSI
    rsi: float

    # Keltner Channel (squeeze detection)
    keltner_upper: Optional[float] = None
    keltner_lower: Optional[float] = None

    # MACD
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    macd_histogram: Optional[float] = None

    # ATR (volatility)
    atr: Optional[float] = None

    @property
    def bollinger_bandwidth(self) -> float:
        """Band width relative to the middle band, 0 while the middle is 0."""
        if self.bollinger_middle == 0:
            return 0.0
        return (self.bollinger_upper - self.bollinger_lower) / self.bollinger_middle

    @property
    def is_squeeze(self) -> bool:
        """Bollinger Bands fully inside the Keltner Channel."""
        if self.keltner_upper is None or self.keltner_lower is None:
            return False
        return self.bollinger_upper < self.keltner_upper and self.bollinger_lower > self.keltner_lower

    def is_rsi_oversold(self, threshold: float = 30.0) -> bool:
        return self.rsi < threshold

    def is_rsi_overbought(self, threshold: float = 70.0) -> bool:
        return self.rsi > threshold

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def is_squeeze(indicators: TechnicalIndicators) -> bool:
    """True when bollinger_upper < keltner_upper and bollinger_lower > keltner_lower."""
    return indicators.is_squeeze
