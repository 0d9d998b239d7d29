"""Indicator calculator coordinating all indicator series for a bar sequence"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import EngineConfig, IndicatorParams, get_default_config
from ..data.models import PriceBar
from .atr import calculate_atr
from .bollinger import calculate_bollinger_bands
from .keltner import calculate_keltner_channel
from .macd import calculate_macd
from .models import Band, MACDPoint, TechnicalIndicators
from .rsi import calculate_rsi
from .series import IndicatorSeries


@dataclass(frozen=True)
class IndicatorSet:
    """All indicator series computed over one bar sequence."""
    bollinger: IndicatorSeries[Band]
    rsi: IndicatorSeries[float]
    keltner: IndicatorSeries[Band]
    atr: IndicatorSeries[float]
    macd: IndicatorSeries[MACDPoint]

    def __len__(self) -> int:
        return len(self.rsi)

    def snapshot(self, index: int) -> TechnicalIndicators:
        """Bundle the values at index into a TechnicalIndicators record."""
        bb = self.bollinger[index]
        kc = self.keltner[index]
        macd = self.macd[index]

        return TechnicalIndicators(
            bollinger_upper=bb.upper,
            bollinger_middle=bb.middle,
            bollinger_lower=bb.lower,
            rsi=self.rsi[index],
            keltner_upper=kc.upper,
            keltner_lower=kc.lower,
            macd=macd.macd,
            macd_signal=macd.signal,
            macd_histogram=macd.histogram,
            atr=self.atr[index],
        )


class IndicatorCalculator:
    """
    Computes the indicator bundle used by the signal rules.

    Stateless apart from its configuration, so one instance can be shared
    across symbols and threads.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_default_config()

    @property
    def params(self) -> IndicatorParams:
        return self.config.indicators

    def calculate_series(self, bars: Sequence[PriceBar]) -> IndicatorSet:
        """Compute every indicator series over bars."""
        params = self.params
        return IndicatorSet(
            bollinger=calculate_bollinger_bands(bars, params.bollinger_period, params.bollinger_std_dev),
            rsi=calculate_rsi(bars, params.rsi_period),
            keltner=calculate_keltner_channel(bars, params.keltner_period, params.keltner_atr_multiplier),
            atr=calculate_atr(bars, params.atr_period),
            macd=calculate_macd(bars, params.macd_fast, params.macd_slow, params.macd_signal),
        )

    def calculate_indicators(self, bars: Sequence[PriceBar], index: int) -> Optional[TechnicalIndicators]:
        """
        Indicator snapshot at index.

        Returns None when there are fewer bars than the Bollinger period or the
        index is out of range. Only bars[0..index] are read.
        """
        if index < 0 or index >= len(bars):
            return None

        if len(bars) < self.params.bollinger_period:
            return None

        series = self.calculate_series(bars[:index + 1])
        return series.snapshot(index)

    def get_warmup_period(self) -> int:
        """Bars needed before a signal can be generated."""
        return self.params.bollinger_period


def calculate_indicators(
    bars: Sequence[PriceBar],
    index: int,
    config: Optional[EngineConfig] = None
) -> Optional[TechnicalIndicators]:
    """Indicator snapshot at index using the given (or default) configuration."""
    return IndicatorCalculator(config).calculate_indicators(bars, index)
