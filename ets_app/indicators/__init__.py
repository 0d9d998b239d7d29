"""Technical indicator engine: pure functions from bars to index-aligned series"""

from .atr import calculate_atr, calculate_true_range
from .bollinger import calculate_bollinger_bands
from .calculator import IndicatorCalculator, IndicatorSet, calculate_indicators
from .keltner import calculate_keltner_channel
from .macd import calculate_macd
from .models import Band, MACDPoint, TechnicalIndicators, is_squeeze
from .moving_average import calculate_ema, calculate_sma, ema_of_values
from .rsi import calculate_rsi
from .series import IndicatorSeries

__all__ = [
    "Band",
    "IndicatorCalculator",
    "IndicatorSeries",
    "IndicatorSet",
    "MACDPoint",
    "TechnicalIndicators",
    "calculate_atr",
    "calculate_bollinger_bands",
    "calculate_ema",
    "calculate_indicators",
    "calculate_keltner_channel",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "calculate_true_range",
    "ema_of_values",
    "is_squeeze",
]
