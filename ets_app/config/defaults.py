"""Default configuration parameters for the signal engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IndicatorParams:
    """Technical indicator and signal threshold parameters."""
    # Bollinger Bands
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0

    # RSI
    rsi_period: int = 14
    rsi_oversold: float = 30.0                       # Entry threshold
    rsi_overbought: float = 70.0                     # Exit threshold

    # Keltner Channel (squeeze detection)
    keltner_period: int = 20
    keltner_atr_multiplier: float = 2.0

    # ATR snapshot carried on every indicator bundle
    atr_period: int = 14

    # MACD
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9


@dataclass(frozen=True)
class TradingParams:
    """Position sizing and risk parameters."""
    initial_capital: float = 30000.0
    stop_loss_percent: float = 0.02                  # Fixed stop below entry


@dataclass(frozen=True)
class CycleThresholds:
    """Macro cycle classification thresholds."""
    contraction_gdp: float = 0.0
    contraction_unemployment_trend: float = 0.3
    peak_gdp_trend: float = -0.5
    peak_inflation: float = 3.5
    peak_yield_curve: float = -0.2
    recovery_gdp_min: float = 0.0
    recovery_gdp_max: float = 2.0
    recovery_unemployment_min: float = 6.0
    recovery_unemployment_trend: float = -0.1


@dataclass(frozen=True)
class CycleParams:
    """Macro cycle smoothing parameters."""
    smoothing_window: int = 90                       # Observations in trailing window
    thresholds: CycleThresholds = field(default_factory=CycleThresholds)


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration passed explicitly into every call."""
    indicators: IndicatorParams
    trading: TradingParams
    cycle: CycleParams


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        indicators=IndicatorParams(),
        trading=TradingParams(),
        cycle=CycleParams(),
    )
