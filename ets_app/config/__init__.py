"""
Engine configuration.

Configuration is an explicit EngineConfig value passed into every engine call;
there is no shared settings object.
"""

from .defaults import (
    CycleParams,
    CycleThresholds,
    EngineConfig,
    IndicatorParams,
    TradingParams,
    get_default_config,
)
from .loader import ConfigLoader

__all__ = [
    "ConfigLoader",
    "CycleParams",
    "CycleThresholds",
    "EngineConfig",
    "IndicatorParams",
    "TradingParams",
    "get_default_config",
]
