"""
Error classification system for the signal engine.

Indicator, signal, classifier and backtest functions are total and never raise
on short or missing data; these exceptions cover input validation, illegal
position transitions, configuration faults, and external fetch failures.
"""

from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    PositionTransitionError,
    ConfigurationError,
)
from .recovery import (
    RecoverableError,
    DataFetchError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "PositionTransitionError",
    "ConfigurationError",
    # Recovery Categories
    "RecoverableError",
    "DataFetchError",
]
