"""
Data quality error classifications for price and macro data.

These exceptions describe input problems a caller can fix by re-fetching or
cleaning the data; the engine itself never raises them from indicator or
signal math.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Timestamp ordering issues in a bar or macro sequence."""

    def __init__(self, message: str, index: Optional[int] = None,
                 timestamp: Optional[Any] = None,
                 previous_timestamp: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.timestamp = timestamp
        self.previous_timestamp = previous_timestamp


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but violates basic price invariants."""

    def __init__(self, message: str, index: Optional[int] = None,
                 field_name: Optional[str] = None, value: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.field_name = field_name
        self.value = value
