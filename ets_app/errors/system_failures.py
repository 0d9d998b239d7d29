"""
System failure error classifications.

These exceptions represent programming or configuration faults that the
engine cannot recover from on its own.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PositionTransitionError(SystemFailureError):
    """Illegal position transition that would corrupt the single-position invariant."""

    def __init__(self, message: str, symbol: Optional[str] = None,
                 current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.symbol = symbol
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class ConfigurationError(SystemFailureError):
    """Configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
