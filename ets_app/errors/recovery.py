"""
Recovery strategy classifications for error handling.

Fetch collaborators (market data and macro series services) raise these so
the caller can surface a retryable, user-visible error while the engine keeps
its last good state.
"""

from typing import Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, retry_count: int = 0,
                 max_retries: int = 3, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True

    @property
    def can_retry(self) -> bool:
        return self.retry_count < self.max_retries


class DataFetchError(RecoverableError):
    """Network or parsing failure while fetching price bars or macro series."""

    def __init__(self, message: str, source: Optional[str] = None,
                 series_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.series_id = series_id

    @property
    def user_message(self) -> str:
        """Short message suitable for display."""
        target = self.series_id or self.source or "data"
        return f"Could not load {target}. Please try again."
