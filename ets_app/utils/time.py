"""
Time handling helpers.

Bar and observation timestamps from data feeds are authoritative; nothing in
the engine consults the wall clock.
"""

from datetime import datetime, timezone
from typing import Union

OBSERVATION_DATE_FORMAT = "%Y-%m-%d"


def ensure_utc(ts: datetime) -> datetime:
    """
    Attach UTC to naive timestamps and convert aware ones to UTC.

    Args:
        ts: Timestamp from a data feed

    Returns:
        Timezone-aware UTC datetime
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def parse_observation_date(value: Union[str, datetime]) -> datetime:
    """
    Parse a macro observation date.

    Args:
        value: "YYYY-MM-DD" string or datetime

    Returns:
        UTC datetime at midnight of the observation date

    Raises:
        ValueError: If the string is not a valid date
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    return datetime.strptime(value, OBSERVATION_DATE_FORMAT).replace(tzinfo=timezone.utc)


def format_market_time(market_ts: datetime) -> str:
    """Format a market timestamp as ISO8601 for signal payloads and logs."""
    return market_ts.isoformat()


def time_elapsed_seconds(start_time: datetime, end_time: datetime) -> float:
    """Elapsed seconds between two market timestamps."""
    return (end_time - start_time).total_seconds()
