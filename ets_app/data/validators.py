"""
Data validation for price bar sequences.

Indicator math assumes a chronologically ordered sequence with sane prices.
Callers that ingest bars from a fetch service validate here first; the
engine's computation functions never validate or raise themselves.
"""

import math
from collections.abc import Sequence
from typing import Optional

from ..errors import MalformedDataError, MissingDataError, TemporalDataError
from .models import PriceBar


class DataValidator:
    """Validates price bars against quality rules."""

    def __init__(self, require_positive_prices: bool = True):
        self.require_positive_prices = require_positive_prices

    def validate_bar(self, bar: PriceBar, index: Optional[int] = None) -> None:
        """
        Validate a single bar.

        Raises:
            MalformedDataError: If a price is non-finite, non-positive, or the
                high/low range does not contain open and close
        """
        for name in ("open", "high", "low", "close"):
            value = getattr(bar, name)
            if not math.isfinite(value):
                raise MalformedDataError(
                    f"Bar {name} is not a finite number",
                    index=index, field_name=name, value=value
                )
            if self.require_positive_prices and value <= 0:
                raise MalformedDataError(
                    f"Bar {name} must be positive",
                    index=index, field_name=name, value=value
                )

        if bar.high < bar.low:
            raise MalformedDataError(
                "Bar high is below bar low",
                index=index, field_name="high", value=bar.high
            )

        if not (bar.low <= bar.open <= bar.high and bar.low <= bar.close <= bar.high):
            raise MalformedDataError(
                "Bar open/close outside high-low range",
                index=index, field_name="close", value=bar.close
            )

        if bar.volume < 0:
            raise MalformedDataError(
                "Bar volume is negative",
                index=index, field_name="volume", value=bar.volume
            )

    def validate_bars(self, bars: Sequence[PriceBar]) -> None:
        """
        Validate a bar sequence: every bar well-formed, timestamps strictly increasing.

        Raises:
            MissingDataError: If the sequence is empty
            TemporalDataError: If a timestamp does not strictly increase
            MalformedDataError: If any bar is malformed
        """
        if not bars:
            raise MissingDataError("No price bars supplied", data_type="bars")

        previous_ts = None
        for index, bar in enumerate(bars):
            self.validate_bar(bar, index)

            if previous_ts is not None and bar.ts <= previous_ts:
                raise TemporalDataError(
                    "Bar timestamps must be strictly increasing",
                    index=index,
                    timestamp=bar.ts,
                    previous_timestamp=previous_ts
                )
            previous_ts = bar.ts


def validate_bar_sequence(bars: Sequence[PriceBar]) -> None:
    """Validate a bar sequence with default rules."""
    DataValidator().validate_bars(bars)
