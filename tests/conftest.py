"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from ets_app.data.models import PriceBar

START_TS = datetime(2024, 1, 2, 14, 30, tzinfo=timezone.utc)
BAR_INTERVAL = timedelta(minutes=30)


def make_bars(closes: list[float], start: Optional[datetime] = None,
              spread: float = 1.0) -> list[PriceBar]:
    """Bars at 30 minute spacing with open == close and a symmetric high/low range."""
    start = start or START_TS
    return [
        PriceBar(
            ts=start + i * BAR_INTERVAL,
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=1000.0,
        )
        for i, close in enumerate(closes)
    ]


def dip_and_rally_closes() -> list[float]:
    """
    Flat at 100, one oversold dip to 90, back to 100, then a rally to 120.

    Index 25 is a BUY (close below the lower band, RSI 0), index 26 holds
    (RSI 50, close inside the bands) and index 27 is a SELL (RSI 75).
    """
    return [100.0] * 25 + [90.0, 100.0, 120.0]


@pytest.fixture
def bar_factory():
    """Factory building bars from a list of closes."""
    return make_bars


@pytest.fixture
def flat_bars() -> list[PriceBar]:
    """25 bars with a constant close of 100."""
    return make_bars([100.0] * 25)


@pytest.fixture
def dip_and_rally_bars() -> list[PriceBar]:
    return make_bars(dip_and_rally_closes())


@pytest.fixture
def dip_and_stop_bars() -> list[PriceBar]:
    """Oversold dip to 90 followed by a fall through the 88.2 stop."""
    return make_bars([100.0] * 25 + [90.0, 85.0])


@pytest.fixture
def trending_bars() -> list[PriceBar]:
    """60 bars of a noisy uptrend, enough to warm up every indicator."""
    closes = []
    price = 100.0
    for i in range(60):
        price += 0.8 if i % 3 else -1.1
        closes.append(round(price, 2))
    return make_bars(closes, spread=1.5)
