"""
Merging of independently fetched macro series into dated snapshots.

Each macro series is fetched on its own (the fan-out lives in the fetch
collaborator); this module is the fan-in: it combines the named series by
observation date into chronological EconomicData points, deriving the yield
curve spread and year-over-year inflation on the way.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Optional, Union

from .models import EconomicData
from ..utils.time import parse_observation_date

ObservationValue = Union[float, int, str, None]
Observation = tuple[Union[str, datetime], ObservationValue]

# Series copied directly onto the snapshot field of the same name
DIRECT_SERIES = ("gdp_growth", "unemployment", "fed_funds", "consumer_sentiment")

CPI_SERIES = "cpi"
TREASURY_10Y_SERIES = "treasury_10y"
TREASURY_2Y_SERIES = "treasury_2y"

# FRED series ids for each recognized series name
FRED_SERIES_IDS = {
    "gdp_growth": "A191RL1Q225SBEA",
    "unemployment": "UNRATE",
    "cpi": "CPIAUCSL",
    "fed_funds": "FEDFUNDS",
    "treasury_10y": "GS10",
    "treasury_2y": "GS2",
    "consumer_sentiment": "UMCSENT",
}

# Monthly CPI: the observation twelve places back is a year ago
INFLATION_LOOKBACK = 12

MISSING_VALUE_MARKER = "."


def parse_observation_value(value: ObservationValue) -> Optional[float]:
    """
    Parse a raw observation value.

    FRED reports missing observations as "."; those and any unparseable
    strings yield None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip() == MISSING_VALUE_MARKER:
            return None
        try:
            return float(value)
        except ValueError:
            return None
    return float(value)


def _clean_series(observations: Iterable[Observation]) -> dict[datetime, float]:
    cleaned: dict[datetime, float] = {}
    for raw_date, raw_value in observations:
        value = parse_observation_value(raw_value)
        if value is None:
            continue
        cleaned[parse_observation_date(raw_date)] = value
    return cleaned


def calculate_yield_curve(treasury_10y: dict[datetime, float],
                          treasury_2y: dict[datetime, float]) -> dict[datetime, float]:
    """10Y minus 2Y spread on dates both series report."""
    common_dates = set(treasury_10y) & set(treasury_2y)
    return {date: treasury_10y[date] - treasury_2y[date] for date in common_dates}


def calculate_yoy_inflation(cpi: dict[datetime, float],
                            lookback: int = INFLATION_LOOKBACK) -> dict[datetime, float]:
    """Year-over-year CPI change in percent, starting at the first full year."""
    sorted_dates = sorted(cpi)
    inflation = {}
    for index in range(lookback, len(sorted_dates)):
        current = cpi[sorted_dates[index]]
        year_ago = cpi[sorted_dates[index - lookback]]
        if year_ago == 0:
            continue
        inflation[sorted_dates[index]] = ((current - year_ago) / year_ago) * 100
    return inflation


def merge_macro_series(series: Mapping[str, Iterable[Observation]]) -> list[EconomicData]:
    """
    Merge named macro series into chronological EconomicData snapshots.

    Args:
        series: Mapping of series name to (date, value) observations. Recognized
            names are gdp_growth, unemployment, fed_funds, consumer_sentiment,
            cpi, treasury_10y and treasury_2y; others are ignored.

    Returns:
        One snapshot per date that has at least one value, sorted by date
    """
    fields_by_date: dict[datetime, dict[str, float]] = {}

    def _assign(values: dict[datetime, float], field_name: str) -> None:
        for date, value in values.items():
            fields_by_date.setdefault(date, {})[field_name] = value

    for name in DIRECT_SERIES:
        if name in series:
            _assign(_clean_series(series[name]), name)

    if TREASURY_10Y_SERIES in series and TREASURY_2Y_SERIES in series:
        _assign(
            calculate_yield_curve(
                _clean_series(series[TREASURY_10Y_SERIES]),
                _clean_series(series[TREASURY_2Y_SERIES]),
            ),
            "yield_curve",
        )

    if CPI_SERIES in series:
        _assign(calculate_yoy_inflation(_clean_series(series[CPI_SERIES])), "inflation")

    return [
        EconomicData(date=date, **fields_by_date[date])
        for date in sorted(fields_by_date)
    ]
