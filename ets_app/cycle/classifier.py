"""
Macro-economic cycle classification.

Smooths GDP growth over a trailing window, derives GDP and unemployment
trends, and assigns each observation one of four cycle stages with ordered
first-match rules.
"""

from collections.abc import Sequence
from typing import Optional

from ..config.defaults import CycleThresholds, EngineConfig, get_default_config
from ..data.models import EconomicData
from ..logging.config import get_logger
from .models import CycleClassification, CyclePoint, CycleStage

logger = get_logger(__name__)


def default_missing_trend_input(value: Optional[float]) -> float:
    """
    Missing macro fields count as 0 in classification math.

    This is a deliberate simplifying policy, not an error path: a series that
    has not reported yet contributes nothing to trends or thresholds.
    """
    return value if value is not None else 0.0


def _window_trend(values: list[float]) -> Optional[float]:
    if len(values) > 1:
        return values[-1] - values[0]
    return None


def smooth_and_trend(data: Sequence[EconomicData], window: int = 90) -> list[EconomicData]:
    """
    Apply trailing-window smoothing and trends.

    For each index i >= window the window is data[i - window .. i] inclusive.
    gdp_growth becomes the mean of the window's reported GDP values;
    gdp_trend and unemployment_trend become last minus first of the
    window's reported values when at least two are present. Earlier points
    pass through unchanged.
    """
    window = max(1, int(window))
    smoothed = []

    for i, point in enumerate(data):
        if i < window:
            smoothed.append(point)
            continue

        window_points = data[i - window:i + 1]
        gdp_values = [p.gdp_growth for p in window_points if p.gdp_growth is not None]
        unemployment_values = [p.unemployment for p in window_points if p.unemployment is not None]

        changes = {}
        if gdp_values:
            changes["gdp_growth"] = sum(gdp_values) / len(gdp_values)

        gdp_trend = _window_trend(gdp_values)
        if gdp_trend is not None:
            changes["gdp_trend"] = gdp_trend

        unemployment_trend = _window_trend(unemployment_values)
        if unemployment_trend is not None:
            changes["unemployment_trend"] = unemployment_trend

        smoothed.append(point.replace(**changes) if changes else point)

    return smoothed


def classify_single_period(
    point: EconomicData,
    thresholds: Optional[CycleThresholds] = None
) -> CycleStage:
    """
    Classify one smoothed observation. First matching rule wins:

    1. contraction: gdp < 0 or unemployment trend > 0.3
    2. peak: (gdp trend < -0.5 and inflation > 3.5) or yield curve < -0.2
    3. recovery: 0 <= gdp < 2 and unemployment > 6 and unemployment trend < -0.1
    4. expansion: gdp >= 0 and unemployment trend <= 0
    5. otherwise expansion
    """
    t = thresholds or CycleThresholds()

    gdp = default_missing_trend_input(point.gdp_growth)
    gdp_trend = default_missing_trend_input(point.gdp_trend)
    unemployment = default_missing_trend_input(point.unemployment)
    unemployment_trend = default_missing_trend_input(point.unemployment_trend)
    inflation = default_missing_trend_input(point.inflation)
    yield_curve = default_missing_trend_input(point.yield_curve)

    if gdp < t.contraction_gdp or unemployment_trend > t.contraction_unemployment_trend:
        return CycleStage.CONTRACTION

    if (gdp_trend < t.peak_gdp_trend and inflation > t.peak_inflation) or yield_curve < t.peak_yield_curve:
        return CycleStage.PEAK

    if (t.recovery_gdp_min <= gdp < t.recovery_gdp_max
            and unemployment > t.recovery_unemployment_min
            and unemployment_trend < t.recovery_unemployment_trend):
        return CycleStage.RECOVERY

    if gdp >= 0 and unemployment_trend <= 0:
        return CycleStage.EXPANSION

    # Rising-but-mild unemployment with positive growth lands here
    return CycleStage.EXPANSION


class EconomicCycleClassifier:
    """Classifies macro snapshots into cycle stages."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_default_config()

    def classify(self, data: Sequence[EconomicData]) -> CycleClassification:
        """
        Classify every observation in date order.

        Args:
            data: Macro snapshots; sorted by date before processing

        Returns:
            CycleClassification with one point per observation
        """
        ordered = sorted(data, key=lambda point: point.date)
        smoothed = smooth_and_trend(ordered, self.config.cycle.smoothing_window)
        thresholds = self.config.cycle.thresholds

        points = [
            CyclePoint(date=point.date, stage=classify_single_period(point, thresholds))
            for point in smoothed
        ]
        classification = CycleClassification(points=points)

        logger.info(
            "Classified macro cycle",
            observations=len(points),
            current_stage=classification.current_stage.value if classification.current_stage else None,
            transitions=len(classification.transitions)
        )

        return classification
