"""Tests for the indicator calculator and snapshots"""

import pytest

from ets_app.config.defaults import EngineConfig, IndicatorParams, get_default_config
from ets_app.indicators import calculate_indicators, is_squeeze
from ets_app.indicators.calculator import IndicatorCalculator
from ets_app.indicators.models import TechnicalIndicators
from ets_app.indicators.series import IndicatorSeries, normalize_period


class TestIndicatorSeries:
    """Test the validity-flagged series container"""

    def test_from_values_flags(self):
        series = IndicatorSeries.from_values([0.0, 0.0, 3.0], warmup=2)

        assert series.valid == (False, False, True)
        assert series.get(1) is None
        assert series.get(2) == 3.0
        assert series.latest() == 3.0

    def test_caller_list_is_not_shared(self):
        raw = [1.0, 2.0]
        series = IndicatorSeries.from_values(raw, warmup=0)
        raw.append(3.0)

        assert len(series) == 2
        with pytest.raises(TypeError):
            series.values[0] = 9.0

    def test_empty_series(self):
        series = IndicatorSeries.from_values([], warmup=5)

        assert len(series) == 0
        assert series.latest() is None

    def test_normalize_period(self):
        assert normalize_period(0) == 1
        assert normalize_period(-3) == 1
        assert normalize_period(14) == 14


class TestIndicatorCalculator:
    """Test snapshot computation"""

    def test_none_below_bollinger_period(self, bar_factory):
        bars = bar_factory([100.0] * 19)

        assert calculate_indicators(bars, 18) is None

    def test_none_for_out_of_range_index(self, flat_bars):
        assert calculate_indicators(flat_bars, -1) is None
        assert calculate_indicators(flat_bars, len(flat_bars)) is None

    def test_snapshot_fields(self, dip_and_rally_bars):
        snapshot = calculate_indicators(dip_and_rally_bars, 25)

        assert isinstance(snapshot, TechnicalIndicators)
        assert snapshot.rsi == pytest.approx(0.0)
        assert snapshot.bollinger_middle == pytest.approx(99.5)
        assert snapshot.bollinger_lower < 90.0 + 6.0
        assert snapshot.keltner_upper is not None
        assert snapshot.atr is not None
        assert snapshot.macd is not None

    def test_ignores_bars_after_index(self, dip_and_rally_bars):
        """A snapshot depends only on bars[0..index]"""
        full = calculate_indicators(dip_and_rally_bars, 25)
        prefix = calculate_indicators(dip_and_rally_bars[:26], 25)

        assert full == prefix

    def test_uses_configured_periods(self, flat_bars):
        config = EngineConfig(
            indicators=IndicatorParams(bollinger_period=10),
            trading=get_default_config().trading,
            cycle=get_default_config().cycle,
        )
        calculator = IndicatorCalculator(config)

        assert calculator.get_warmup_period() == 10
        assert calculator.calculate_indicators(flat_bars[:10], 9) is not None

    def test_series_lengths(self, trending_bars):
        series = IndicatorCalculator().calculate_series(trending_bars)

        assert len(series) == len(trending_bars)
        assert len(series.bollinger) == len(series.keltner) == len(series.macd)


class TestSqueeze:
    """Test squeeze detection"""

    def _indicators(self, bb_upper, bb_lower, kc_upper, kc_lower):
        return TechnicalIndicators(
            bollinger_upper=bb_upper,
            bollinger_middle=(bb_upper + bb_lower) / 2,
            bollinger_lower=bb_lower,
            rsi=50.0,
            keltner_upper=kc_upper,
            keltner_lower=kc_lower,
        )

    def test_bands_inside_channel(self):
        assert is_squeeze(self._indicators(103.0, 97.0, 104.0, 96.0))

    def test_bands_outside_channel(self):
        assert not is_squeeze(self._indicators(105.0, 97.0, 104.0, 96.0))

    def test_equal_edges_are_not_squeeze(self):
        assert not is_squeeze(self._indicators(104.0, 96.0, 104.0, 96.0))

    def test_missing_channel(self):
        indicators = TechnicalIndicators(
            bollinger_upper=103.0, bollinger_middle=100.0, bollinger_lower=97.0, rsi=50.0
        )

        assert not indicators.is_squeeze
        assert indicators.bollinger_bandwidth == pytest.approx(0.06)

    def test_rsi_threshold_helpers(self):
        indicators = self._indicators(103.0, 97.0, 104.0, 96.0)

        assert not indicators.is_rsi_oversold()
        assert indicators.is_rsi_oversold(threshold=55.0)
        assert indicators.is_rsi_overbought(threshold=45.0)
