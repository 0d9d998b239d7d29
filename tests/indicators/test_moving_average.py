"""Tests for SMA and EMA calculations"""

import pytest

from ets_app.indicators.moving_average import calculate_ema, calculate_sma, ema_of_values


class TestSMA:
    """Test simple moving average"""

    def test_sentinel_before_warmup(self, bar_factory):
        bars = bar_factory([1.0, 2.0, 3.0, 4.0, 5.0])
        sma = calculate_sma(bars, period=3)

        assert sma.values[:2] == (0.0, 0.0)
        assert sma.get(0) is None
        assert sma.get(1) is None
        assert sma.is_valid(2)

    def test_window_mean(self, bar_factory):
        bars = bar_factory([1.0, 2.0, 3.0, 4.0, 5.0])
        sma = calculate_sma(bars, period=3)

        assert sma.values[2:] == (2.0, 3.0, 4.0)

    def test_period_longer_than_data(self, bar_factory):
        bars = bar_factory([1.0, 2.0])
        sma = calculate_sma(bars, period=5)

        assert sma.values == (0.0, 0.0)
        assert sma.latest() is None

    def test_empty_input(self):
        assert len(calculate_sma([], period=3)) == 0


class TestEMA:
    """Test exponential moving average and its growing-window warm-up"""

    def test_growing_window_warmup(self, bar_factory):
        """Indices below the period use the mean of everything seen so far"""
        bars = bar_factory([1.0, 2.0, 3.0, 4.0, 5.0])
        ema = calculate_ema(bars, period=3)

        assert ema[0] == 1.0
        assert ema[1] == 1.5           # mean(1, 2)
        assert ema[2] == 2.0           # mean(1, 2, 3)

    def test_recursive_smoothing(self, bar_factory):
        bars = bar_factory([1.0, 2.0, 3.0, 4.0, 5.0])
        ema = calculate_ema(bars, period=3)

        # multiplier = 2 / (3 + 1) = 0.5
        assert ema[3] == 3.0           # (4 - 2) * 0.5 + 2
        assert ema[4] == 4.0           # (5 - 3) * 0.5 + 3

    def test_warmup_is_not_fixed_window_seed(self, bar_factory):
        """Index 1 averages two closes even with a longer period"""
        bars = bar_factory([10.0, 20.0, 30.0])
        ema = calculate_ema(bars, period=10)

        assert ema.values == (10.0, 15.0, 20.0)
        assert not any(ema.valid)

    def test_validity_starts_at_period_minus_one(self, bar_factory):
        bars = bar_factory([float(i) for i in range(1, 8)])
        ema = calculate_ema(bars, period=4)

        assert ema.valid == (False, False, False, True, True, True, True)

    def test_constant_series(self, bar_factory):
        bars = bar_factory([50.0] * 30)
        ema = calculate_ema(bars, period=12)

        assert all(value == pytest.approx(50.0) for value in ema)

    def test_ema_of_values_matches_bar_ema(self, bar_factory):
        closes = [3.0, 1.0, 4.0, 1.0, 5.0, 9.0, 2.0, 6.0]
        bars = bar_factory(closes, spread=0.5)

        assert ema_of_values(closes, 3) == list(calculate_ema(bars, 3).values)
