"""Tests for entry, exit and stop-loss rules"""

import pytest

from ets_app.config.defaults import EngineConfig, IndicatorParams, get_default_config
from ets_app.cycle.models import CycleStage
from ets_app.indicators.models import TechnicalIndicators
from ets_app.signals.generator import (
    REASON_SEPARATOR,
    calculate_position_size,
    entry_reason,
    exit_reason,
    generate_signal,
    should_enter,
    should_exit,
    should_stop_out,
    stop_loss_signal,
)
from ets_app.signals.models import SignalType
from ets_app.state.models import Position


def _indicators(rsi=50.0, upper=110.0, lower=90.0, kc_upper=None, kc_lower=None):
    return TechnicalIndicators(
        bollinger_upper=upper,
        bollinger_middle=(upper + lower) / 2,
        bollinger_lower=lower,
        rsi=rsi,
        keltner_upper=kc_upper,
        keltner_lower=kc_lower,
    )


class TestGenerateSignal:
    """Test signal generation over a bar slice"""

    def test_none_below_bollinger_period(self, bar_factory):
        bars = bar_factory([100.0] * 19)

        assert generate_signal(bars, "SPY") is None

    def test_buy_on_oversold_dip(self, dip_and_rally_bars):
        signal = generate_signal(dip_and_rally_bars[:26], "SPY")

        assert signal.type == SignalType.BUY
        assert signal.price == 90.0
        assert signal.ts == dip_and_rally_bars[25].ts
        assert signal.reason.startswith("Price 5.4% below lower BB")
        assert "RSI oversold at 0" in signal.reason

    def test_hold_when_flat_and_quiet(self, flat_bars):
        signal = generate_signal(flat_bars, "SPY")

        assert signal.type == SignalType.HOLD
        assert signal.reason == "No entry signal. RSI: 100"
        assert not signal.is_actionable

    def test_sell_when_holding(self, dip_and_rally_bars):
        signal = generate_signal(dip_and_rally_bars, "SPY", has_open_position=True)

        assert signal.type == SignalType.SELL
        assert signal.reason.startswith("Price 8.6% above upper BB")
        assert "RSI overbought at" in signal.reason
        assert REASON_SEPARATOR in signal.reason

    def test_hold_while_holding(self, dip_and_rally_bars):
        signal = generate_signal(dip_and_rally_bars[:27], "SPY", has_open_position=True)

        assert signal.type == SignalType.HOLD
        assert signal.reason == "Holding position. RSI: 50"

    def test_exit_rules_ignored_when_flat(self, dip_and_rally_bars):
        """The rally bar is overbought but there is nothing to sell"""
        signal = generate_signal(dip_and_rally_bars, "SPY", has_open_position=False)

        assert signal.type == SignalType.HOLD
        assert signal.reason.startswith("No entry signal.")

    def test_expansion_allows_entry(self, dip_and_rally_bars):
        signal = generate_signal(dip_and_rally_bars[:26], "SPY", cycle_stage=CycleStage.EXPANSION)

        assert signal.type == SignalType.BUY
        assert "Economy in expansion" in signal.reason
        assert signal.cycle_stage == CycleStage.EXPANSION

    @pytest.mark.parametrize("stage", [CycleStage.PEAK, CycleStage.CONTRACTION, CycleStage.RECOVERY])
    def test_other_stages_block_entry(self, dip_and_rally_bars, stage):
        signal = generate_signal(dip_and_rally_bars[:26], "SPY", cycle_stage=stage)

        assert signal.type == SignalType.HOLD

    def test_repeatable(self, dip_and_rally_bars):
        """Evaluating the same slice twice gives an identical signal"""
        first = generate_signal(dip_and_rally_bars[:26], "SPY")
        second = generate_signal(dip_and_rally_bars[:26], "SPY")

        assert first == second

    def test_thresholds_come_from_config(self, dip_and_rally_bars):
        defaults = get_default_config()
        config = EngineConfig(
            indicators=IndicatorParams(rsi_overbought=80.0),
            trading=defaults.trading,
            cycle=defaults.cycle,
        )
        signal = generate_signal(dip_and_rally_bars, "SPY", config=config, has_open_position=True)

        # Still above the upper band, but RSI 75 is no longer overbought
        assert signal.type == SignalType.SELL
        assert "RSI overbought" not in signal.reason

    def test_to_dict_payload(self, dip_and_rally_bars):
        payload = generate_signal(dip_and_rally_bars[:26], "SPY").to_dict()

        assert payload["type"] == "BUY"
        assert payload["symbol"] == "SPY"
        assert payload["timestamp"] == dip_and_rally_bars[25].ts.isoformat()
        assert payload["cycle_stage"] is None
        assert "rsi" in payload["indicators"]


class TestRules:
    """Test the individual rule predicates and reasons"""

    def test_should_enter_requires_both_conditions(self, bar_factory):
        bar = bar_factory([85.0])[0]
        config = get_default_config()

        assert should_enter(bar, _indicators(rsi=20.0), config)
        assert not should_enter(bar, _indicators(rsi=35.0), config)
        assert not should_enter(bar, _indicators(rsi=20.0, lower=80.0), config)

    def test_should_exit_on_either_condition(self, bar_factory):
        bar = bar_factory([105.0])[0]
        config = get_default_config()

        assert should_exit(bar, _indicators(rsi=75.0), config)
        assert should_exit(bar, _indicators(rsi=50.0, upper=104.0), config)
        assert not should_exit(bar, _indicators(rsi=50.0), config)

    def test_entry_reason_order(self, bar_factory):
        bar = bar_factory([85.0])[0]
        indicators = _indicators(rsi=25.4, upper=104.0, lower=96.0, kc_upper=106.0, kc_lower=94.0)

        reason = entry_reason(bar, indicators, get_default_config(), CycleStage.EXPANSION)

        assert reason.split(REASON_SEPARATOR) == [
            "Price 11.5% below lower BB",
            "RSI oversold at 25",
            "Economy in expansion",
            "BB squeeze detected",
        ]

    def test_exit_reason_rsi_only(self, bar_factory):
        bar = bar_factory([105.0])[0]

        assert exit_reason(bar, _indicators(rsi=72.9), get_default_config()) == "RSI overbought at 72"


class TestPositionSizing:
    """Test all-in sizing and the fixed stop"""

    def test_shares_and_stop(self):
        size = calculate_position_size(10000.0, 50.0, 0.02)

        assert size.shares == pytest.approx(200.0)
        assert size.stop_loss == pytest.approx(49.0)

    def test_default_stop_percent(self):
        size = calculate_position_size(30000.0, 90.0)

        assert size.stop_loss == pytest.approx(88.2)
        assert size.shares * 90.0 == pytest.approx(30000.0)


class TestStopLoss:
    """Test stop-loss detection and its signal"""

    @pytest.fixture
    def position(self, dip_and_rally_bars):
        entry_signal = generate_signal(dip_and_rally_bars[:26], "SPY")
        return Position(
            symbol="SPY",
            entry_date=entry_signal.ts,
            entry_price=90.0,
            entry_signal=entry_signal,
            shares=100.0,
            stop_loss=88.2,
        )

    def test_touching_stop(self, position):
        assert should_stop_out(88.2, position)
        assert should_stop_out(80.0, position)
        assert not should_stop_out(88.21, position)

    def test_stop_signal_sells_at_stop(self, position, dip_and_rally_bars):
        evaluated = generate_signal(dip_and_rally_bars[:27], "SPY", has_open_position=True)
        signal = stop_loss_signal(evaluated, position)

        assert signal.type == SignalType.SELL
        assert signal.price == 88.2
        assert signal.reason == "Stop loss triggered at $88.20"
        assert signal.ts == evaluated.ts
        assert signal.indicators == evaluated.indicators
