"""Tests for PositionBook transitions"""

from unittest.mock import Mock

import pytest

from ets_app.errors import PositionTransitionError
from ets_app.signals.generator import generate_signal
from ets_app.signals.models import PositionSize
from ets_app.state.machine import eval_position_tick
from ets_app.state.models import ExitReason, PositionAction, PositionIntent, PositionStatus
from ets_app.state.runtime import PositionBook


@pytest.fixture
def book():
    book = PositionBook()
    book.logger = Mock()
    return book


@pytest.fixture
def buy_signal(dip_and_rally_bars):
    return generate_signal(dip_and_rally_bars[:26], "SPY")


@pytest.fixture
def sell_signal(dip_and_rally_bars):
    return generate_signal(dip_and_rally_bars, "SPY", has_open_position=True)


class TestOpen:
    """Test opening positions"""

    def test_open_creates_position(self, book, buy_signal):
        intent = PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2))

        assert book.apply("SPY", intent) is None

        position = book.get_open("SPY")
        assert position.entry_price == 90.0
        assert position.entry_date == buy_signal.ts
        assert position.shares == 100.0
        assert position.stop_loss == 88.2
        assert position.status == PositionStatus.OPEN
        assert book.has_open("SPY")

    def test_open_twice_rejected(self, book, buy_signal):
        intent = PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2))
        book.apply("SPY", intent)

        with pytest.raises(PositionTransitionError) as exc_info:
            book.apply("SPY", intent)

        assert exc_info.value.current_state == "open"
        assert exc_info.value.attempted_transition == "open"

    def test_open_without_size_rejected(self, book, buy_signal):
        with pytest.raises(PositionTransitionError):
            book.apply("SPY", PositionIntent(action=PositionAction.OPEN, signal=buy_signal))

    def test_symbol_mismatch_rejected(self, book, buy_signal):
        intent = PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2))

        with pytest.raises(PositionTransitionError):
            book.apply("QQQ", intent)

    def test_open_logs_transition(self, book, buy_signal):
        book.apply("SPY", PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2)))

        book.logger.bind.assert_called()
        kwargs = book.logger.bind.call_args_list[0].kwargs
        assert kwargs["from_state"] == "no_position"
        assert kwargs["to_state"] == "open"


class TestClose:
    """Test closing positions and the trades they produce"""

    def test_close_returns_trade(self, book, buy_signal, sell_signal):
        book.apply("SPY", PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2)))

        trade = book.apply("SPY", PositionIntent.close(sell_signal, 120.0, ExitReason.INDICATOR_EXIT))

        assert trade.entry_price == 90.0
        assert trade.exit_price == 120.0
        assert trade.profit_loss == pytest.approx(3000.0)
        assert trade.profit_loss_percent == pytest.approx(100 / 3)
        assert trade.exit_reason == ExitReason.INDICATOR_EXIT
        assert trade.entry_signal is buy_signal
        assert trade.exit_signal is sell_signal
        assert not book.has_open("SPY")
        assert len(book.closed_positions) == 1

    def test_close_while_flat_rejected(self, book, sell_signal):
        with pytest.raises(PositionTransitionError) as exc_info:
            book.apply("SPY", PositionIntent.close(sell_signal, 120.0, ExitReason.INDICATOR_EXIT))

        assert exc_info.value.current_state == "no_position"

    def test_hold_changes_nothing(self, book, buy_signal):
        assert book.apply("SPY", PositionIntent.hold(buy_signal)) is None
        assert not book.has_open("SPY")

    def test_at_most_one_open_per_symbol(self, book, dip_and_rally_bars):
        """Replaying the machine through the book never holds two positions"""
        capital = 30000.0
        for i in range(20, len(dip_and_rally_bars)):
            intent = eval_position_tick(
                dip_and_rally_bars[:i + 1], "SPY", book.get_open("SPY"), capital
            )
            trade = book.apply("SPY", intent)
            if trade is not None:
                capital += trade.profit_loss
            assert len(book.open_positions) <= 1

        assert capital == pytest.approx(30000.0 / 90.0 * 120.0)

    def test_discard(self, book, buy_signal):
        book.apply("SPY", PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2)))

        discarded = book.discard("SPY")

        assert discarded is not None
        assert book.get_open("SPY") is None
        assert book.discard("SPY") is None

    def test_drain_closed(self, book, buy_signal, sell_signal):
        book.apply("SPY", PositionIntent.open(buy_signal, PositionSize(shares=100.0, stop_loss=88.2)))
        book.apply("SPY", PositionIntent.close(sell_signal, 120.0, ExitReason.INDICATOR_EXIT))

        drained = book.drain_closed()

        assert [position.exit_price for position in drained] == [120.0]
        assert book.closed_positions == []
        assert book.drain_closed() == []
