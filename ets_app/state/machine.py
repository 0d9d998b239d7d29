"""
Position state machine evaluation.

noPosition -> open -> closed -> noPosition. Each evaluation returns an intent
rather than mutating anything; the owner of the position applies it.
"""

from collections.abc import Sequence
from typing import Optional

from ..config.defaults import EngineConfig, get_default_config
from ..cycle.models import CycleStage
from ..data.models import PriceBar
from ..logging.config import get_position_logger
from ..signals.generator import (
    calculate_position_size,
    generate_signal,
    should_stop_out,
    stop_loss_signal,
)
from ..signals.models import SignalType
from .models import ExitReason, Position, PositionIntent

position_logger = get_position_logger(__name__)


def eval_position_tick(
    bars: Sequence[PriceBar],
    symbol: str,
    position: Optional[Position],
    capital: float,
    config: Optional[EngineConfig] = None,
    cycle_stage: Optional[CycleStage] = None
) -> Optional[PositionIntent]:
    """
    Evaluate the last bar against the current position.

    Precedence when several rules fire on the same bar:
    stop-loss > indicator exit > indicator entry > hold. A touched stop
    closes at the stop price and replaces any indicator exit for the bar.

    Args:
        bars: Bars in chronological order, ending at the bar to evaluate
        symbol: Instrument symbol
        position: Open position for symbol, or None when flat
        capital: Capital available for sizing a new position
        config: Engine configuration (defaults when omitted)
        cycle_stage: Optional macro stage gating entries

    Returns:
        PositionIntent, or None when there is not enough history for a signal
    """
    config = config or get_default_config()
    has_open_position = position is not None and position.is_open

    signal = generate_signal(
        bars,
        symbol,
        config=config,
        cycle_stage=cycle_stage,
        has_open_position=has_open_position,
    )
    if signal is None:
        return None

    if has_open_position:
        if should_stop_out(signal.price, position):
            position_logger.info(
                "Stop loss touched",
                symbol=symbol,
                price=signal.price,
                stop_loss=position.stop_loss,
                indicator_signal=signal.type.value
            )
            return PositionIntent.close(
                stop_loss_signal(signal, position),
                exit_price=position.stop_loss,
                exit_reason=ExitReason.STOP_LOSS,
            )

        if signal.type == SignalType.SELL:
            return PositionIntent.close(
                signal,
                exit_price=signal.price,
                exit_reason=ExitReason.INDICATOR_EXIT,
            )

        return PositionIntent.hold(signal)

    if signal.type == SignalType.BUY:
        size = calculate_position_size(capital, signal.price, config.trading.stop_loss_percent)
        return PositionIntent.open(signal, size)

    return PositionIntent.hold(signal)
