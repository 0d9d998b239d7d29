"""
Runtime ownership of open positions.

PositionBook is the single authority for position state: it holds at most
one open position per symbol and changes it only by applying intents
returned from eval_position_tick.

Closed positions accumulate in the archive until a caller drains it with
drain_closed().
"""

from typing import Optional

from ..errors import PositionTransitionError
from ..logging.config import get_position_logger, log_position_transition
from ..utils.time import format_market_time
from .models import Position, PositionAction, PositionIntent, PositionStatus, Trade

logger = get_position_logger(__name__)

NO_POSITION = "no_position"


class PositionBook:
    """Open positions keyed by symbol plus the archive of closed ones."""

    def __init__(self):
        self.logger = logger
        self.open_positions: dict[str, Position] = {}
        self.closed_positions: list[Position] = []

    def get_open(self, symbol: str) -> Optional[Position]:
        """Open position for symbol, None when flat."""
        return self.open_positions.get(symbol)

    def has_open(self, symbol: str) -> bool:
        return symbol in self.open_positions

    def apply(self, symbol: str, intent: PositionIntent) -> Optional[Trade]:
        """
        Apply an evaluation intent.

        Returns:
            The Trade when the intent closed a position, otherwise None

        Raises:
            PositionTransitionError: If the intent is illegal for the current state
        """
        if intent.signal.symbol != symbol:
            raise PositionTransitionError(
                f"Intent for {intent.signal.symbol} applied to {symbol}",
                symbol=symbol,
                attempted_transition=intent.action.value
            )

        if intent.action == PositionAction.OPEN:
            self._open(symbol, intent)
            return None

        if intent.action == PositionAction.CLOSE:
            return self._close(symbol, intent)

        return None

    def _open(self, symbol: str, intent: PositionIntent) -> Position:
        if self.has_open(symbol):
            raise PositionTransitionError(
                "A position is already open for this symbol",
                symbol=symbol,
                current_state=PositionStatus.OPEN.value,
                attempted_transition=PositionAction.OPEN.value
            )
        if intent.size is None:
            raise PositionTransitionError(
                "Open intent carries no position size",
                symbol=symbol,
                current_state=NO_POSITION,
                attempted_transition=PositionAction.OPEN.value
            )

        signal = intent.signal
        position = Position(
            symbol=symbol,
            entry_date=signal.ts,
            entry_price=signal.price,
            entry_signal=signal,
            shares=intent.size.shares,
            stop_loss=intent.size.stop_loss,
        )
        self.open_positions[symbol] = position

        log_position_transition(
            self.logger,
            symbol=symbol,
            from_state=NO_POSITION,
            to_state=PositionStatus.OPEN.value,
            trigger=signal.type.value,
            context={
                "entry_price": position.entry_price,
                "shares": position.shares,
                "stop_loss": position.stop_loss,
                "timestamp": format_market_time(signal.ts)
            }
        )
        return position

    def _close(self, symbol: str, intent: PositionIntent) -> Trade:
        position = self.open_positions.get(symbol)
        if position is None:
            raise PositionTransitionError(
                "No open position to close",
                symbol=symbol,
                current_state=NO_POSITION,
                attempted_transition=PositionAction.CLOSE.value
            )
        if intent.exit_price is None or intent.exit_reason is None:
            raise PositionTransitionError(
                "Close intent carries no exit price or reason",
                symbol=symbol,
                current_state=PositionStatus.OPEN.value,
                attempted_transition=PositionAction.CLOSE.value
            )

        position.close(
            exit_date=intent.signal.ts,
            exit_price=intent.exit_price,
            exit_signal=intent.signal,
            exit_reason=intent.exit_reason,
        )
        del self.open_positions[symbol]
        self.closed_positions.append(position)

        trade = Trade.from_position(position)

        log_position_transition(
            self.logger,
            symbol=symbol,
            from_state=PositionStatus.OPEN.value,
            to_state=PositionStatus.CLOSED.value,
            trigger=intent.exit_reason.value,
            context={
                "entry_price": trade.entry_price,
                "exit_price": trade.exit_price,
                "profit_loss": trade.profit_loss,
                "profit_loss_percent": trade.profit_loss_percent,
                "timestamp": format_market_time(trade.exit_date)
            }
        )
        return trade

    def discard(self, symbol: str) -> Optional[Position]:
        """Drop the open position for symbol without closing it (symbol switch)."""
        position = self.open_positions.pop(symbol, None)
        if position is not None:
            self.logger.info("Discarded open position", symbol=symbol, position_id=position.id)
        return position

    def drain_closed(self) -> list[Position]:
        """Return the archived closed positions and clear the archive."""
        drained = self.closed_positions
        self.closed_positions = []
        if drained:
            self.logger.debug("Drained closed positions", count=len(drained))
        return drained
