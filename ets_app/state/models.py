"""
Position lifecycle data models.

A Position is the one mutable aggregate in the engine. It is created from an
OPEN intent and closed exactly once from a CLOSE intent, always by the
PositionBook that owns it; Trades are derived from closed positions and are
immutable.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..errors import PositionTransitionError
from ..signals.models import PositionSize, Signal
from ..utils.time import format_market_time, time_elapsed_seconds


class PositionStatus(str, Enum):
    """Position lifecycle states."""
    OPEN = "open"
    CLOSED = "closed"


class PositionAction(str, Enum):
    """Transition requested by an evaluation."""
    OPEN = "open"
    CLOSE = "close"
    HOLD = "hold"


class ExitReason(str, Enum):
    """Why a position was closed."""
    INDICATOR_EXIT = "indicator_exit"
    STOP_LOSS = "stop_loss"


@dataclass
class Position:
    """Single long position with a stop fixed at entry."""
    symbol: str
    entry_date: datetime
    entry_price: float
    entry_signal: Signal
    shares: float
    stop_loss: float
    status: PositionStatus = PositionStatus.OPEN
    exit_date: Optional[datetime] = None
    exit_price: Optional[float] = None
    exit_signal: Optional[Signal] = None
    exit_reason: Optional[ExitReason] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def is_open(self) -> bool:
        return self.status == PositionStatus.OPEN

    @property
    def entry_value(self) -> float:
        return self.entry_price * self.shares

    @property
    def profit_loss(self) -> Optional[float]:
        if self.exit_price is None:
            return None
        return (self.exit_price - self.entry_price) * self.shares

    @property
    def profit_loss_percent(self) -> Optional[float]:
        if self.exit_price is None:
            return None
        return ((self.exit_price - self.entry_price) / self.entry_price) * 100

    @property
    def holding_period(self) -> Optional[float]:
        """Seconds held, None while open."""
        if self.exit_date is None:
            return None
        return time_elapsed_seconds(self.entry_date, self.exit_date)

    def unrealized_profit_loss(self, current_price: float) -> float:
        return (current_price - self.entry_price) * self.shares

    def close(self, exit_date: datetime, exit_price: float,
              exit_signal: Signal, exit_reason: ExitReason) -> None:
        """Mark the position closed. Only PositionBook calls this."""
        if not self.is_open:
            raise PositionTransitionError(
                "Position is already closed",
                symbol=self.symbol,
                current_state=self.status.value,
                attempted_transition=PositionAction.CLOSE.value
            )

        self.exit_date = exit_date
        self.exit_price = exit_price
        self.exit_signal = exit_signal
        self.exit_reason = exit_reason
        self.status = PositionStatus.CLOSED


@dataclass(frozen=True)
class Trade:
    """Completed round trip derived from a closed position."""
    position_id: str
    symbol: str
    entry_date: datetime
    entry_price: float
    exit_date: datetime
    exit_price: float
    shares: float
    profit_loss: float
    profit_loss_percent: float
    entry_signal: Signal
    exit_signal: Signal
    exit_reason: ExitReason
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def from_position(cls, position: Position) -> "Trade":
        """Derive the trade record from a closed position."""
        if position.is_open or position.exit_price is None or position.exit_signal is None:
            raise PositionTransitionError(
                "Cannot derive a trade from an open position",
                symbol=position.symbol,
                current_state=position.status.value,
                attempted_transition="trade"
            )

        return cls(
            position_id=position.id,
            symbol=position.symbol,
            entry_date=position.entry_date,
            entry_price=position.entry_price,
            exit_date=position.exit_date,
            exit_price=position.exit_price,
            shares=position.shares,
            profit_loss=(position.exit_price - position.entry_price) * position.shares,
            profit_loss_percent=((position.exit_price - position.entry_price) / position.entry_price) * 100,
            entry_signal=position.entry_signal,
            exit_signal=position.exit_signal,
            exit_reason=position.exit_reason,
        )

    @property
    def is_winner(self) -> bool:
        return self.profit_loss > 0

    @property
    def holding_period(self) -> float:
        """Seconds between entry and exit."""
        return time_elapsed_seconds(self.entry_date, self.exit_date)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible payload for ledger collaborators."""
        return {
            "id": self.id,
            "position_id": self.position_id,
            "symbol": self.symbol,
            "entry_date": format_market_time(self.entry_date),
            "entry_price": self.entry_price,
            "exit_date": format_market_time(self.exit_date),
            "exit_price": self.exit_price,
            "shares": self.shares,
            "profit_loss": self.profit_loss,
            "profit_loss_percent": self.profit_loss_percent,
            "exit_reason": self.exit_reason.value,
            "entry_signal": self.entry_signal.to_dict(),
            "exit_signal": self.exit_signal.to_dict(),
        }


@dataclass(frozen=True)
class PositionIntent:
    """
    Position transition returned by an evaluation.

    OPEN carries the sizing; CLOSE carries the exit price and reason; HOLD
    leaves the position untouched. `signal` is what should be shown to the
    user for this evaluation (the stop-loss signal when the stop fired).
    """
    action: PositionAction
    signal: Signal
    size: Optional[PositionSize] = None
    exit_price: Optional[float] = None
    exit_reason: Optional[ExitReason] = None

    @classmethod
    def open(cls, signal: Signal, size: PositionSize) -> "PositionIntent":
        return cls(action=PositionAction.OPEN, signal=signal, size=size)

    @classmethod
    def close(cls, signal: Signal, exit_price: float, exit_reason: ExitReason) -> "PositionIntent":
        return cls(
            action=PositionAction.CLOSE,
            signal=signal,
            exit_price=exit_price,
            exit_reason=exit_reason,
        )

    @classmethod
    def hold(cls, signal: Signal) -> "PositionIntent":
        return cls(action=PositionAction.HOLD, signal=signal)
