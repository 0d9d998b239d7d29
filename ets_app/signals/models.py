"""Signal data models"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..cycle.models import CycleStage
from ..indicators.models import TechnicalIndicators
from ..utils.time import format_market_time


class SignalType(str, Enum):
    """Trading recommendation."""
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class Signal:
    """Recommendation produced for one evaluated bar. Never mutated."""
    ts: datetime
    symbol: str
    type: SignalType
    price: float
    indicators: TechnicalIndicators
    reason: str
    cycle_stage: Optional[CycleStage] = None

    @property
    def is_actionable(self) -> bool:
        return self.type != SignalType.HOLD

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible payload for delivery collaborators."""
        return {
            "timestamp": format_market_time(self.ts),
            "symbol": self.symbol,
            "type": self.type.value,
            "price": self.price,
            "reason": self.reason,
            "cycle_stage": self.cycle_stage.value if self.cycle_stage else None,
            "indicators": self.indicators.to_dict(),
        }


@dataclass(frozen=True)
class PositionSize:
    """Shares to buy and the fixed stop below entry."""
    shares: float
    stop_loss: float
