"""Summary statistics over a trade ledger"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..state.models import ExitReason, Trade


@dataclass(frozen=True)
class BacktestStats:
    """Aggregate results of a backtest."""
    total_trades: int = 0
    winners: int = 0
    losers: int = 0
    stop_outs: int = 0
    total_profit_loss: float = 0.0
    total_return_percent: float = 0.0
    average_profit_loss_percent: float = 0.0

    @property
    def win_rate(self) -> float:
        """Winning trades as a percentage of all trades."""
        return (self.winners / self.total_trades * 100) if self.total_trades > 0 else 0.0


def summarize(trades: Sequence[Trade], initial_capital: float) -> BacktestStats:
    """
    Summarize a ledger.

    Args:
        trades: Completed trades in chronological order
        initial_capital: Capital at the start of the replay

    Returns:
        BacktestStats; all zeros for an empty ledger
    """
    if not trades:
        return BacktestStats()

    total_profit_loss = sum(trade.profit_loss for trade in trades)

    return BacktestStats(
        total_trades=len(trades),
        winners=sum(1 for trade in trades if trade.is_winner),
        losers=sum(1 for trade in trades if trade.profit_loss < 0),
        stop_outs=sum(1 for trade in trades if trade.exit_reason == ExitReason.STOP_LOSS),
        total_profit_loss=total_profit_loss,
        total_return_percent=(total_profit_loss / initial_capital * 100) if initial_capital else 0.0,
        average_profit_loss_percent=sum(trade.profit_loss_percent for trade in trades) / len(trades),
    )
