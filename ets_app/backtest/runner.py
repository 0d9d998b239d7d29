"""
Historical replay of the live signal rules.

The runner walks the bar sequence one index at a time and evaluates exactly
what the live session would have seen at that moment: the prefix
bars[0..i]. It owns one PositionBook and a compounding capital balance, so
the replay is inherently sequential.
"""

from bisect import bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from ..config.defaults import EngineConfig, get_default_config
from ..cycle.models import CycleClassification, CyclePoint, CycleStage
from ..data.models import PriceBar
from ..logging.config import get_logger
from ..state.machine import eval_position_tick
from ..state.models import Position, PositionAction, Trade
from ..state.runtime import PositionBook
from ..utils.time import ensure_utc
from .stats import BacktestStats, summarize

logger = get_logger(__name__)

CycleSeries = Union[CycleClassification, Iterable[CyclePoint], Iterable[tuple[datetime, CycleStage]]]


@dataclass(frozen=True)
class BacktestResult:
    """Outcome of one replay."""
    symbol: str
    trades: list[Trade]
    initial_capital: float
    final_capital: float
    stats: BacktestStats
    open_position: Optional[Position] = None
    bars_evaluated: int = 0


class CycleStageLookup:
    """Latest cycle stage dated on or before a timestamp."""

    def __init__(self, cycle_stages: Optional[CycleSeries] = None):
        if cycle_stages is None:
            points: list[tuple[datetime, CycleStage]] = []
        elif isinstance(cycle_stages, CycleClassification):
            points = cycle_stages.as_tuples()
        else:
            points = [
                (item.date, item.stage) if isinstance(item, CyclePoint) else (item[0], item[1])
                for item in cycle_stages
            ]

        # Macro dates are UTC; bars may be naive
        points = sorted(((ensure_utc(date), stage) for date, stage in points), key=lambda item: item[0])
        self.dates = [date for date, _ in points]
        self.stages = [stage for _, stage in points]

    def stage_at(self, ts: datetime) -> Optional[CycleStage]:
        """Stage in force at ts, None before the first classification."""
        index = bisect_right(self.dates, ensure_utc(ts)) - 1
        if index < 0:
            return None
        return self.stages[index]


@dataclass
class BacktestRunner:
    """Replays eval_position_tick over growing prefixes of a bar sequence."""

    config: EngineConfig = field(default_factory=get_default_config)

    def run(
        self,
        bars: Sequence[PriceBar],
        symbol: str,
        cycle_stages: Optional[CycleSeries] = None,
        initial_capital: Optional[float] = None
    ) -> BacktestResult:
        """
        Replay the rules from index bollinger_period to the last bar.

        Args:
            bars: Bars in chronological order
            symbol: Instrument symbol
            cycle_stages: Optional dated stage series gating entries; the stage
                applied to a bar is the latest one dated at or before it
            initial_capital: Starting balance (config value when omitted)

        Returns:
            BacktestResult with the ordered trade ledger
        """
        capital = self.config.trading.initial_capital if initial_capital is None else initial_capital
        starting_capital = capital
        book = PositionBook()
        stage_lookup = CycleStageLookup(cycle_stages)
        trades: list[Trade] = []
        evaluated = 0

        start_index = self.config.indicators.bollinger_period

        for i in range(start_index, len(bars)):
            window = bars[:i + 1]
            cycle_stage = stage_lookup.stage_at(bars[i].ts)

            intent = eval_position_tick(
                window,
                symbol,
                position=book.get_open(symbol),
                capital=capital,
                config=self.config,
                cycle_stage=cycle_stage,
            )
            if intent is None:
                continue

            evaluated += 1
            if intent.action == PositionAction.HOLD:
                continue

            trade = book.apply(symbol, intent)
            if trade is not None:
                trades.append(trade)
                capital += trade.profit_loss

        result = BacktestResult(
            symbol=symbol,
            trades=trades,
            initial_capital=starting_capital,
            final_capital=capital,
            stats=summarize(trades, starting_capital),
            open_position=book.get_open(symbol),
            bars_evaluated=evaluated,
        )

        logger.info(
            "Backtest complete",
            symbol=symbol,
            bars=len(bars),
            trades=len(trades),
            final_capital=capital,
            win_rate=result.stats.win_rate
        )

        return result


def run_backtest(
    bars: Sequence[PriceBar],
    symbol: str,
    config: Optional[EngineConfig] = None,
    cycle_stages: Optional[CycleSeries] = None
) -> list[Trade]:
    """Replay the rules and return only the ordered trade ledger."""
    runner = BacktestRunner(config or get_default_config())
    return runner.run(bars, symbol, cycle_stages=cycle_stages).trades
