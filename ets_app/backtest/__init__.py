"""Backtest replay of the signal rules over historical bars."""

from .runner import BacktestResult, BacktestRunner, run_backtest
from .stats import BacktestStats, summarize

__all__ = [
    "BacktestResult",
    "BacktestRunner",
    "BacktestStats",
    "run_backtest",
    "summarize",
]
