#!/usr/bin/env python3
"""
Basic Usage Example - Economic Trade System Engine

This script demonstrates the basic usage of the signal engine with simulated
market and macro data. It shows how to:
- Backtest the Bollinger/RSI rules over historical bars
- Classify a macro history into cycle stages
- Drive the live engine one refresh at a time
- Read signals, positions and trades

Run: python examples/basic_usage.py
"""

import math
from datetime import datetime, timedelta, timezone

from ets_app.backtest import BacktestRunner
from ets_app.data.models import PriceBar
from ets_app.engine import TradingEngine
from ets_app.logging import configure_logging
from ets_app.signals.models import Signal, SignalType


def create_sample_bars(count: int = 120, start_price: float = 100.0) -> list[PriceBar]:
    """Create 30-minute bars oscillating around a slow uptrend with two sharp dips."""
    start = datetime(2024, 1, 2, 14, 30, tzinfo=timezone.utc)
    bars = []
    price = start_price

    for i in range(count):
        previous = price
        price = start_price + i * 0.05 + 3.0 * math.sin(i / 6)
        if i in (45, 95):
            price -= 9.0

        high = max(previous, price) + 0.6
        low = min(previous, price) - 0.6
        bars.append(PriceBar(
            ts=start + timedelta(minutes=30 * i),
            open=previous,
            high=high,
            low=low,
            close=price,
            volume=1_000_000 + 10_000 * (i % 7),
        ))

    return bars


def create_macro_series() -> dict[str, list[tuple[str, str]]]:
    """Create raw macro series in the shape the fetch service returns."""
    return {
        "gdp_growth": [("2023-07-01", "2.1"), ("2023-10-01", "3.4")],
        "unemployment": [("2023-07-01", "3.6"), ("2023-10-01", "3.7"), ("2023-11-01", ".")],
        "treasury_10y": [("2023-10-01", "5.3")],
        "treasury_2y": [("2023-10-01", "5.0")],
    }


def print_signal(signal: Signal) -> None:
    """Print signal details."""
    marker = {SignalType.BUY: "🟢", SignalType.SELL: "🔴", SignalType.HOLD: "⚪"}[signal.type]
    print(f"  {marker} {signal.ts:%Y-%m-%d %H:%M} {signal.type.value:<4} ${signal.price:,.2f}")
    print(f"     {signal.reason}")
    print(f"     RSI {signal.indicators.rsi:.1f} | "
          f"BB {signal.indicators.bollinger_lower:.2f} - {signal.indicators.bollinger_upper:.2f}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Economic Trade System - Basic Usage Demo")
    print("=" * 60)

    bars = create_sample_bars()
    print(f"1. Generated {len(bars)} sample bars")
    print()

    # Backtest
    print("2. Backtesting the signal rules...")
    result = BacktestRunner().run(bars, "DEMO")
    stats = result.stats
    print(f"   Trades: {stats.total_trades} (wins {stats.winners}, stop-outs {stats.stop_outs})")
    print(f"   Win rate: {stats.win_rate:.1f}%")
    print(f"   Final capital: ${result.final_capital:,.2f} ({stats.total_return_percent:+.2f}%)")
    for trade in result.trades:
        print(f"   • {trade.entry_date:%m-%d %H:%M} @ {trade.entry_price:.2f} → "
              f"{trade.exit_date:%m-%d %H:%M} @ {trade.exit_price:.2f} "
              f"[{trade.exit_reason.value}] {trade.profit_loss_percent:+.2f}%")
    print()

    # Macro cycle
    print("3. Classifying the macro cycle...")
    engine = TradingEngine()
    classification = engine.update_macro(create_macro_series())
    for point in classification.points:
        print(f"   {point.date:%Y-%m-%d}: {point.stage.value}")
    if engine.current_stage:
        print(f"   Current stage: {engine.current_stage.value} - {engine.current_stage.description}")
    print()

    # Live replay
    print("4. Replaying bars through the live engine...")
    for i in range(len(bars)):
        evaluation = engine.process_bars("DEMO", bars[:i + 1])
        if evaluation.signal and evaluation.signal.is_actionable:
            print_signal(evaluation.signal)
        if evaluation.trade:
            print(f"     Closed: P&L ${evaluation.trade.profit_loss:,.2f}")

    print()
    print(f"   Capital after live replay: ${engine.capital:,.2f}")
    open_position = engine.positions.get_open("DEMO")
    if open_position:
        print(f"   Open position: {open_position.shares:.2f} shares @ {open_position.entry_price:.2f}")

    print()
    print("✅ Demo completed")


if __name__ == "__main__":
    main()
