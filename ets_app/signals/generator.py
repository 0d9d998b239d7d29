"""
Entry, exit and stop-loss rules.

Only the final bar of the supplied slice is evaluated, so a signal never
depends on bars after the evaluated index. Thresholds come from the
EngineConfig passed in; nothing here keeps state between calls.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from ..config.defaults import EngineConfig, get_default_config
from ..cycle.models import CycleStage
from ..data.models import PriceBar
from ..indicators.calculator import IndicatorCalculator
from ..indicators.models import TechnicalIndicators
from ..logging.config import get_signal_logger, log_signal_decision
from .models import PositionSize, Signal, SignalType

if TYPE_CHECKING:
    from ..state.models import Position

signal_logger = get_signal_logger(__name__)

REASON_SEPARATOR = " • "
DEFAULT_STOP_LOSS_PERCENT = 0.02


def _percent_beyond(distance: float, band: float) -> float:
    if band == 0:
        return 0.0
    return (distance / band) * 100


def should_enter(
    bar: PriceBar,
    indicators: TechnicalIndicators,
    config: EngineConfig,
    cycle_stage: Optional[CycleStage] = None
) -> bool:
    """Close below the lower band with RSI oversold; expansion only when a stage is known."""
    price_below_lower_bb = bar.close < indicators.bollinger_lower
    rsi_oversold = indicators.rsi < config.indicators.rsi_oversold

    basic_signal = price_below_lower_bb and rsi_oversold

    if cycle_stage is not None:
        return basic_signal and cycle_stage == CycleStage.EXPANSION

    return basic_signal


def should_exit(bar: PriceBar, indicators: TechnicalIndicators, config: EngineConfig) -> bool:
    """Close above the upper band or RSI overbought."""
    price_above_upper_bb = bar.close > indicators.bollinger_upper
    rsi_overbought = indicators.rsi > config.indicators.rsi_overbought

    return price_above_upper_bb or rsi_overbought


def entry_reason(
    bar: PriceBar,
    indicators: TechnicalIndicators,
    config: EngineConfig,
    cycle_stage: Optional[CycleStage] = None
) -> str:
    """Band distance, RSI, cycle stage and squeeze, in that order."""
    reasons = []

    if bar.close < indicators.bollinger_lower:
        percent_below = _percent_beyond(indicators.bollinger_lower - bar.close, indicators.bollinger_lower)
        reasons.append(f"Price {percent_below:.1f}% below lower BB")

    if indicators.rsi < config.indicators.rsi_oversold:
        reasons.append(f"RSI oversold at {int(indicators.rsi)}")

    if cycle_stage == CycleStage.EXPANSION:
        reasons.append("Economy in expansion")

    if indicators.is_squeeze:
        reasons.append("BB squeeze detected")

    return REASON_SEPARATOR.join(reasons)


def exit_reason(bar: PriceBar, indicators: TechnicalIndicators, config: EngineConfig) -> str:
    """Band distance then RSI."""
    reasons = []

    if bar.close > indicators.bollinger_upper:
        percent_above = _percent_beyond(bar.close - indicators.bollinger_upper, indicators.bollinger_upper)
        reasons.append(f"Price {percent_above:.1f}% above upper BB")

    if indicators.rsi > config.indicators.rsi_overbought:
        reasons.append(f"RSI overbought at {int(indicators.rsi)}")

    return REASON_SEPARATOR.join(reasons)


def generate_signal(
    bars: Sequence[PriceBar],
    symbol: str,
    config: Optional[EngineConfig] = None,
    cycle_stage: Optional[CycleStage] = None,
    has_open_position: bool = False
) -> Optional[Signal]:
    """
    Evaluate the last bar of `bars`.

    Args:
        bars: Bars in chronological order, ending at the bar to evaluate
        symbol: Instrument symbol
        config: Engine configuration (defaults when omitted)
        cycle_stage: Optional macro stage gating entries
        has_open_position: Whether exit rules (True) or entry rules (False) apply

    Returns:
        Signal for the last bar, or None when there are fewer bars than the
        Bollinger period
    """
    config = config or get_default_config()

    if len(bars) < config.indicators.bollinger_period:
        return None

    last_index = len(bars) - 1
    current_bar = bars[last_index]

    indicators = IndicatorCalculator(config).calculate_indicators(bars, last_index)
    if indicators is None:
        return None

    if has_open_position:
        if should_exit(current_bar, indicators, config):
            signal_type = SignalType.SELL
            reason = exit_reason(current_bar, indicators, config)
        else:
            signal_type = SignalType.HOLD
            reason = f"Holding position. RSI: {int(indicators.rsi)}"
    else:
        if should_enter(current_bar, indicators, config, cycle_stage):
            signal_type = SignalType.BUY
            reason = entry_reason(current_bar, indicators, config, cycle_stage)
        else:
            signal_type = SignalType.HOLD
            reason = f"No entry signal. RSI: {int(indicators.rsi)}"

    signal = Signal(
        ts=current_bar.ts,
        symbol=symbol,
        type=signal_type,
        price=current_bar.close,
        indicators=indicators,
        cycle_stage=cycle_stage,
        reason=reason,
    )

    log_signal_decision(
        signal_logger,
        symbol=symbol,
        signal_type=signal_type.value,
        price=current_bar.close,
        reason=reason,
        context={"has_open_position": has_open_position, "rsi": indicators.rsi}
    )

    return signal


def calculate_position_size(
    capital: float,
    price: float,
    stop_loss_percent: float = DEFAULT_STOP_LOSS_PERCENT
) -> PositionSize:
    """
    Deploy all capital at price, with a fixed stop stop_loss_percent below.

    No leverage: shares = capital / price.
    """
    shares = capital / price
    stop_loss = price * (1 - stop_loss_percent)

    return PositionSize(shares=shares, stop_loss=stop_loss)


def should_stop_out(current_price: float, position: "Position") -> bool:
    """Stop is touched when the price is at or below the position's stop."""
    return current_price <= position.stop_loss


def stop_loss_signal(signal: Signal, position: "Position") -> Signal:
    """SELL at the stop price, carrying the evaluated bar's indicators."""
    return Signal(
        ts=signal.ts,
        symbol=position.symbol,
        type=SignalType.SELL,
        price=position.stop_loss,
        indicators=signal.indicators,
        cycle_stage=signal.cycle_stage,
        reason=f"Stop loss triggered at ${position.stop_loss:,.2f}",
    )
