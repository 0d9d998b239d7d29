"""
Live session coordinator.

Owns the live trading state for one user session and runs the pipeline on
every refresh:
Price Bars → Validation → Indicators → Signal Rules (+ Cycle Stage) → Position Intent
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from .config.defaults import EngineConfig, get_default_config
from .config.loader import ConfigLoader
from .cycle.classifier import EconomicCycleClassifier
from .cycle.models import CycleClassification, CycleStage
from .data.macro import Observation, merge_macro_series
from .data.models import EconomicData, PriceBar
from .data.validators import DataValidator
from .logging.config import get_logger
from .signals.models import Signal
from .state.machine import eval_position_tick
from .state.models import Position, Trade
from .state.runtime import PositionBook

logger = get_logger(__name__)

MacroInput = Union[Sequence[EconomicData], Mapping[str, Iterable[Observation]]]


@dataclass(frozen=True)
class EvaluationResult:
    """What one refresh produced for a symbol."""
    symbol: str
    signal: Optional[Signal] = None          # None until enough history
    trade: Optional[Trade] = None            # Set when a position closed
    position: Optional[Position] = None      # Open position after the refresh
    capital: float = 0.0


class TradingEngine:
    """
    Live session controller.

    A single instance is the only authority over its positions and capital.
    Callers re-invoke process_bars with the freshest bars; stale results are
    simply discarded.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 initial_capital: Optional[float] = None,
                 use_cycle_gate: bool = True) -> None:
        self.logger = logger
        self.config = config or get_default_config()
        self.capital = (
            self.config.trading.initial_capital if initial_capital is None else initial_capital
        )
        self.use_cycle_gate = use_cycle_gate

        self.positions = PositionBook()
        self.validator = DataValidator()
        self.classifier = EconomicCycleClassifier(self.config)
        self.cycle_classification: Optional[CycleClassification] = None
        self.last_signals: dict[str, Signal] = {}

        self.logger.info(
            "Trading engine initialized",
            capital=self.capital,
            use_cycle_gate=use_cycle_gate
        )

    @classmethod
    def from_config_dir(cls, config_dir: Optional[Union[str, Path]] = None,
                        overrides: Optional[dict[str, Any]] = None,
                        **kwargs) -> "TradingEngine":
        """Build an engine from defaults, engine.yaml and overrides."""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        return cls(loader.build_config(overrides), **kwargs)

    @property
    def current_stage(self) -> Optional[CycleStage]:
        if self.cycle_classification is None:
            return None
        return self.cycle_classification.current_stage

    def update_macro(self, macro: MacroInput) -> CycleClassification:
        """
        Classify fresh macro data and keep the result for entry gating.

        Args:
            macro: Either merged EconomicData snapshots or the raw named
                series as returned by the fetch collaborator
        """
        if isinstance(macro, Mapping):
            data = merge_macro_series(macro)
        else:
            data = list(macro)

        classification = self.classifier.classify(data)
        previous_stage = self.current_stage
        self.cycle_classification = classification

        if previous_stage is not None and previous_stage != classification.current_stage:
            self.logger.info(
                "Cycle stage changed",
                from_stage=previous_stage.value,
                to_stage=classification.current_stage.value if classification.current_stage else None
            )

        return classification

    def process_bars(self, symbol: str, bars: Sequence[PriceBar]) -> EvaluationResult:
        """
        Evaluate the latest bar for symbol and apply the resulting transition.

        Raises:
            DataQualityError: If the bars are empty, unordered or malformed
        """
        self.validator.validate_bars(bars)

        cycle_stage = self.current_stage if self.use_cycle_gate else None
        intent = eval_position_tick(
            bars,
            symbol,
            position=self.positions.get_open(symbol),
            capital=self.capital,
            config=self.config,
            cycle_stage=cycle_stage,
        )

        if intent is None:
            self.logger.debug(
                "Not enough history for a signal",
                symbol=symbol,
                bars=len(bars),
                required=self.config.indicators.bollinger_period
            )
            return EvaluationResult(
                symbol=symbol,
                position=self.positions.get_open(symbol),
                capital=self.capital,
            )

        trade = self.positions.apply(symbol, intent)
        if trade is not None:
            self.capital += trade.profit_loss

        previous = self.last_signals.get(symbol)
        if previous is None or previous.type != intent.signal.type:
            self.logger.info(
                "Signal changed",
                symbol=symbol,
                signal_type=intent.signal.type.value,
                price=intent.signal.price,
                reason=intent.signal.reason
            )
        self.last_signals[symbol] = intent.signal

        return EvaluationResult(
            symbol=symbol,
            signal=intent.signal,
            trade=trade,
            position=self.positions.get_open(symbol),
            capital=self.capital,
        )

    def change_symbol(self, symbol: str) -> None:
        """Forget the session's signal and open position for symbol."""
        self.positions.discard(symbol)
        self.last_signals.pop(symbol, None)
