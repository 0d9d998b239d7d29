"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    PERIOD_FIELDS = (
        "bollinger_period",
        "rsi_period",
        "keltner_period",
        "atr_period",
        "macd_fast",
        "macd_slow",
        "macd_signal",
    )

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator parameters."""
        errors = []

        for name in ConfigValidator.PERIOD_FIELDS:
            if name in params and not _is_positive_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=params[name]
                ))

        # Band multipliers
        for name in ("bollinger_std_dev", "keltner_atr_multiplier"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        # RSI thresholds live on the 0-100 scale
        for name in ("rsi_oversold", "rsi_overbought"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        oversold = params.get("rsi_oversold")
        overbought = params.get("rsi_overbought")
        if _is_number(oversold) and _is_number(overbought) and oversold >= overbought:
            errors.append(ValidationError(
                field="rsi_oversold",
                message="Must be below rsi_overbought",
                value=oversold
            ))

        fast = params.get("macd_fast")
        slow = params.get("macd_slow")
        if _is_positive_int(fast) and _is_positive_int(slow) and fast >= slow:
            errors.append(ValidationError(
                field="macd_fast",
                message="Must be below macd_slow",
                value=fast
            ))

        return errors

    @staticmethod
    def validate_trading_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate position sizing parameters."""
        errors = []

        if "initial_capital" in params:
            value = params["initial_capital"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="initial_capital",
                    message="Must be a positive number",
                    value=value
                ))

        if "stop_loss_percent" in params:
            value = params["stop_loss_percent"]
            if not _is_number(value) or value <= 0 or value >= 1:
                errors.append(ValidationError(
                    field="stop_loss_percent",
                    message="Must be a number between 0 and 1 (exclusive)",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_cycle_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate macro cycle parameters."""
        errors = []

        if "smoothing_window" in params and not _is_positive_int(params["smoothing_window"]):
            errors.append(ValidationError(
                field="smoothing_window",
                message="Must be a positive integer",
                value=params["smoothing_window"]
            ))

        thresholds = params.get("thresholds", {})
        if not isinstance(thresholds, dict):
            errors.append(ValidationError(
                field="thresholds",
                message="Must be a mapping",
                value=thresholds
            ))
            return errors

        for name, value in thresholds.items():
            if not _is_number(value):
                errors.append(ValidationError(
                    field=f"thresholds.{name}",
                    message="Must be a number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "trading" in config:
            errors.extend(ConfigValidator.validate_trading_params(config["trading"]))

        if "cycle" in config:
            errors.extend(ConfigValidator.validate_cycle_params(config["cycle"]))

        return errors
