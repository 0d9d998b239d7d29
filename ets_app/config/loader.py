"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    CycleParams,
    CycleThresholds,
    EngineConfig,
    IndicatorParams,
    TradingParams,
    get_default_config,
)
from .validation import ConfigValidator

# Flat option names used by the settings UI and stored presets
FLAT_OPTION_KEYS: dict[str, tuple[str, str]] = {
    "bollingerPeriod": ("indicators", "bollinger_period"),
    "bollingerStdDev": ("indicators", "bollinger_std_dev"),
    "rsiPeriod": ("indicators", "rsi_period"),
    "rsiOversold": ("indicators", "rsi_oversold"),
    "rsiOverbought": ("indicators", "rsi_overbought"),
    "keltnerPeriod": ("indicators", "keltner_period"),
    "keltnerATRMultiplier": ("indicators", "keltner_atr_multiplier"),
    "initialCapital": ("trading", "initial_capital"),
    "stopLossPercent": ("trading", "stop_loss_percent"),
    "macroSmoothingWindow": ("cycle", "smoothing_window"),
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: EngineConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from engine.yaml, empty if the file is absent."""
        engine_file = self.config_dir / "engine.yaml"

        if not engine_file.exists():
            return {}

        with open(engine_file) as f:
            file_config = yaml.safe_load(f)

        return normalize_options(file_config or {})

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. engine.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, normalize_options(overrides))

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> EngineConfig:
        """Merge, validate and materialize an EngineConfig."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                "Invalid engine configuration: " + "; ".join(error_msgs),
                errors=errors
            )

        return config_from_dict(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def normalize_options(options: dict[str, Any]) -> dict[str, Any]:
    """
    Translate flat camelCase option names into the nested section layout.

    Nested sections pass through unchanged, so both styles can be mixed.
    """
    if not isinstance(options, dict):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(options).__name__}")

    result: dict[str, Any] = {}
    for key, value in options.items():
        if key in FLAT_OPTION_KEYS:
            section, name = FLAT_OPTION_KEYS[key]
            result.setdefault(section, {})[name] = value
        elif isinstance(value, dict):
            section = result.setdefault(key, {})
            section.update(value)
        else:
            raise ConfigurationError(f"Unknown configuration option: {key}")

    return result


def _build_section(cls: type, values: dict[str, Any], section: str) -> Any:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown {section} option(s): {', '.join(unknown)}"
        )
    return cls(**values)


def config_from_dict(config: dict[str, Any]) -> EngineConfig:
    """Build an EngineConfig from a merged configuration dictionary."""
    unknown_sections = sorted(set(config) - {"indicators", "trading", "cycle"})
    if unknown_sections:
        raise ConfigurationError(f"Unknown configuration section(s): {', '.join(unknown_sections)}")

    cycle_values = dict(config.get("cycle", {}))
    thresholds = _build_section(CycleThresholds, cycle_values.pop("thresholds", {}), "cycle.thresholds")

    return EngineConfig(
        indicators=_build_section(IndicatorParams, config.get("indicators", {}), "indicators"),
        trading=_build_section(TradingParams, config.get("trading", {}), "trading"),
        cycle=_build_section(CycleParams, {**cycle_values, "thresholds": thresholds}, "cycle"),
    )
