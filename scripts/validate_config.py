#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

from ets_app.config.loader import ConfigLoader
from ets_app.config.validation import ConfigValidator
from ets_app.errors import ConfigurationError


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating engine configuration in {loader.config_dir}...")

    try:
        merged = loader.merge_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    try:
        config = loader.build_config()
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print("✅ Configuration is valid")
    print(f"  Bollinger: {config.indicators.bollinger_period} / {config.indicators.bollinger_std_dev}σ")
    print(f"  RSI: {config.indicators.rsi_period} "
          f"({config.indicators.rsi_oversold} / {config.indicators.rsi_overbought})")
    print(f"  Capital: ${config.trading.initial_capital:,.2f}, "
          f"stop {config.trading.stop_loss_percent:.1%}")
    print(f"  Macro smoothing window: {config.cycle.smoothing_window}")
    sys.exit(0)


if __name__ == "__main__":
    main()
