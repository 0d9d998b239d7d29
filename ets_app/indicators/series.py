"""Index-aligned indicator output with explicit validity flags"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class IndicatorSeries(Generic[T]):
    """
    Indicator values aligned one-to-one with the input bars.

    `values` keeps the raw output, including the warm-up sentinels (0, the
    zero band, or RSI's neutral 50) so numbers match existing charts and
    backtests exactly. `valid` flags which indices had enough history; use
    `get()` to read a value as None while the indicator is still warming up.
    """
    values: tuple[T, ...]
    valid: tuple[bool, ...]
    warmup: int                  # First valid index

    @classmethod
    def from_values(cls, values: Sequence[T], warmup: int) -> "IndicatorSeries[T]":
        warmup = max(warmup, 0)
        return cls(
            values=tuple(values),
            valid=tuple(i >= warmup for i in range(len(values))),
            warmup=warmup,
        )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> T:
        return self.values[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def is_valid(self, index: int) -> bool:
        return self.valid[index]

    def get(self, index: int) -> Optional[T]:
        """Value at index, or None before the warm-up completes."""
        if not self.valid[index]:
            return None
        return self.values[index]

    def latest(self) -> Optional[T]:
        """Last value if valid, None for empty or warming series."""
        if not self.values:
            return None
        return self.get(len(self.values) - 1)


def normalize_period(period: int) -> int:
    """Clamp a lookback period to at least one bar so calculations stay total."""
    return max(1, int(period))
