"""Macro cycle stage models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class CycleStage(str, Enum):
    """Macro-economic regime."""
    EXPANSION = "expansion"
    PEAK = "peak"
    CONTRACTION = "contraction"
    RECOVERY = "recovery"

    @property
    def description(self) -> str:
        return _STAGE_DESCRIPTIONS[self]


_STAGE_DESCRIPTIONS = {
    CycleStage.EXPANSION: "Economy is growing. Bullish signals favored.",
    CycleStage.PEAK: "Economy at peak. Caution advised.",
    CycleStage.CONTRACTION: "Economy is contracting. Bearish signals favored.",
    CycleStage.RECOVERY: "Economy is recovering. Early bullish signals.",
}


@dataclass(frozen=True)
class CyclePoint:
    """Stage assigned to one observation date."""
    date: datetime
    stage: CycleStage


@dataclass(frozen=True)
class CycleTransition:
    """Change of stage between two adjacent observations."""
    date: datetime
    from_stage: CycleStage
    to_stage: CycleStage


@dataclass(frozen=True)
class CycleClassification:
    """Chronological stage series produced by one classification run."""
    points: list[CyclePoint] = field(default_factory=list)

    @property
    def current_stage(self) -> Optional[CycleStage]:
        """Stage of the latest observation, None when nothing was classified."""
        if not self.points:
            return None
        return self.points[-1].stage

    @property
    def transitions(self) -> list[CycleTransition]:
        """Adjacent observations whose stages differ, in date order."""
        changes = []
        for previous, current in zip(self.points, self.points[1:]):
            if previous.stage != current.stage:
                changes.append(CycleTransition(
                    date=current.date,
                    from_stage=previous.stage,
                    to_stage=current.stage,
                ))
        return changes

    def as_tuples(self) -> list[tuple[datetime, CycleStage]]:
        """(date, stage) pairs for chart collaborators."""
        return [(point.date, point.stage) for point in self.points]
