from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from . import settings


@dataclass
class Population:
    """Settlement population: idle citizens plus assigned workers, under a cap."""

    total: int = settings.STARTING_POPULATION
    idle: Optional[int] = None
    workers: int = 0
    growth_rate: float = settings.STARTING_GROWTH_RATE
    max_population: int = settings.STARTING_MAX_POPULATION
    # Fractional citizens accumulated but not yet born
    growth_progress: float = 0.0

    def __post_init__(self) -> None:
        if self.idle is None:
            self.idle = self.total - self.workers
        if self.total > self.max_population:
            raise ValueError("total cannot exceed max_population")
        if self.idle < 0 or self.idle + self.workers != self.total:
            raise ValueError("idle must equal total - workers")

    def advance(self, dt: float) -> int:
        """
        Accumulate growth for ``dt`` seconds. Whole citizens join as idle,
        clamped to the cap. Returns how many joined.
        """
        self.growth_progress += self.growth_rate * dt
        if self.growth_progress < 1.0:
            return 0
        born = int(self.growth_progress)
        self.growth_progress -= born
        before = self.total
        self.total += born
        self.idle += born
        excess = self.total - self.max_population
        if excess > 0:
            self.total -= excess
            self.idle = max(0, self.idle - excess)
        return self.total - before

    def assign_workers(self, number: int) -> int:
        """Move up to ``number`` idle citizens into work. Returns how many moved."""
        to_assign = max(0, min(number, self.idle))
        self.idle -= to_assign
        self.workers += to_assign
        return to_assign

    def unassign_workers(self, number: int) -> int:
        """Return up to ``number`` workers to idle. Returns how many moved."""
        to_unassign = max(0, min(number, self.workers))
        self.workers -= to_unassign
        self.idle += to_unassign
        return to_unassign

    def to_json(self) -> Dict[str, float]:
        return {
            "total": self.total,
            "idle": self.idle,
            "workers": self.workers,
            "growth_rate": self.growth_rate,
            "max_population": self.max_population,
        }


__all__ = ["Population"]
