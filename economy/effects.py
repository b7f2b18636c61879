from __future__ import annotations

"""Every interpretation of upgrade effects lives here."""

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Dict, Iterable, TYPE_CHECKING

from . import settings
from .resources import ResourceType
from .upgrades import (
    ClickMultiplier,
    CostReduction,
    Effect,
    PopulationCap,
    PopulationGrowth,
    ProductionMultiplier,
    UnlockBuilding,
    Upgrade,
)

if TYPE_CHECKING:
    from .state import EconomyState

logger = logging.getLogger("civsim.economy.effects")
logger.addHandler(logging.NullHandler())


@dataclass
class Multipliers:
    """Product of all purchased multiplicative effects."""

    production: float = 1.0
    click: float = 1.0
    production_by_resource: Dict[ResourceType, float] = field(
        default_factory=lambda: {res: 1.0 for res in ResourceType}
    )
    click_by_resource: Dict[ResourceType, float] = field(
        default_factory=lambda: {res: 1.0 for res in ResourceType}
    )

    def production_for(self, res: ResourceType) -> float:
        return self.production * self.production_by_resource[res]

    def click_for(self, res: ResourceType) -> float:
        return self.click * self.click_by_resource[res]


def _fold(acc: Multipliers, effect: Effect) -> Multipliers:
    if isinstance(effect, ProductionMultiplier):
        if effect.resource is None:
            acc.production *= effect.factor
        else:
            acc.production_by_resource[effect.resource] *= effect.factor
    elif isinstance(effect, ClickMultiplier):
        if effect.resource is None:
            acc.click *= effect.factor
        else:
            acc.click_by_resource[effect.resource] *= effect.factor
    return acc


def fold_multipliers(upgrades: Iterable[Upgrade]) -> Multipliers:
    """Multiply together the effects of every purchased upgrade. Order does not matter."""
    return reduce(_fold, (u.effect for u in upgrades if u.purchased), Multipliers())


def apply_effect(state: "EconomyState", effect: Effect) -> None:
    """
    Apply the one-shot part of an effect at purchase time. Multiplicative
    effects are not stored here; ``fold_multipliers`` recomputes them.
    """
    if isinstance(effect, UnlockBuilding):
        if 0 <= effect.building < len(state.unlocked):
            state.unlocked[effect.building] = True
        else:
            logger.warning("Upgrade unlocks unknown building index %d; ignored", effect.building)
    elif isinstance(effect, PopulationCap):
        state.population.max_population += effect.amount
    elif isinstance(effect, PopulationGrowth):
        state.population.growth_rate += effect.amount
    elif isinstance(effect, CostReduction):
        state.cost_reduction = max(
            0.0, min(settings.MAX_COST_REDUCTION, state.cost_reduction + effect.amount)
        )


__all__ = ["Multipliers", "apply_effect", "fold_multipliers"]
