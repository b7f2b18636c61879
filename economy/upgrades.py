from __future__ import annotations

"""
Upgrade catalog and the closed set of upgrade effects.

Each effect is a small frozen dataclass; ``Effect`` is their union. All code
that interprets effects lives in ``economy.effects``.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .buildings import FARM_INDEX, HOUSE_INDEX, LUMBER_MILL_INDEX, MINE_INDEX, QUARRY_INDEX
from .resources import ResourceType


@dataclass(frozen=True)
class ProductionMultiplier:
    """Multiply passive production of one resource, or all when ``resource`` is None."""

    factor: float
    resource: Optional[ResourceType] = None

    def __post_init__(self) -> None:
        if self.factor <= 0:
            raise ValueError("factor must be positive")


@dataclass(frozen=True)
class ClickMultiplier:
    """Multiply click power of one resource, or all when ``resource`` is None."""

    factor: float
    resource: Optional[ResourceType] = None

    def __post_init__(self) -> None:
        if self.factor <= 0:
            raise ValueError("factor must be positive")


@dataclass(frozen=True)
class PopulationCap:
    amount: int


@dataclass(frozen=True)
class PopulationGrowth:
    amount: float


@dataclass(frozen=True)
class CostReduction:
    amount: float


@dataclass(frozen=True)
class UnlockBuilding:
    building: int


Effect = Union[
    ProductionMultiplier,
    ClickMultiplier,
    PopulationCap,
    PopulationGrowth,
    CostReduction,
    UnlockBuilding,
]


@dataclass
class Upgrade:
    """Catalog entry for one upgrade. ``purchased`` only ever goes False → True."""

    name: str
    description: str
    cost: Dict[ResourceType, float]
    tier: int
    effect: Effect
    purchased: bool = field(default=False, compare=False)

    def to_json(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "cost": {res.value: amt for res, amt in self.cost.items()},
            "tier": self.tier,
            "purchased": self.purchased,
        }


F, W, S, G = ResourceType.FOOD, ResourceType.WOOD, ResourceType.STONE, ResourceType.GOLD


def default_upgrades() -> List[Upgrade]:
    """Fresh copy of the standard upgrade catalog; list order defines upgrade indices."""
    return [
        Upgrade("Agriculture", "Unlocks farms", {F: 5}, 1, UnlockBuilding(FARM_INDEX)),
        Upgrade("Forestry", "Unlocks lumber mills", {F: 15}, 1, UnlockBuilding(LUMBER_MILL_INDEX)),
        Upgrade("Mining", "Unlocks quarries", {F: 15, W: 10}, 1, UnlockBuilding(QUARRY_INDEX)),
        Upgrade("Construction", "Unlocks houses", {W: 40, S: 20}, 2, UnlockBuilding(HOUSE_INDEX)),
        Upgrade("Better Tools", "Doubles click power", {W: 15}, 1, ClickMultiplier(2.0)),
        Upgrade("Farming Techniques", "+50% food production", {F: 50, W: 25}, 2,
                ProductionMultiplier(1.5, F)),
        Upgrade("Sawmill Tech", "+50% wood production", {W: 50, F: 25}, 2,
                ProductionMultiplier(1.5, W)),
        Upgrade("Explosives", "+50% stone production", {S: 40, W: 30}, 2,
                ProductionMultiplier(1.5, S)),
        Upgrade("Deep Mining", "Unlocks mines", {S: 50, W: 50}, 2, UnlockBuilding(MINE_INDEX)),
        Upgrade("Healthcare", "+5 max population", {F: 30}, 1, PopulationCap(5)),
        Upgrade("Immigration", "Settlers arrive faster", {F: 60, W: 30}, 2, PopulationGrowth(0.1)),
        Upgrade("Irrigation", "Doubles food production", {F: 200, S: 50}, 3,
                ProductionMultiplier(2.0, F)),
        Upgrade("Steel Axes", "Doubles wood production", {W: 200, S: 50}, 3,
                ProductionMultiplier(2.0, W)),
        Upgrade("Industrial Mining", "Doubles stone production", {S: 200, W: 100}, 3,
                ProductionMultiplier(2.0, S)),
        Upgrade("Gold Rush", "Doubles gold production", {G: 50, S: 150}, 4,
                ProductionMultiplier(2.0, G)),
        Upgrade("Mechanization", "+25% all production", {F: 300, W: 300, S: 200}, 3,
                ProductionMultiplier(1.25)),
        Upgrade("Refined Tools", "Triples click power", {W: 150, S: 100}, 3, ClickMultiplier(3.0)),
        Upgrade("Education", "+10 max population", {F: 200, G: 20}, 3, PopulationCap(10)),
        Upgrade("Automation", "Buildings cost 20% less", {G: 100, S: 300}, 4, CostReduction(0.2)),
        Upgrade("Mass Production", "+50% all production", {F: 1000, W: 1000, S: 500, G: 100}, 4,
                ProductionMultiplier(1.5)),
        Upgrade("Hyper-Efficiency", "Doubles all production",
                {F: 5000, W: 5000, S: 2500, G: 500}, 5, ProductionMultiplier(2.0)),
        Upgrade("Foraging Expert", "5x food per click", {F: 40}, 2, ClickMultiplier(5.0, F)),
        Upgrade("Master Lumberjack", "5x wood per click", {W: 40}, 2, ClickMultiplier(5.0, W)),
        Upgrade("Master Craftsman", "10x click power", {G: 200, S: 500}, 4, ClickMultiplier(10.0)),
    ]


__all__ = [
    "ClickMultiplier",
    "CostReduction",
    "Effect",
    "PopulationCap",
    "PopulationGrowth",
    "ProductionMultiplier",
    "UnlockBuilding",
    "Upgrade",
    "default_upgrades",
]
