from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from . import settings
from .resources import ResourceDict, ResourceType


@dataclass(frozen=True)
class BuildingType:
    """Static catalog entry for one kind of building."""

    name: str
    description: str
    cost: Dict[ResourceType, float]
    production: Dict[ResourceType, float]
    # Name of the upgrade whose UnlockBuilding effect unlocks this building;
    # None means available from the start. Checked by EconomyState.
    unlocked_by: Optional[str] = None

    def __post_init__(self) -> None:
        if any(v < 0 for v in self.cost.values()):
            raise ValueError(f"{self.name}: costs cannot be negative")
        if any(v < 0 for v in self.production.values()):
            raise ValueError(f"{self.name}: production cannot be negative")


@dataclass(frozen=True)
class Placement:
    """One building unit bound to a tile, with the bonus it earned there."""

    tile_x: int
    tile_y: int
    bonus: float
    placed: bool = True


def scaled_cost(kind: BuildingType, count: int) -> ResourceDict:
    """Cost of the next unit when ``count`` are already owned."""
    return {res: amount * settings.COST_SCALING ** count for res, amount in kind.cost.items()}


@dataclass
class Building:
    """Owned units of one catalog entry, referenced by its catalog index."""

    type_index: int
    count: int = 0
    placements: List[Placement] = field(default_factory=list)

    def next_cost(self, kind: BuildingType) -> ResourceDict:
        return scaled_cost(kind, self.count)

    def base_production(self, kind: BuildingType) -> ResourceDict:
        """
        Production before global/per-resource multipliers. Placed units use
        their own tile bonus; units owned without placement records produce
        the plain base rate.
        """
        totals: ResourceDict = {}
        if self.placements:
            for placement in self.placements:
                for res, rate in kind.production.items():
                    totals[res] = totals.get(res, 0.0) + rate * placement.bonus
        elif self.count > 0:
            for res, rate in kind.production.items():
                totals[res] = rate * self.count
        return totals

    def add_placement(self, placement: Placement) -> None:
        self.count += 1
        self.placements.append(placement)


class PlacementQuality(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    OK = "ok"
    FAIR = "fair"
    POOR = "poor"


def placement_quality(bonus: float) -> PlacementQuality:
    """Rate a tile bonus for placement previews."""
    for name, threshold in settings.PLACEMENT_THRESHOLDS:
        if bonus >= threshold:
            return PlacementQuality(name)
    return PlacementQuality.POOR


FARM = BuildingType(
    name="Farm",
    description="Produces food",
    cost={ResourceType.WOOD: 10.0},
    production={ResourceType.FOOD: 2.0},
    unlocked_by="Agriculture",
)
LUMBER_MILL = BuildingType(
    name="Lumber Mill",
    description="Produces wood",
    cost={ResourceType.FOOD: 15.0, ResourceType.STONE: 5.0},
    production={ResourceType.WOOD: 1.5},
    unlocked_by="Forestry",
)
QUARRY = BuildingType(
    name="Quarry",
    description="Produces stone",
    cost={ResourceType.WOOD: 20.0, ResourceType.FOOD: 10.0},
    production={ResourceType.STONE: 1.0},
    unlocked_by="Mining",
)
MINE = BuildingType(
    name="Mine",
    description="Produces gold",
    cost={ResourceType.WOOD: 50.0, ResourceType.STONE: 30.0, ResourceType.FOOD: 25.0},
    production={ResourceType.GOLD: 0.5},
    unlocked_by="Deep Mining",
)
HOUSE = BuildingType(
    name="House",
    description="Shelters settlers and grows a little food",
    cost={ResourceType.WOOD: 30.0, ResourceType.STONE: 15.0},
    production={ResourceType.FOOD: 0.5},
    unlocked_by="Construction",
)

# Catalog order defines building indices.
DEFAULT_BUILDINGS: Tuple[BuildingType, ...] = (FARM, LUMBER_MILL, QUARRY, MINE, HOUSE)

FARM_INDEX, LUMBER_MILL_INDEX, QUARRY_INDEX, MINE_INDEX, HOUSE_INDEX = range(5)


__all__ = [
    "Building",
    "BuildingType",
    "DEFAULT_BUILDINGS",
    "Placement",
    "PlacementQuality",
    "placement_quality",
    "scaled_cost",
]
