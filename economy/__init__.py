"""Economy package exposing the core classes."""

from .buildings import (
    DEFAULT_BUILDINGS,
    Building,
    BuildingType,
    Placement,
    PlacementQuality,
    placement_quality,
)
from .game import Game
from .population import Population
from .resources import ResourceInfo, ResourceType
from .state import EconomyState
from .upgrade_tree import DEFAULT_TREE_LAYOUT, UpgradeGraph, UpgradeNode
from .upgrades import (
    ClickMultiplier,
    CostReduction,
    PopulationCap,
    PopulationGrowth,
    ProductionMultiplier,
    UnlockBuilding,
    Upgrade,
    default_upgrades,
)

__all__ = [
    "Building",
    "BuildingType",
    "ClickMultiplier",
    "CostReduction",
    "DEFAULT_BUILDINGS",
    "DEFAULT_TREE_LAYOUT",
    "EconomyState",
    "Game",
    "Placement",
    "PlacementQuality",
    "Population",
    "PopulationCap",
    "PopulationGrowth",
    "ProductionMultiplier",
    "ResourceInfo",
    "ResourceType",
    "UnlockBuilding",
    "Upgrade",
    "UpgradeGraph",
    "UpgradeNode",
    "default_upgrades",
    "placement_quality",
]
