from __future__ import annotations

"""
Terrain classification and the per-tile data model.

A tile's category comes from three noise-derived scalars (elevation,
moisture, temperature); its resource bonuses are a fixed lookup on the
category.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union

from .settings import WorldSettings


class TerrainType(Enum):
    WATER = "water"
    PLAINS = "plains"
    FOREST = "forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    DESERT = "desert"


class TerrainBonus(NamedTuple):
    food: float
    wood: float
    stone: float
    gold: float


TERRAIN_BONUSES: Dict[TerrainType, TerrainBonus] = {
    TerrainType.WATER: TerrainBonus(food=0.5, wood=0.0, stone=0.0, gold=0.0),
    TerrainType.PLAINS: TerrainBonus(food=1.5, wood=0.8, stone=0.5, gold=0.3),
    TerrainType.FOREST: TerrainBonus(food=1.0, wood=2.0, stone=0.3, gold=0.2),
    TerrainType.HILLS: TerrainBonus(food=0.8, wood=1.0, stone=1.8, gold=1.2),
    TerrainType.MOUNTAINS: TerrainBonus(food=0.3, wood=0.5, stone=2.5, gold=2.0),
    TerrainType.DESERT: TerrainBonus(food=0.4, wood=0.2, stone=1.2, gold=0.8),
}


@dataclass(frozen=True)
class Tile:
    """
    A single generated map cell.

    Attributes:
      terrain: Category chosen by ``determine_terrain``.
      elevation, moisture, temperature: Noise scalars in [0, 1].
      food_bonus, wood_bonus, stone_bonus, gold_bonus: Production multipliers
        for buildings placed here; always ``TERRAIN_BONUSES[terrain]``.
    """

    terrain: TerrainType
    elevation: float
    moisture: float
    temperature: float
    food_bonus: float
    wood_bonus: float
    stone_bonus: float
    gold_bonus: float

    def bonus(self, resource: Union[str, Enum]) -> float:
        """
        Bonus multiplier for a resource name ("food", "wood", "stone", "gold")
        or any enum whose value is one of those names.
        """
        name = resource.value if isinstance(resource, Enum) else resource
        try:
            return getattr(self, f"{name}_bonus")
        except AttributeError:
            raise ValueError(f"Unknown resource '{name}'") from None

    def to_json(self) -> Dict[str, Union[str, float]]:
        return {
            "terrain": self.terrain.value,
            "elevation": self.elevation,
            "moisture": self.moisture,
            "temperature": self.temperature,
            "food_bonus": self.food_bonus,
            "wood_bonus": self.wood_bonus,
            "stone_bonus": self.stone_bonus,
            "gold_bonus": self.gold_bonus,
        }


def determine_terrain(
    elevation: float,
    moisture: float,
    temperature: float,
    *,
    water_elev: float = 0.35,
    mountain_elev: float = 0.75,
    hill_elev: float = 0.60,
    desert_moisture: float = 0.3,
    desert_temp: float = 0.6,
    forest_moisture: float = 0.55,
) -> TerrainType:
    """
    Classify a tile from elevation, moisture and temperature.
    Order of checks (first match wins):
      1. Low elevation → water
      2. Very high elevation → mountains
      3. High elevation → hills
      4. Dry + hot → desert
      5. Wet → forest
      6. Otherwise → plains
    """
    if elevation < water_elev:
        return TerrainType.WATER
    if elevation > mountain_elev:
        return TerrainType.MOUNTAINS
    if elevation > hill_elev:
        return TerrainType.HILLS
    if moisture < desert_moisture and temperature > desert_temp:
        return TerrainType.DESERT
    if moisture > forest_moisture:
        return TerrainType.FOREST
    return TerrainType.PLAINS


def make_tile(terrain: TerrainType, elevation: float, moisture: float, temperature: float) -> Tile:
    bonus = TERRAIN_BONUSES[terrain]
    return Tile(
        terrain=terrain,
        elevation=elevation,
        moisture=moisture,
        temperature=temperature,
        food_bonus=bonus.food,
        wood_bonus=bonus.wood,
        stone_bonus=bonus.stone,
        gold_bonus=bonus.gold,
    )


def classify(
    elevation: float,
    moisture: float,
    temperature: float,
    settings: Optional[WorldSettings] = None,
) -> Tile:
    """Build a tile from raw scalars using the thresholds in ``settings``."""
    s = settings or WorldSettings()
    terrain = determine_terrain(
        elevation,
        moisture,
        temperature,
        water_elev=s.water_elev,
        mountain_elev=s.mountain_elev,
        hill_elev=s.hill_elev,
        desert_moisture=s.desert_moisture,
        desert_temp=s.desert_temp,
        forest_moisture=s.forest_moisture,
    )
    return make_tile(terrain, elevation, moisture, temperature)


# Returned whenever a lookup cannot produce a generated tile.
DEFAULT_TILE: Tile = make_tile(TerrainType.PLAINS, 0.5, 0.5, 0.5)


__all__ = [
    "DEFAULT_TILE",
    "TERRAIN_BONUSES",
    "TerrainBonus",
    "TerrainType",
    "Tile",
    "classify",
    "determine_terrain",
    "make_tile",
]
