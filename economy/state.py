from __future__ import annotations

"""
EconomyState: resources, buildings, population and upgrade-driven multipliers.

Every command returns a bool (or a number) instead of raising for game-rule
failures, and a failed command leaves all state untouched.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .buildings import DEFAULT_BUILDINGS, Building, BuildingType, Placement
from .effects import Multipliers, apply_effect, fold_multipliers
from .population import Population
from .resources import ResourceDict, ResourceInfo, ResourceType, base_click_power, make_ledger
from .upgrades import UnlockBuilding, Upgrade, default_upgrades
from worldgen.terrain import Tile

logger = logging.getLogger("civsim.economy")
logger.addHandler(logging.NullHandler())


class EconomyState:
    def __init__(
        self,
        buildings: Optional[Sequence[BuildingType]] = None,
        upgrades: Optional[List[Upgrade]] = None,
        *,
        starting_resources: Optional[Dict[str, float]] = None,
        population: Optional[Population] = None,
    ) -> None:
        """
        Args:
            buildings: Building catalog; index order is the building index.
                Defaults to ``DEFAULT_BUILDINGS``.
            upgrades: Upgrade catalog; index order is the upgrade index. The
                list is owned by this state from now on. Defaults to a fresh
                ``default_upgrades()``.
            starting_resources: Initial amounts keyed by resource name.
            population: Initial population. Defaults to ``Population()``.
        """
        self.building_types: Tuple[BuildingType, ...] = tuple(
            DEFAULT_BUILDINGS if buildings is None else buildings
        )
        self.buildings: List[Building] = [Building(i) for i in range(len(self.building_types))]
        self.unlocked: List[bool] = [bt.unlocked_by is None for bt in self.building_types]
        self.upgrades: List[Upgrade] = default_upgrades() if upgrades is None else upgrades
        self.resources: Dict[ResourceType, ResourceInfo] = make_ledger(starting_resources)
        self.population: Population = population if population is not None else Population()
        self._check_unlock_links()

        self.production_multiplier = 1.0
        self.click_power_multiplier = 1.0
        self.multipliers = Multipliers()
        self.cost_reduction = 0.0
        self.game_time = 0.0

        # Placement mode
        self.placement_active = False
        self.selected_building: Optional[int] = None

        self.recalculate_multipliers()

    def _check_unlock_links(self) -> None:
        """
        Every locked building must name an upgrade whose effect unlocks it,
        otherwise it could never be built.
        """
        for i, kind in enumerate(self.building_types):
            if kind.unlocked_by is None:
                continue
            if not any(
                u.name == kind.unlocked_by and u.effect == UnlockBuilding(i) for u in self.upgrades
            ):
                raise ValueError(
                    f"{kind.name} is unlocked by '{kind.unlocked_by}', "
                    f"but no such upgrade unlocks building {i}"
                )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _valid_building(self, index: int) -> bool:
        return 0 <= index < len(self.buildings)

    def _valid_upgrade(self, index: int) -> bool:
        return 0 <= index < len(self.upgrades)

    def amount(self, res: ResourceType) -> float:
        return self.resources[res].amount

    def building_cost(self, index: int) -> ResourceDict:
        """Cost of the next unit: scaled by count, then reduced by ``cost_reduction``."""
        if not self._valid_building(index):
            return {}
        kind = self.building_types[index]
        factor = 1.0 - self.cost_reduction
        return {res: amt * factor for res, amt in self.buildings[index].next_cost(kind).items()}

    def building_production(self, index: int) -> ResourceDict:
        """Current per-second output of one building instance, multipliers included."""
        if not self._valid_building(index):
            return {}
        base = self.buildings[index].base_production(self.building_types[index])
        return {res: rate * self.multipliers.production_for(res) for res, rate in base.items()}

    def _has(self, cost: ResourceDict) -> bool:
        return all(self.resources[res].amount >= amt for res, amt in cost.items())

    def _deduct(self, cost: ResourceDict) -> None:
        for res, amt in cost.items():
            self.resources[res].amount = max(0.0, self.resources[res].amount - amt)

    # ------------------------------------------------------------------
    # Buildings
    # ------------------------------------------------------------------
    def can_afford(self, index: int) -> bool:
        if not self._valid_building(index) or not self.unlocked[index]:
            return False
        return self._has(self.building_cost(index))

    def purchase_building(self, index: int) -> bool:
        """Enter placement mode for ``index``. Resources are only spent on placement."""
        if not self.can_afford(index):
            return False
        self.selected_building = index
        self.placement_active = True
        return True

    def place_building(self, index: int, tile_x: int, tile_y: int, tile_bonus: float) -> bool:
        """
        Build one unit on (tile_x, tile_y). ``tile_bonus`` should come from
        ``tile_bonus_for_building`` and is fixed for the unit's lifetime.
        """
        if tile_bonus < 0 or not self.can_afford(index):
            return False
        self._deduct(self.building_cost(index))
        self.buildings[index].add_placement(Placement(tile_x, tile_y, tile_bonus))
        self.cancel_placement()
        self.recalculate_production()
        logger.debug(
            "Placed %s at (%d, %d) with bonus %.2f",
            self.building_types[index].name,
            tile_x,
            tile_y,
            tile_bonus,
        )
        return True

    def cancel_placement(self) -> None:
        self.placement_active = False
        self.selected_building = None

    def tile_bonus_for_building(self, index: int, tile: Tile) -> float:
        """
        Best bonus the tile offers among the resources this building produces.
        Unknown buildings and buildings that produce nothing get a neutral 1.0.
        """
        if not self._valid_building(index):
            return 1.0
        produced = self.building_types[index].production
        if not produced:
            return 1.0
        return max(tile.bonus(res) for res in produced)

    # ------------------------------------------------------------------
    # Gathering and upgrades
    # ------------------------------------------------------------------
    def gather_resource(self, res: ResourceType) -> float:
        """Manual gather. Returns the amount granted."""
        info = self.resources[res]
        info.amount += info.click_power
        return info.click_power

    def can_afford_upgrade(self, index: int) -> bool:
        if not self._valid_upgrade(index) or self.upgrades[index].purchased:
            return False
        return self._has(self.upgrades[index].cost)

    def purchase_upgrade(self, index: int) -> bool:
        if not self.can_afford_upgrade(index):
            return False
        upgrade = self.upgrades[index]
        self._deduct(upgrade.cost)
        upgrade.purchased = True
        apply_effect(self, upgrade.effect)
        self.recalculate_multipliers()
        logger.debug("Purchased upgrade %s", upgrade.name)
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def tick(self, dt: float) -> None:
        """Advance the clock, population and stockpiles by ``dt`` seconds."""
        if dt < 0:
            return
        self.game_time += dt
        self.population.advance(dt)
        for info in self.resources.values():
            info.amount = max(0.0, info.amount + info.per_second * dt)

    def recalculate_production(self) -> None:
        for info in self.resources.values():
            info.per_second = 0.0
        for building in self.buildings:
            kind = self.building_types[building.type_index]
            for res, rate in building.base_production(kind).items():
                self.resources[res].per_second += rate
        for res, info in self.resources.items():
            info.per_second *= self.multipliers.production_for(res)

    def recalculate_multipliers(self) -> None:
        self.multipliers = fold_multipliers(self.upgrades)
        self.production_multiplier = self.multipliers.production
        self.click_power_multiplier = self.multipliers.click
        for res, info in self.resources.items():
            info.click_power = base_click_power(res) * self.multipliers.click_for(res)
        self.recalculate_production()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of everything a UI needs to draw the economy."""
        return {
            "game_time": self.game_time,
            "resources": {res.value: info.to_json() for res, info in self.resources.items()},
            "buildings": [
                {
                    "name": kind.name,
                    "description": kind.description,
                    "count": building.count,
                    "unlocked": self.unlocked[i],
                    "affordable": self.can_afford(i),
                    "next_cost": {r.value: a for r, a in self.building_cost(i).items()},
                    "production": {r.value: a for r, a in self.building_production(i).items()},
                }
                for i, (kind, building) in enumerate(zip(self.building_types, self.buildings))
            ],
            "population": self.population.to_json(),
            "production_multiplier": self.production_multiplier,
            "click_power_multiplier": self.click_power_multiplier,
            "cost_reduction": self.cost_reduction,
            "placement": {
                "active": self.placement_active,
                "building": self.selected_building,
            },
        }


__all__ = ["EconomyState"]
