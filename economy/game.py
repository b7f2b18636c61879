from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .buildings import BuildingType, PlacementQuality, placement_quality
from .resources import ResourceType
from .state import EconomyState
from .upgrade_tree import DEFAULT_TREE_LAYOUT, LayoutEntry, UpgradeGraph
from .upgrades import Upgrade
from worldgen.chunks import ChunkStore
from worldgen.settings import WorldSettings
from worldgen.terrain import Tile

logger = logging.getLogger("civsim.Game")
logger.addHandler(logging.NullHandler())


class Game:
    """
    One play session: a generated world, an economy and the upgrade tree
    over that economy's upgrade catalog. All state is owned here.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        world_settings: Optional[WorldSettings] = None,
        buildings: Optional[Sequence[BuildingType]] = None,
        upgrades: Optional[List[Upgrade]] = None,
        layout: Iterable[LayoutEntry] = DEFAULT_TREE_LAYOUT,
        starting_resources: Optional[Dict[str, float]] = None,
    ) -> None:
        # seed=None keeps world_settings.seed (or the default 12345)
        self.world = ChunkStore(seed, settings=world_settings)
        self.economy = EconomyState(buildings, upgrades, starting_resources=starting_resources)
        self.upgrade_tree = UpgradeGraph(layout)
        self.upgrade_tree.check_catalog(self.economy.upgrades)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def tick(self, dt: float) -> None:
        self.economy.tick(dt)

    def gather(self, res: ResourceType) -> float:
        return self.economy.gather_resource(res)

    def purchase_building(self, index: int) -> bool:
        return self.economy.purchase_building(index)

    def cancel_placement(self) -> None:
        self.economy.cancel_placement()

    def place_building(self, index: int, tile_x: int, tile_y: int) -> bool:
        """Place building ``index`` on a map tile, using that tile's bonus."""
        bonus = self.economy.tile_bonus_for_building(index, self.world.get_tile(tile_x, tile_y))
        return self.economy.place_building(index, tile_x, tile_y, bonus)

    def place_selected(self, tile_x: int, tile_y: int) -> bool:
        """Finish a placement started with ``purchase_building``."""
        if not self.economy.placement_active or self.economy.selected_building is None:
            return False
        return self.place_building(self.economy.selected_building, tile_x, tile_y)

    def purchase_upgrade_node(self, node_index: int) -> bool:
        """Buy the upgrade behind a tree node once all its prerequisites are owned."""
        if not self.upgrade_tree.is_available(node_index, self.economy.upgrades):
            logger.debug("Upgrade node %d is not available", node_index)
            return False
        return self.economy.purchase_upgrade(self.upgrade_tree[node_index].upgrade_index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def tile(self, x: int, y: int) -> Tile:
        return self.world.get_tile(x, y)

    def placement_preview(self, index: int, tile_x: int, tile_y: int) -> Dict[str, Any]:
        """Bonus and quality rating the building would get on a tile. No side effects."""
        tile = self.world.get_tile(tile_x, tile_y)
        bonus = self.economy.tile_bonus_for_building(index, tile)
        quality: PlacementQuality = placement_quality(bonus)
        return {"terrain": tile.terrain.value, "bonus": bonus, "quality": quality.value}

    def upgrade_snapshot(self) -> List[Dict[str, Any]]:
        upgrades = self.economy.upgrades
        result = []
        for i, node in enumerate(self.upgrade_tree.nodes):
            entry = upgrades[node.upgrade_index].to_json()
            entry.update(
                {
                    "node": i,
                    "x": node.x,
                    "y": node.y,
                    "prerequisites": list(node.prerequisites),
                    "unlocks": list(node.unlocks),
                    "status": self.upgrade_tree.status(i, upgrades),
                    "affordable": self.economy.can_afford_upgrade(node.upgrade_index),
                }
            )
            result.append(entry)
        return result

    def snapshot(self) -> Dict[str, Any]:
        data = self.economy.snapshot()
        data["seed"] = self.world.seed
        data["upgrades"] = self.upgrade_snapshot()
        return data


__all__ = ["Game"]
