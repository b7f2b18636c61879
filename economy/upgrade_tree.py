from __future__ import annotations

"""Prerequisite graph over the upgrade catalog."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .upgrades import Upgrade

# (upgrade index, x, y, prerequisite node indices), in node order
LayoutEntry = Tuple[int, float, float, Tuple[int, ...]]

DEFAULT_TREE_LAYOUT: Tuple[LayoutEntry, ...] = (
    # Tier 1: no prerequisites
    (0, 100, 100, ()),  # Agriculture
    (1, 250, 100, ()),  # Forestry
    (2, 400, 100, ()),  # Mining
    (4, 550, 100, ()),  # Better Tools
    # Production and click branches
    (5, 100, 220, (0,)),  # Farming Techniques
    (6, 250, 220, (1,)),  # Sawmill Tech
    (7, 400, 220, (2,)),  # Explosives
    (21, 550, 220, (3,)),  # Foraging Expert
    (22, 700, 220, (3,)),  # Master Lumberjack
    # Population branch
    (9, 850, 100, ()),  # Healthcare
    (10, 850, 220, (9,)),  # Immigration
    # Building unlocks
    (3, 175, 340, (0, 1)),  # Construction
    (8, 325, 340, (2, 1)),  # Deep Mining
    # Doublers
    (11, 100, 460, (4,)),  # Irrigation
    (12, 250, 460, (5,)),  # Steel Axes
    (13, 400, 460, (6,)),  # Industrial Mining
    (14, 475, 580, (12,)),  # Gold Rush
    (15, 250, 580, (4, 5, 6)),  # Mechanization
    (16, 625, 340, (7, 8)),  # Refined Tools
    # End game
    (17, 850, 340, (10,)),  # Education
    (18, 700, 460, (17,)),  # Automation
    (19, 550, 700, (17, 20)),  # Mass Production
    (20, 700, 700, (21,)),  # Hyper-Efficiency
    (23, 625, 580, (18,)),  # Master Craftsman
)

PURCHASED = "purchased"
AVAILABLE = "available"
LOCKED = "locked"


@dataclass
class UpgradeNode:
    upgrade_index: int
    x: float
    y: float
    prerequisites: List[int] = field(default_factory=list)
    unlocks: List[int] = field(default_factory=list)


class UpgradeGraph:
    """
    Nodes wrap upgrade-catalog indices. An edge prerequisite → node means the
    node cannot be bought until the prerequisite's upgrade is purchased. The
    layout must be authored acyclic; no cycle check is made here.
    """

    def __init__(self, layout: Iterable[LayoutEntry] = DEFAULT_TREE_LAYOUT) -> None:
        self.nodes: List[UpgradeNode] = [
            UpgradeNode(upgrade_index, x, y, list(prereqs)) for upgrade_index, x, y, prereqs in layout
        ]
        for idx, node in enumerate(self.nodes):
            for prereq in node.prerequisites:
                if not 0 <= prereq < len(self.nodes):
                    raise ValueError(f"Node {idx} lists unknown prerequisite node {prereq}")
                if prereq == idx:
                    raise ValueError(f"Node {idx} cannot require itself")
                self.nodes[prereq].unlocks.append(idx)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> UpgradeNode:
        return self.nodes[index]

    def check_catalog(self, upgrades: Sequence[Upgrade]) -> None:
        """Raise ValueError if any node points outside ``upgrades``."""
        for idx, node in enumerate(self.nodes):
            if not 0 <= node.upgrade_index < len(upgrades):
                raise ValueError(f"Node {idx} wraps unknown upgrade {node.upgrade_index}")

    def _purchased(self, node_index: int, upgrades: Sequence[Upgrade]) -> bool:
        return upgrades[self.nodes[node_index].upgrade_index].purchased

    def is_available(self, node_index: int, upgrades: Sequence[Upgrade]) -> bool:
        if not 0 <= node_index < len(self.nodes):
            return False
        if self._purchased(node_index, upgrades):
            return False
        return all(self._purchased(p, upgrades) for p in self.nodes[node_index].prerequisites)

    def is_locked(self, node_index: int, upgrades: Sequence[Upgrade]) -> bool:
        if not 0 <= node_index < len(self.nodes):
            return True
        if self._purchased(node_index, upgrades):
            return False
        return not self.is_available(node_index, upgrades)

    def status(self, node_index: int, upgrades: Sequence[Upgrade]) -> str:
        if 0 <= node_index < len(self.nodes) and self._purchased(node_index, upgrades):
            return PURCHASED
        return AVAILABLE if self.is_available(node_index, upgrades) else LOCKED

    def roots(self) -> List[int]:
        return [i for i, node in enumerate(self.nodes) if not node.prerequisites]

    def node_for_upgrade(self, upgrade_index: int) -> Optional[int]:
        for i, node in enumerate(self.nodes):
            if node.upgrade_index == upgrade_index:
                return i
        return None

    def descendants(self, node_index: int) -> Set[int]:
        """Every node reachable from ``node_index`` by following unlock edges."""
        seen: Set[int] = set()
        stack = list(self.nodes[node_index].unlocks)
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.nodes[current].unlocks)
        return seen


__all__ = [
    "AVAILABLE",
    "DEFAULT_TREE_LAYOUT",
    "LOCKED",
    "PURCHASED",
    "UpgradeGraph",
    "UpgradeNode",
]
