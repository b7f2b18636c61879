from __future__ import annotations

"""Resource kinds and the per-resource ledger entry."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from . import settings


class ResourceType(Enum):
    """Resources tracked by the economy, in display order."""

    FOOD = "food"
    WOOD = "wood"
    STONE = "stone"
    GOLD = "gold"


ResourceDict = Dict[ResourceType, float]


@dataclass
class ResourceInfo:
    """Stockpile, passive rate and click power for one resource."""

    amount: float = 0.0
    per_second: float = 0.0
    click_power: float = 0.0

    def to_json(self) -> Dict[str, float]:
        return {
            "amount": self.amount,
            "per_second": self.per_second,
            "click_power": self.click_power,
        }


def base_click_power(resource: ResourceType) -> float:
    return settings.BASE_CLICK_POWER[resource.value]


def make_ledger(starting: Union[Dict[str, float], None] = None) -> Dict[ResourceType, ResourceInfo]:
    """Fresh ledger with every resource present, amounts taken from ``starting``."""
    amounts = settings.STARTING_RESOURCES if starting is None else starting
    return {
        res: ResourceInfo(
            amount=max(0.0, float(amounts.get(res.value, 0.0))),
            click_power=base_click_power(res),
        )
        for res in ResourceType
    }


__all__ = ["ResourceDict", "ResourceInfo", "ResourceType", "base_click_power", "make_ledger"]
