import logging
import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from economy.buildings import BuildingType, FARM_INDEX, LUMBER_MILL_INDEX, MINE_INDEX
from economy.state import EconomyState
from economy.resources import ResourceType
from economy.upgrades import (
    ClickMultiplier,
    CostReduction,
    PopulationCap,
    PopulationGrowth,
    ProductionMultiplier,
    UnlockBuilding,
    Upgrade,
)
from worldgen.terrain import TerrainType, make_tile

F, W, S, G = ResourceType.FOOD, ResourceType.WOOD, ResourceType.STONE, ResourceType.GOLD

OPEN_FARM = BuildingType("Farm", "", cost={W: 10.0}, production={F: 2.0})
OPEN_MILL = BuildingType("Mill", "", cost={}, production={W: 1.0})


def upgrade(effect, cost=None):
    return Upgrade("Test", "", cost or {}, 1, effect)


def test_fresh_state_gather_food():
    state = EconomyState()
    assert state.amount(F) == 0.0
    granted = state.gather_resource(F)
    assert granted == pytest.approx(0.1)
    assert state.amount(F) == pytest.approx(0.1)


def test_place_first_farm():
    state = EconomyState(starting_resources={"wood": 10})
    state.unlocked[FARM_INDEX] = True
    assert state.can_afford(FARM_INDEX)
    assert state.place_building(FARM_INDEX, 3, 4, 1.0)
    assert state.amount(W) == pytest.approx(0.0)
    assert state.buildings[FARM_INDEX].count == 1
    assert state.building_cost(FARM_INDEX)[W] == pytest.approx(11.5)


def test_purchase_only_enters_placement_mode():
    state = EconomyState(starting_resources={"wood": 10})
    state.unlocked[FARM_INDEX] = True
    assert state.purchase_building(FARM_INDEX)
    assert state.placement_active
    assert state.selected_building == FARM_INDEX
    assert state.amount(W) == 10.0
    assert state.buildings[FARM_INDEX].count == 0
    state.cancel_placement()
    assert not state.placement_active
    assert state.selected_building is None


def test_locked_and_invalid_buildings_rejected():
    state = EconomyState(starting_resources={"wood": 100, "food": 100, "stone": 100})
    assert not state.can_afford(FARM_INDEX)
    assert not state.purchase_building(FARM_INDEX)
    for index in (-1, 99):
        assert not state.can_afford(index)
        assert not state.place_building(index, 0, 0, 1.0)
        assert state.building_cost(index) == {}
    assert state.amount(W) == 100.0
    assert all(b.count == 0 for b in state.buildings)


def test_failed_place_has_no_side_effects():
    state = EconomyState(starting_resources={"wood": 5})
    state.unlocked[FARM_INDEX] = True
    assert state.purchase_building(FARM_INDEX) is False
    assert not state.place_building(FARM_INDEX, 1, 1, 1.0)
    assert state.amount(W) == 5.0
    assert state.buildings[FARM_INDEX].placements == []
    assert state.resources[F].per_second == 0.0


MINE_STYLE_COST = {W: 50.0, S: 30.0, F: 25.0}
SHORT_OF_STONE = {"wood": 100, "stone": 10, "food": 100, "gold": 3}


def amounts(state):
    return {res: state.amount(res) for res in ResourceType}


def test_building_short_in_one_resource_deducts_nothing():
    state = EconomyState(starting_resources=SHORT_OF_STONE)
    state.unlocked[MINE_INDEX] = True
    before = amounts(state)
    assert not state.can_afford(MINE_INDEX)
    assert not state.purchase_building(MINE_INDEX)
    assert not state.placement_active
    assert not state.place_building(MINE_INDEX, 2, 2, 1.0)
    assert amounts(state) == before
    assert state.buildings[MINE_INDEX].count == 0
    assert state.buildings[MINE_INDEX].placements == []


def test_upgrade_short_in_one_resource_deducts_nothing():
    state = EconomyState(
        [], [upgrade(PopulationCap(5), MINE_STYLE_COST)], starting_resources=SHORT_OF_STONE
    )
    before = amounts(state)
    assert not state.purchase_upgrade(0)
    assert amounts(state) == before
    assert not state.upgrades[0].purchased
    assert state.population.max_population == 10


def test_unlock_link_must_match_an_upgrade():
    locked = BuildingType("Forge", "", cost={}, production={G: 1.0}, unlocked_by="Smithing")
    with pytest.raises(ValueError):
        EconomyState([locked], [])
    with pytest.raises(ValueError):
        EconomyState([locked], [Upgrade("Smithing", "", {}, 1, UnlockBuilding(3))])
    state = EconomyState([locked], [Upgrade("Smithing", "", {}, 1, UnlockBuilding(0))])
    assert state.unlocked == [False]
    assert state.purchase_upgrade(0)
    assert state.unlocked == [True]


def test_negative_bonus_rejected():
    state = EconomyState([OPEN_FARM], [], starting_resources={"wood": 10})
    assert not state.place_building(0, 0, 0, -0.5)
    assert state.amount(W) == 10.0


def test_placed_building_uses_tile_bonus():
    state = EconomyState([OPEN_FARM], [], starting_resources={"wood": 100})
    assert state.place_building(0, 0, 0, 1.5)
    assert state.resources[F].per_second == pytest.approx(3.0)
    assert state.place_building(0, 1, 0, 0.5)
    assert state.resources[F].per_second == pytest.approx(4.0)
    assert state.building_production(0) == {F: pytest.approx(4.0)}


def test_count_without_placements_produces_base_rate():
    state = EconomyState([OPEN_FARM], [])
    state.buildings[0].count = 2
    state.recalculate_production()
    assert state.resources[F].per_second == pytest.approx(4.0)


def test_tile_bonus_is_best_produced_resource():
    state = EconomyState()
    forest = make_tile(TerrainType.FOREST, 0.5, 0.7, 0.5)
    mountains = make_tile(TerrainType.MOUNTAINS, 0.9, 0.5, 0.5)
    assert state.tile_bonus_for_building(LUMBER_MILL_INDEX, forest) == 2.0
    assert state.tile_bonus_for_building(MINE_INDEX, mountains) == 2.0
    assert state.tile_bonus_for_building(99, forest) == 1.0

    mixed = BuildingType("Trader", "", cost={}, production={F: 1.0, G: 1.0})
    idle = BuildingType("Monument", "", cost={}, production={})
    state = EconomyState([mixed, idle], [])
    hills = make_tile(TerrainType.HILLS, 0.65, 0.5, 0.5)
    assert state.tile_bonus_for_building(0, hills) == 1.2
    assert state.tile_bonus_for_building(1, hills) == 1.0


def test_tick_accumulates_and_clamps():
    state = EconomyState([OPEN_FARM], [], starting_resources={"wood": 10, "food": 1})
    state.place_building(0, 0, 0, 1.0)
    state.tick(2.5)
    assert state.game_time == 2.5
    assert state.amount(F) == pytest.approx(1.0 + 5.0)

    state.resources[S].amount = 1.0
    state.resources[S].per_second = -5.0
    state.tick(1.0)
    assert state.amount(S) == 0.0


def test_negative_dt_is_ignored():
    state = EconomyState([OPEN_FARM], [], starting_resources={"wood": 10})
    state.place_building(0, 0, 0, 1.0)
    state.tick(-1.0)
    assert state.game_time == 0.0
    assert state.amount(F) == 0.0


def test_upgrade_purchase_spends_and_applies():
    state = EconomyState(starting_resources={"food": 20})
    assert not state.unlocked[FARM_INDEX]
    assert state.purchase_upgrade(0)
    assert state.amount(F) == pytest.approx(15.0)
    assert state.upgrades[0].purchased
    assert state.unlocked[FARM_INDEX]
    assert not state.purchase_upgrade(0)
    assert state.amount(F) == pytest.approx(15.0)


def test_unaffordable_or_invalid_upgrade():
    state = EconomyState(starting_resources={"food": 1})
    assert not state.can_afford_upgrade(0)
    assert not state.purchase_upgrade(0)
    assert not state.purchase_upgrade(-1)
    assert not state.purchase_upgrade(999)
    assert state.amount(F) == 1.0
    assert not state.upgrades[0].purchased


def test_cost_reduction_applies_and_caps():
    state = EconomyState(
        [OPEN_FARM],
        [upgrade(CostReduction(0.2)), upgrade(CostReduction(0.6)), upgrade(CostReduction(0.6))],
    )
    state.purchase_upgrade(0)
    assert state.building_cost(0)[W] == pytest.approx(8.0)
    state.purchase_upgrade(1)
    state.purchase_upgrade(2)
    assert state.cost_reduction == pytest.approx(0.9)
    assert state.building_cost(0)[W] == pytest.approx(1.0)


def test_production_multipliers_combine():
    state = EconomyState(
        [OPEN_FARM, OPEN_MILL],
        [upgrade(ProductionMultiplier(2.0)), upgrade(ProductionMultiplier(1.5, F))],
        starting_resources={"wood": 10},
    )
    state.place_building(0, 0, 0, 1.0)
    state.place_building(1, 1, 0, 1.0)
    state.purchase_upgrade(1)
    state.purchase_upgrade(0)
    assert state.production_multiplier == 2.0
    assert state.resources[F].per_second == pytest.approx(2.0 * 2.0 * 1.5)
    assert state.resources[W].per_second == pytest.approx(2.0)


def test_click_multipliers_combine():
    state = EconomyState([], [upgrade(ClickMultiplier(2.0)), upgrade(ClickMultiplier(5.0, F))])
    state.purchase_upgrade(0)
    state.purchase_upgrade(1)
    assert state.click_power_multiplier == 2.0
    assert state.gather_resource(F) == pytest.approx(1.0)
    assert state.gather_resource(W) == pytest.approx(0.1)


def test_population_effects():
    state = EconomyState([], [upgrade(PopulationCap(5)), upgrade(PopulationGrowth(0.1))])
    state.purchase_upgrade(0)
    state.purchase_upgrade(1)
    assert state.population.max_population == 15
    assert state.population.growth_rate == pytest.approx(0.15)


def test_unlock_of_unknown_building_is_logged(caplog):
    state = EconomyState([OPEN_FARM], [upgrade(UnlockBuilding(7))])
    with caplog.at_level(logging.WARNING, logger="civsim.economy.effects"):
        assert state.purchase_upgrade(0)
    assert "unknown building" in caplog.text
    assert state.unlocked == [True]


def test_snapshot_shape():
    state = EconomyState()
    snap = state.snapshot()
    assert set(snap["resources"]) == {"food", "wood", "stone", "gold"}
    assert [b["name"] for b in snap["buildings"]][0] == "Farm"
    assert snap["buildings"][0]["next_cost"] == {"wood": 10.0}
    assert snap["buildings"][0]["unlocked"] is False
    assert snap["population"]["total"] == 2
    assert snap["placement"] == {"active": False, "building": None}
