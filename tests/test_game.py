import os
import sys

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from economy.buildings import FARM_INDEX, placement_quality
from economy.game import Game
from economy.resources import ResourceType
from worldgen.chunks import ChunkStore
from worldgen.settings import WorldSettings

F, W = ResourceType.FOOD, ResourceType.WOOD


@pytest.fixture
def game():
    return Game(seed=7, starting_resources={"food": 100, "wood": 100})


def test_unlock_then_place_farm(game):
    assert game.purchase_upgrade_node(0)
    assert game.economy.unlocked[FARM_INDEX]
    assert game.economy.amount(F) == pytest.approx(95.0)

    assert game.purchase_building(FARM_INDEX)
    assert game.place_selected(5, 5)
    bonus = game.tile(5, 5).food_bonus
    placement = game.economy.buildings[FARM_INDEX].placements[0]
    assert (placement.tile_x, placement.tile_y, placement.bonus) == (5, 5, bonus)
    assert game.economy.amount(W) == pytest.approx(90.0)
    assert not game.economy.placement_active

    game.tick(2.0)
    assert game.economy.amount(F) == pytest.approx(95.0 + 2.0 * 2.0 * bonus)


def test_world_seed_comes_from_settings_when_not_given():
    ws = WorldSettings(seed=99)
    game = Game(world_settings=ws)
    assert game.world.seed == 99
    assert game.snapshot()["seed"] == 99
    assert game.tile(4, 4) == ChunkStore(99).get_tile(4, 4)


def test_explicit_seed_wins_without_touching_settings():
    ws = WorldSettings(seed=99)
    game = Game(3, world_settings=ws)
    assert game.world.seed == 3
    assert ws.seed == 99
    assert Game().world.seed == 12345


def test_place_selected_requires_placement_mode(game):
    assert not game.place_selected(0, 0)


def test_locked_node_cannot_be_bought(game):
    assert not game.purchase_upgrade_node(11)
    assert not game.purchase_upgrade_node(99)
    assert game.economy.amount(F) == 100.0


def test_upgrade_snapshot_status(game):
    snap = game.upgrade_snapshot()
    assert len(snap) == 24
    assert snap[0]["name"] == "Agriculture"
    assert snap[0]["status"] == "available"
    assert snap[11]["status"] == "locked"
    assert snap[11]["prerequisites"] == [0, 1]
    game.purchase_upgrade_node(0)
    assert game.upgrade_snapshot()[0]["status"] == "purchased"


def test_placement_preview_has_no_side_effects(game):
    preview = game.placement_preview(FARM_INDEX, 3, 3)
    tile = game.tile(3, 3)
    assert preview["terrain"] == tile.terrain.value
    assert preview["bonus"] == tile.food_bonus
    assert preview["quality"] == placement_quality(tile.food_bonus).value
    assert game.economy.buildings[FARM_INDEX].count == 0


def test_gather(game):
    assert game.gather(F) == pytest.approx(0.1)
    assert game.economy.amount(F) == pytest.approx(100.1)


def test_snapshot(game):
    snap = game.snapshot()
    assert snap["seed"] == 7
    assert len(snap["upgrades"]) == 24
    assert "resources" in snap
