# Tuning constants for the economy

# Each owned unit of a building multiplies the next unit's cost by this factor.
COST_SCALING = 1.15

# Cost reduction from upgrades is capped at 90%.
MAX_COST_REDUCTION = 0.9

# Resource granted per manual gather before any multipliers.
BASE_CLICK_POWER = {
    "food": 0.1,
    "wood": 0.05,
    "stone": 0.03,
    "gold": 0.01,
}

# Stockpiles for a fresh game
STARTING_RESOURCES = {
    "food": 0.0,
    "wood": 0.0,
    "stone": 0.0,
    "gold": 0.0,
}

# Population for a fresh game. Growth is in citizens per second.
STARTING_POPULATION = 2
STARTING_MAX_POPULATION = 10
STARTING_GROWTH_RATE = 0.05

# Minimum tile bonus for each placement quality rating, best first.
PLACEMENT_THRESHOLDS = (
    ("excellent", 2.0),
    ("good", 1.5),
    ("ok", 1.2),
    ("fair", 1.0),
)
