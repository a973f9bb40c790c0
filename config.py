"""
Configuration settings for the Planar Machines simulation core.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Simulation settings
SIM_SEED = int(os.getenv("SIM_SEED", "1"))
SIM_TICK_HZ = int(os.getenv("SIM_TICK_HZ", "20"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PROTOTYPE_VERSION = "1.0.0"
GAME_TITLE = f"Planar Machines (Prototype v{PROTOTYPE_VERSION})"

# Mine loot table: relative weight of each resource per mining completion.
# Order matters: cumulative lookups walk it front to back.
MINE_LOOT_TABLE = {
    "dirt": 120,
    "sand": 60,
    "gravel": 40,
    "wood": 30,
    "stone": 24,
    "coal": 20,
    "copper": 15,
    "iron": 12,
    "silver": 10,
    "gold": 8,
    "emerald": 6,
    "platinum": 5,
    "diamond": 4,
    "berylium": 3,
    "unobtainium": 2,
    "ultimatum": 1,
}

# Seconds a resource stays highlighted after being granted
RESOURCE_COOLDOWN_SECONDS = 0.3

# Quarry: progress needed per connected resource is QUARRY_BASE_PROGRESS / drop rate
QUARRY_BASE_PROGRESS = 100

# Plane generation
PLANE_WARMUP_DRAWS = 12
PLANE_PRIMARY_BASE_RGB = (0.64, 0.75, 0.55)
PLANE_BACKGROUND_BASE_RGB = (0.18, 0.2, 0.25)
COLOR_HUE_RANGE = 320  # candidate hues are drawn from [0, 320)
COLOR_HUE_GAP = 20  # degrees kept clear on each side of the base hue
INFLUENCE_RESOURCE_FACTOR = 1000

# Board settings
NODE_SIZE = 50  # px, bounding square of a node
NODE_SPACING = 10  # px gap kept between neighbouring nodes
PLACEMENT_MAX_RINGS = 64
START_NODE_POSITION = (0.0, 0.0)

# Energy settings
STARTING_ENERGY = 0
BASE_ENERGY_PER_SECOND = 1
MATERIAL_LEVEL_EFFECT = 1.01  # energy multiplier per resource level
POWER_UPKEEP_BASE = 100  # powered machines drain POWER_UPKEEP_BASE^n / 10 energy/s
FIRST_POWER_COST = 10
POWER_COST_DISCOUNT = 0.99
PORTAL_BASE_COST = 1e9

# Connection purchases: cost(level) = CONNECTION_COST_BASE * (level + 1)^CONNECTION_COST_EXPONENT
CONNECTION_COST_BASE = 1e3
CONNECTION_COST_EXPONENT = 2.0

# Resource levels: cost(level) = RESOURCE_LEVEL_BASE * (level + 1)^RESOURCE_LEVEL_EXPONENT
RESOURCE_LEVEL_BASE = 10.0
RESOURCE_LEVEL_EXPONENT = 1.5

# Planes: resource/s an active plane earns before tool multipliers
PLANE_BASE_RESOURCE_GAIN = 1
# Artificial Intelligence scales plane gain by time_active / PLANE_TIME_EFFECT_SECONDS
PLANE_TIME_EFFECT_SECONDS = 6000
# Booster: raising level L costs 10^((L + BOOST_COST_OFFSET) * 2) energy
BOOST_COST_OFFSET = 8
