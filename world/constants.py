"""Simulation constants. Times are in milliseconds; dimensions in cells."""

DEFAULT_NX, DEFAULT_NY = 50, 50
DEFAULT_NZ = 1
DEFAULT_DENSITY = 0.33

# Matrix-rain timing: 50 ms ticks, 2 s before fading, 12 discrete fade steps.
TICK_MS = 50
RAMP_MS = 2000
TOTAL_FADE_STEPS = 12
REROLL_CHANCE = 0.05
SPAWN_CHANCE = 0.0001

# Depth blend: opacity lost per layer away from the player, and its floor.
DEPTH_STEP = 0.2
DEPTH_FLOOR = 0.2
# Deeper layers are sparser, but never below this fraction of the base density.
DEPTH_DENSITY_FLOOR = 0.1
# Layers shown at once, starting at the player's layer and going deeper.
DEFAULT_VIEW_DEPTH = 3

CELL_PX_EXPLORE = 40
CELL_PX_RAIN = 20

# Unit steps: x grows right, y grows down, z grows deeper.
DIRECTIONS_2D = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
DIRECTIONS_3D = {
    "up": (0, -1, 0),
    "down": (0, 1, 0),
    "left": (-1, 0, 0),
    "right": (1, 0, 0),
    "raise": (0, 0, -1),
    "lower": (0, 0, 1),
}
