"""
Global configuration for simulation rules and behaviors.
"""

# Grid geometry: every position is measured in sub-tile units (pixels)
TILE_SIZE = 32

# Movement Speed Settings (units per tick - one tick per rendered frame)
PLAYER_SPEED = 2
GHOST_SPEED = 2            # Roaming ghosts
GHOST_MERGING_SPEED = 3    # Ghosts flying to the center after the merge trigger
ULTIMATE_GHOST_SPEED = 3   # Faster than normal ghosts
PLAYER_START_DIRECTION = "LEFT"  # Player starts moving immediately

# Scoring and win/merge thresholds
PELLET_POINTS = 10
MERGE_SCORE = 1500  # All ghosts start converging on the center
WIN_SCORE = 1800    # Checked independently from "no pellets left"

# Merge behavior
MERGE_SNAP_DISTANCE = 5  # Ghost counts as merged below this distance to center

# Collision radii (Euclidean distance between centers)
GHOST_COLLISION_DISTANCE = TILE_SIZE / 1.5     # two thirds of a tile
ULTIMATE_COLLISION_DISTANCE = TILE_SIZE / 1.2  # bigger sprite, looser radius

# AI randomness
GHOST_KEEP_DIRECTION_PROBABILITY = 0.7  # Roaming ghosts prefer going straight
PURSUIT_GREEDY_PROBABILITY = 0.8        # 20% random to avoid getting stuck

# Pellet respawn (wall-clock cadence, independent of FPS)
PELLET_RESPAWN_INTERVAL_MS = 5000

# FPS Settings
TARGET_FPS = 60  # One simulation step per rendered frame
MAX_DELTA_TIME_MS = 250  # Cap timer advance to prevent large jumps after a stall

# Colors - Pacman style
GHOST_COLORS = [
    (255, 0, 0),      # red
    (255, 182, 193),  # pink
    (0, 255, 255),    # cyan
    (255, 165, 0),    # orange
]
ULTIMATE_GHOST_COLOR = (108, 92, 231)  # purple

# Logging and Debugging
ENABLE_SIMULATION_LOGGING = True  # Print lifecycle events (merge, spawn, respawn)
