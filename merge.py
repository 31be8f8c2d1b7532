"""
Ghost merge lifecycle: ROAMING -> CONVERGING -> MERGED, then one ultimate ghost.
"""

import math
from enum import Enum

import config
from entities import make_ultimate_ghost
from motion import tile_center


class MergeState(Enum):
    ROAMING = "roaming"
    CONVERGING = "converging"
    MERGED = "merged"


def merge_state(ghost):
    if ghost.merged:
        return MergeState.MERGED
    if ghost.is_merging:
        return MergeState.CONVERGING
    return MergeState.ROAMING


def broadcast_merge(ghosts):
    """Flag every ghost as merging at once; returns how many were newly flagged"""
    flagged = 0
    for ghost in ghosts:
        if not ghost.is_merging:
            ghost.is_merging = True
            flagged += 1
    return flagged


def center_point(grid):
    """Pixel center of the maze's geometric center cell"""
    return tile_center(grid.center_cell)


def update_converging(ghost, target):
    """
    Fly straight at the target, ignoring walls.

    Returns:
        True on the tick the ghost reaches the target and becomes merged
    """
    if ghost.merged:
        return False

    target_x, target_y = target
    angle = math.atan2(target_y - ghost.y, target_x - ghost.x)
    ghost.x += math.cos(angle) * ghost.speed
    ghost.y += math.sin(angle) * ghost.speed
    ghost.sync_cell()

    if math.hypot(ghost.x - target_x, ghost.y - target_y) < config.MERGE_SNAP_DISTANCE:
        ghost.merged = True
        ghost.x, ghost.y = target_x, target_y
        ghost.sync_cell()
        ghost.direction = None
        return True
    return False


def all_merged(ghosts):
    return len(ghosts) > 0 and all(ghost.merged for ghost in ghosts)


def spawn_ultimate_ghost(grid):
    return make_ultimate_ghost(grid.center_cell)
