"""
Roaming ghost AI: random wandering with momentum and no U-turns.
"""

import config
from entities import Direction
from merge import update_converging
from motion import can_move, is_at_center, move_along, snap_to_center


def legal_directions(entity, grid):
    """Directions the entity can move in from its cell, in UP, DOWN, LEFT, RIGHT order"""
    return [direction for direction in Direction if can_move(entity, direction, grid)]


def roaming_candidates(ghost, grid):
    """Legal directions, minus reversing unless the ghost is in a dead end"""
    legal = legal_directions(ghost, grid)
    if len(legal) == 1:
        return legal
    reverse = ghost.direction.reverse if ghost.direction else None
    return [direction for direction in legal if direction != reverse]


def choose_roaming_direction(ghost, grid, rng):
    """
    Pick the next direction for a ghost standing on a tile center.

    Keeps going straight 70% of the time when possible; otherwise chooses
    uniformly among the candidates.
    """
    candidates = roaming_candidates(ghost, grid)
    if not candidates:
        return None

    if (ghost.direction is not None and can_move(ghost, ghost.direction, grid)
            and rng.random() < config.GHOST_KEEP_DIRECTION_PROBABILITY):
        return ghost.direction
    return rng.choice(candidates)


def update_roaming(ghost, grid, rng):
    ghost.speed = config.GHOST_SPEED

    if is_at_center(ghost) or ghost.direction is None:
        snap_to_center(ghost)
        ghost.direction = choose_roaming_direction(ghost, grid, rng)

    move_along(ghost)


def update_ghost(ghost, grid, rng, target):
    """
    One tick for a normal ghost.

    Args:
        ghost: Entity of kind GHOST
        grid: live Grid
        rng: random source with random() and choice()
        target: (x, y) pixel point ghosts converge on once merging

    Returns:
        True if the ghost finished merging on this tick
    """
    if ghost.merged:
        return False
    if ghost.is_merging:
        ghost.speed = config.GHOST_MERGING_SPEED
        return update_converging(ghost, target)

    update_roaming(ghost, grid, rng)
    return False
