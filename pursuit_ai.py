"""
Greedy chase AI for the ultimate ghost
"""

import math

import config
from motion import is_at_center, move_along, snap_to_center, step_cell
from ghost_ai import legal_directions


def rank_directions(entity, grid, target_cell):
    """
    Legal directions ordered by how close each neighbor cell is to the target.

    Distance is Euclidean in grid cells. The sort is stable, so ties keep the
    UP, DOWN, LEFT, RIGHT order.
    """
    def distance(direction):
        x, y = step_cell(entity.cell, direction)
        return math.hypot(x - target_cell[0], y - target_cell[1])

    return sorted(legal_directions(entity, grid), key=distance)


def choose_pursuit_direction(entity, grid, target_cell, rng):
    ranked = rank_directions(entity, grid, target_cell)
    if not ranked:
        return None

    # 80% chance to take the best path, 20% random to avoid getting stuck
    if rng.random() < config.PURSUIT_GREEDY_PROBABILITY:
        return ranked[0]
    return rng.choice(ranked)


def update_pursuit(entity, grid, player, rng):
    if is_at_center(entity) or entity.direction is None:
        snap_to_center(entity)
        entity.direction = choose_pursuit_direction(entity, grid, player.cell, rng)

    move_along(entity)
