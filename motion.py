"""
Continuous movement on the tile grid.

Entities move freely between tile centers but only change direction when
they arrive at one.
"""

import config


def tile_center(cell):
    """Pixel coordinates of the exact center of a cell"""
    x, y = cell
    return (x * config.TILE_SIZE + config.TILE_SIZE / 2,
            y * config.TILE_SIZE + config.TILE_SIZE / 2)


def step_cell(cell, direction):
    return (cell[0] + direction.dx, cell[1] + direction.dy)


def can_move(entity, direction, grid):
    """Whether the neighbor cell in this direction exists and is not a wall"""
    if direction is None:
        return False
    target = step_cell(entity.cell, direction)
    if not grid.in_bounds(target):
        return False
    return grid.is_walkable(target)


def is_at_center(entity):
    center_x, center_y = tile_center(entity.cell)
    return abs(entity.x - center_x) < entity.speed and abs(entity.y - center_y) < entity.speed


def snap_to_center(entity):
    entity.x, entity.y = tile_center(entity.cell)


def move_along(entity):
    """Move speed units along the active direction and update the cell"""
    if entity.direction is None:
        return
    entity.x += entity.direction.dx * entity.speed
    entity.y += entity.direction.dy * entity.speed
    entity.sync_cell()


def advance(entity, grid):
    """
    Advance an entity one tick, applying a buffered turn at tile centers.

    At a center the entity snaps onto it, then either adopts its buffered
    direction (if legal now) or stops when the way ahead is blocked.
    """
    if is_at_center(entity):
        snap_to_center(entity)

        if entity.next_direction is not None and can_move(entity, entity.next_direction, grid):
            entity.direction = entity.next_direction
            entity.next_direction = None
        elif entity.direction is not None and not can_move(entity, entity.direction, grid):
            entity.direction = None

    move_along(entity)
