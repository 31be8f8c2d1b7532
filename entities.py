"""
Actor records shared by the player, roaming ghosts and the ultimate ghost.

One Entity type carries a kind tag; behavior is picked by the update function
for that tag instead of subclass overrides.
"""

import math
from enum import Enum

import config


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]

    @property
    def reverse(self):
        return _REVERSE[self]

    @classmethod
    def parse(cls, value):
        """Accept a Direction, its name ("UP", "left") or None"""
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise ValueError(f"Not a direction: {value!r}")


_REVERSE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class ActorKind(Enum):
    PLAYER = "player"
    GHOST = "ghost"
    ULTIMATE = "ultimate"


class Entity:
    def __init__(self, kind, grid_x, grid_y, speed, color=None, name=None):
        self.kind = kind
        self.name = name or kind.value
        self.color = color
        self.grid_x = grid_x
        self.grid_y = grid_y
        # Continuous position starts at the exact center of the cell
        self.x = grid_x * config.TILE_SIZE + config.TILE_SIZE / 2
        self.y = grid_y * config.TILE_SIZE + config.TILE_SIZE / 2
        self.direction = None
        self.next_direction = None  # Player only: buffered turn
        self.speed = speed
        # Ghost merge lifecycle
        self.is_merging = False
        self.merged = False

    @property
    def cell(self):
        return (self.grid_x, self.grid_y)

    def sync_cell(self):
        """Recompute the grid cell from the continuous position"""
        self.grid_x = math.floor(self.x / config.TILE_SIZE)
        self.grid_y = math.floor(self.y / config.TILE_SIZE)

    def distance_to(self, other):
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self):
        return {
            'kind': self.kind.value,
            'name': self.name,
            'color': self.color,
            'x': self.x,
            'y': self.y,
            'cell': self.cell,
            'direction': self.direction.name if self.direction else None,
            'is_merging': self.is_merging,
            'merged': self.merged,
        }

    def __repr__(self):
        return f"Entity({self.name}, pos=({self.x:.1f}, {self.y:.1f}), cell={self.cell}, dir={self.direction})"


def make_player(cell):
    return Entity(ActorKind.PLAYER, cell[0], cell[1], config.PLAYER_SPEED, name="Pacman")


def make_ghost(cell, index):
    """Create a roaming ghost; color cycles through the palette by start order"""
    color = config.GHOST_COLORS[index % len(config.GHOST_COLORS)]
    return Entity(ActorKind.GHOST, cell[0], cell[1], config.GHOST_SPEED, color=color, name=f"Ghost{index}")


def make_ultimate_ghost(cell):
    ghost = Entity(ActorKind.ULTIMATE, cell[0], cell[1], config.ULTIMATE_GHOST_SPEED,
                   color=config.ULTIMATE_GHOST_COLOR, name="Ultimate Ghost")
    ghost.merged = True  # It's already the result of merging
    return ghost
