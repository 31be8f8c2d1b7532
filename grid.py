"""
Live maze grid: immutable topology plus mutable pellet occupancy.

Cells are (x, y) = (column, row); arrays are indexed [y, x].
"""

import numpy as np

from maze_layout import LayoutError, TileKind


class Grid:
    def __init__(self, layout):
        layout = np.asarray(layout, dtype=int)
        if layout.ndim != 2 or layout.size == 0:
            raise LayoutError(f"Grid needs a non-empty 2D layout, got shape {layout.shape}")

        self.layout = layout.copy()
        self.layout.setflags(write=False)
        self.height, self.width = self.layout.shape
        self.tiles = self.layout.copy()

    def reset(self):
        """Restore every live tile to the original layout"""
        self.tiles = self.layout.copy()

    @property
    def center_cell(self):
        return (self.width // 2, self.height // 2)

    def in_bounds(self, cell):
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, cell):
        """Tile kind at cell; anything out of range reads as WALL"""
        if not self.in_bounds(cell):
            return TileKind.WALL
        x, y = cell
        return TileKind(int(self.tiles[y, x]))

    def is_walkable(self, cell):
        return self.tile_at(cell) != TileKind.WALL

    def consume_pellet(self, cell):
        """Turn a PELLET cell into EMPTY; returns the number collected (0 or 1)"""
        if self.tile_at(cell) != TileKind.PELLET:
            return 0
        x, y = cell
        self.tiles[y, x] = TileKind.EMPTY
        return 1

    def respawn_pellets(self, layout=None, exempt_cell=None):
        """
        Put pellets back on eaten cells.

        Args:
            layout: original layout to restore from (defaults to this grid's)
            exempt_cell: (x, y) left empty, normally the player's cell

        Returns:
            int - number of pellets restored
        """
        original = self.layout if layout is None else np.asarray(layout)
        mask = (original == TileKind.PELLET) & (self.tiles == TileKind.EMPTY)
        if exempt_cell is not None and self.in_bounds(exempt_cell):
            x, y = exempt_cell
            mask[y, x] = False

        self.tiles[mask] = TileKind.PELLET
        return int(np.count_nonzero(mask))

    def count_pellets(self):
        return int(np.count_nonzero(self.tiles == TileKind.PELLET))
