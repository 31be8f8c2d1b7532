#!/usr/bin/env python3
"""
Layout validation utility to ensure a maze is playable before a game starts
"""

from collections import deque

import numpy as np

import config
from maze_layout import LayoutError, TileKind


class LayoutValidator:
    def __init__(self, layout):
        self.layout = layout
        self.height, self.width = layout.shape

    def is_position_valid(self, pos):
        """Check if a position is valid (within bounds and not a wall)"""
        x, y = pos
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.layout[y, x] != TileKind.WALL
        return False

    def get_valid_neighbors(self, pos):
        """Get all valid 4-connected neighbors of a position"""
        x, y = pos
        neighbors = []
        for dx, dy in [(0, -1), (0, 1), (-1, 0), (1, 0)]:  # Up, Down, Left, Right
            neighbor = (x + dx, y + dy)
            if self.is_position_valid(neighbor):
                neighbors.append(neighbor)
        return neighbors

    def find_cells(self, kind):
        """All cells holding a tile kind, in row-major order"""
        ys, xs = np.nonzero(self.layout == kind)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def find_unreachable_cells(self, start):
        """Flood fill from start; return walkable cells it never reaches"""
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbor in self.get_valid_neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        ys, xs = np.nonzero(self.layout != TileKind.WALL)
        return [(int(x), int(y)) for y, x in zip(ys, xs) if (int(x), int(y)) not in visited]

    def validate(self):
        """
        Check actor start markers and connectivity.

        Returns:
            (player_start, ghost_starts) as (x, y) cells

        Raises:
            LayoutError: missing/duplicate player start or no ghost start
        """
        player_starts = self.find_cells(TileKind.PLAYER_START)
        if len(player_starts) != 1:
            raise LayoutError(f"Layout needs exactly one player start, found {len(player_starts)}")

        ghost_starts = self.find_cells(TileKind.GHOST_START)
        if not ghost_starts:
            raise LayoutError("Layout needs at least one ghost start")

        unreachable = self.find_unreachable_cells(player_starts[0])
        if unreachable and config.ENABLE_SIMULATION_LOGGING:
            print(f"LayoutValidator: {len(unreachable)} walkable cells unreachable from player start: {unreachable[:5]}")

        return player_starts[0], ghost_starts
