from enum import IntEnum

import numpy as np


class LayoutError(ValueError):
    """Raised when a maze layout can't be turned into a playable grid"""


class TileKind(IntEnum):
    EMPTY = 0
    WALL = 1
    PELLET = 2
    PLAYER_START = 3
    GHOST_START = 4


TILE_LEGEND = {
    '#': TileKind.WALL,
    '.': TileKind.PELLET,
    ' ': TileKind.EMPTY,
    'P': TileKind.PLAYER_START,
    'G': TileKind.GHOST_START,
}

# 19x19 maze, geometric center (9, 9). Player starts at (9, 15) facing a
# pellet corridor to the left; the ghost pen surrounds the center.
DEFAULT_LAYOUT = [
    "###################",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#.................#",
    "#.##.#.#####.#.##.#",
    "#....#...#...#....#",
    "####.###.#.###.####",
    "####.#.......#.####",
    "####.#.#G#G#.#.####",
    "#........ ........#",
    "####.#.#G#G#.#.####",
    "####.#.......#.####",
    "####.#.#####.#.####",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#..#.....P.....#..#",
    "##.#.#.#####.#.#.##",
    "#....#...#...#....#",
    "###################",
]


def parse_layout(rows):
    """
    Convert a layout to a read-only numpy array of tile codes.

    Args:
        rows: list of strings using TILE_LEGEND, or a 2D sequence/array of
              integer TileKind codes

    Returns:
        np.ndarray (height, width) of int, indexed [y, x]
    """
    if rows is None or len(rows) == 0:
        raise LayoutError("Layout is empty")

    widths = {len(row) for row in rows}
    if len(widths) != 1:
        raise LayoutError(f"Layout rows have inconsistent widths: {sorted(widths)}")
    if 0 in widths:
        raise LayoutError("Layout rows are empty")

    if isinstance(rows[0], str):
        codes = []
        for y, row in enumerate(rows):
            for x, symbol in enumerate(row):
                if symbol not in TILE_LEGEND:
                    raise LayoutError(f"Unknown tile symbol {symbol!r} at ({x}, {y})")
            codes.append([int(TILE_LEGEND[symbol]) for symbol in row])
        layout = np.array(codes, dtype=int)
    else:
        layout = np.array(rows, dtype=int)
        if layout.ndim != 2:
            raise LayoutError(f"Layout must be two-dimensional, got shape {layout.shape}")
        known = [int(kind) for kind in TileKind]
        unknown = np.setdiff1d(np.unique(layout), known)
        if unknown.size:
            raise LayoutError(f"Unknown tile codes in layout: {unknown.tolist()}")

    layout.setflags(write=False)
    return layout
