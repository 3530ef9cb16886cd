"""
Tile types for the occupancy grid.

Tiles are stored in the grid as raw ``uint8`` values so the whole map fits in
one NumPy array. Each non-empty kind owns a single bit, which lets callers ask
"is this cell any of these kinds?" with a mask such as ``TileType.SOLID``.

``EMPTY`` is the zero bit pattern. It is excluded from every mask test
explicitly, because ``EMPTY & mask == EMPTY`` holds for any mask.
"""

from enum import IntFlag

import numpy as np


class TileType(IntFlag):
    EMPTY = 0

    ROOM = 1 << 0
    CORRIDOR = 1 << 1
    DOOR = 1 << 2

    SOLID = ROOM | CORRIDOR | DOOR


def matches(tile: TileType | int, mask: TileType | int) -> bool:
    """True if ``tile`` is non-empty and all of its bits are set in ``mask``."""
    tile = int(tile)
    return tile != TileType.EMPTY and (int(mask) & tile) == tile


def get_mask_map(tiles: np.ndarray, mask: TileType | int) -> np.ndarray:
    """Boolean array, same shape as ``tiles``, of the cells matching ``mask``.

    Vectorized form of ``matches`` for whole-grid queries.
    """
    mask_value = np.uint8(int(mask))
    return (tiles != TileType.EMPTY) & ((tiles & mask_value) == tiles)


# Single-character glyphs used by OccupancyGrid.to_lines() for logs and tests.
TILE_GLYPHS: dict[TileType, str] = {
    TileType.EMPTY: "#",
    TileType.ROOM: ".",
    TileType.CORRIDOR: ",",
    TileType.DOOR: "+",
}
