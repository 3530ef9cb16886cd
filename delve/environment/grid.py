"""Occupancy grid: the tile array that map generation paints into.

Cells hold raw TileType values. Generators fill rectangles and run mask
queries against it; nothing here knows about rooms or corridors beyond the
tile kinds.
"""

from __future__ import annotations

import logging

import numpy as np

from delve.environment.tile_types import TILE_GLYPHS, TileType, get_mask_map
from delve.types import TileCoord, TilePos, TileSize

logger = logging.getLogger(__name__)


class TileOverlapError(Exception):
    """Raised by an exclusive fill that would paint over matching tiles.

    Rooms are disjoint by construction of the partition and every corridor
    stays inside its own node's room range, so this signals a geometry bug.
    """


class OccupancyGrid:
    """The 2D array of tile states that generation paints into and queries.

    Tiles are stored as ``uint8`` TileType values in a NumPy array of shape
    (width, height), indexed ``tiles[x, y]``.
    """

    def __init__(self, width: TileCoord = 0, height: TileCoord = 0) -> None:
        self.width: TileCoord = 0
        self.height: TileCoord = 0
        self.tiles = np.zeros((0, 0), dtype=np.uint8, order="F")
        if width > 0 and height > 0:
            self.setup((width, height))

    @property
    def size(self) -> TileSize:
        return (self.width, self.height)

    def setup(self, size: TileSize) -> None:
        """Allocate a ``W x H`` grid with every cell EMPTY.

        Any previous contents are discarded.
        """
        width, height = size
        self.width = width
        self.height = height
        self.tiles = np.full(
            (width, height),
            fill_value=TileType.EMPTY,
            dtype=np.uint8,
            order="F",
        )
        logger.debug("Initialized OccupancyGrid %dx%d", width, height)

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: TileCoord, y: TileCoord) -> TileType:
        """Return the tile at (x, y).

        Raises IndexError if out of bounds; walkers should check in_bounds first.
        """
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Coordinates out of bounds: ({x}, {y}) "
                f"for grid {self.width}x{self.height}"
            )
        return TileType(int(self.tiles[x, y]))

    def fill_rectangle(
        self,
        tile: TileType,
        start: TilePos,
        end: TilePos,
        *,
        exclusive: bool = False,
    ) -> None:
        """Fill the inclusive rectangle from ``start`` to ``end`` with ``tile``.

        The caller guarantees ``start <= end`` on both axes and that the
        rectangle lies inside the grid.

        Args:
            tile: Tile type to paint.
            start: Inclusive lower corner.
            end: Inclusive upper corner.
            exclusive: If True, raise TileOverlapError instead of painting when
                any cell in the rectangle already holds ``tile``.
        """
        (x1, y1), (x2, y2) = start, end
        if exclusive and self.any_in_rect(tile, start, end):
            raise TileOverlapError(
                f"{tile.name} fill {start}..{end} overlaps existing {tile.name} tiles"
            )
        self.tiles[x1 : x2 + 1, y1 : y2 + 1] = tile

    def any_in_rect(self, mask: TileType, start: TilePos, end: TilePos) -> bool:
        """True if any cell in the inclusive rectangle matches ``mask``."""
        (x1, y1), (x2, y2) = start, end
        region = self.tiles[x1 : x2 + 1, y1 : y2 + 1]
        return bool(np.any(get_mask_map(region, mask)))

    def mask(self, mask: TileType) -> np.ndarray:
        """Boolean (width, height) array of the cells matching ``mask``."""
        return get_mask_map(self.tiles, mask)

    def count(self, mask: TileType) -> int:
        """Number of cells matching ``mask``."""
        return int(np.count_nonzero(self.mask(mask)))

    def to_lines(self) -> list[str]:
        """ASCII rows of the grid, top row (y=0) first, for logs and tests."""
        rows: list[str] = []
        for y in range(self.height):
            glyphs = (TILE_GLYPHS.get(TileType(int(v)), "?") for v in self.tiles[:, y])
            rows.append("".join(glyphs))
        return rows

    def __repr__(self) -> str:
        return f"OccupancyGrid(width={self.width}, height={self.height})"
