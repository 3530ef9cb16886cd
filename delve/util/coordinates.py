"""Integer rectangles and axis helpers for grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass

from delve.types import Axis, TileCoord, TilePos, TileSize, TileStep


@dataclass(frozen=True)
class Rect:
    """Rectangle/bounding box in tile coordinates.

    Both corners are inclusive: ``Rect(0, 0, 0, 0)`` covers exactly one cell.
    """

    x1: TileCoord
    y1: TileCoord
    x2: TileCoord
    y2: TileCoord

    @classmethod
    def from_corners(cls, start: TilePos, end: TilePos) -> Rect:
        """Create a Rect from inclusive (start, end) corner positions."""
        return cls(start[0], start[1], end[0], end[1])

    @property
    def start(self) -> TilePos:
        return (self.x1, self.y1)

    @property
    def end(self) -> TilePos:
        return (self.x2, self.y2)

    @property
    def width(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def height(self) -> int:
        return self.y2 - self.y1 + 1

    @property
    def size(self) -> TileSize:
        return (self.width, self.height)

    def is_empty(self) -> bool:
        """True when the corners are inverted on either axis (covers no cell)."""
        return self.x1 > self.x2 or self.y1 > self.y2

    def contains(self, pos: TilePos) -> bool:
        x, y = pos
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2

    def contains_rect(self, other: Rect) -> bool:
        return (
            self.x1 <= other.x1
            and other.x2 <= self.x2
            and self.y1 <= other.y1
            and other.y2 <= self.y2
        )

    def union(self, other: Rect) -> Rect:
        """Smallest Rect covering both rectangles."""
        return Rect(
            min(self.x1, other.x1),
            min(self.y1, other.y1),
            max(self.x2, other.x2),
            max(self.y2, other.y2),
        )


# =============================================================================
# AXIS HELPERS
# =============================================================================


def make_pos(axis: Axis, along: TileCoord, across: TileCoord) -> TilePos:
    """Build a position from a coordinate on ``axis`` and one on the other axis."""
    if axis == 0:
        return (along, across)
    return (across, along)


def axis_step(axis: Axis, direction: int) -> TileStep:
    """Unit step of ``direction`` (+1/-1) along ``axis``."""
    return make_pos(axis, direction, 0)  # type: ignore[return-value]
