"""Room placement: one randomly sized and positioned room per leaf region."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.environment.tile_types import TileType
from delve.util.coordinates import Rect

if TYPE_CHECKING:
    from delve.environment.generators.bsp.config import BSPConfig
    from delve.environment.generators.bsp.tree import PartitionNode, PartitionTree
    from delve.environment.grid import OccupancyGrid
    from delve.types import CenterPos, TilePos, TileSize
    from delve.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Room:
    """Axis-aligned room owned by exactly one leaf. Corners are inclusive."""

    node: int
    start: TilePos
    end: TilePos

    @classmethod
    def from_center(cls, node: int, center: CenterPos, size: TileSize) -> Room:
        """Build a room of ``size`` cells centered on ``center``.

        ``center`` and ``size`` must agree in parity (see align_to_grid) for
        the room to sit symmetrically on the center.
        """
        start = (
            math.floor(center[0] - size[0] * 0.5),
            math.floor(center[1] - size[1] * 0.5),
        )
        end = (start[0] + size[0] - 1, start[1] + size[1] - 1)
        return cls(node, start, end)

    @property
    def rect(self) -> Rect:
        return Rect.from_corners(self.start, self.end)

    @property
    def size(self) -> TileSize:
        return (self.end[0] - self.start[0] + 1, self.end[1] - self.start[1] + 1)


def align_to_grid(center: float, size: int) -> tuple[float, int]:
    """Make a real-valued center and an integer size land on whole cells.

    An even extent is centered on a cell boundary (integer center), an odd one
    on the middle of a cell (half-integer center). A mismatched even size grows
    by one; a mismatched odd size has its center moved by half a cell.
    """
    is_whole = center == int(center)
    if size % 2 == 0 and not is_whole:
        size += 1
    elif size % 2 == 1 and is_whole:
        center += 0.5
    return center, size


class RoomPlacer:
    """Derives one room inside every leaf of a partition tree."""

    def __init__(self, config: BSPConfig, rng: RNG) -> None:
        self.config = config
        self.rng = rng

    def place_rooms(
        self, tree: PartitionTree, grid: OccupancyGrid | None = None
    ) -> list[Room]:
        """Create and assign a room for each leaf, in leaf-list order.

        If ``grid`` is given, each room's rectangle is also painted with
        TileType.ROOM.
        """
        rooms = [self.place_room(tree, leaf) for leaf in tree.leaves]
        if grid is not None:
            self.paint_rooms(rooms, grid)
        logger.debug("Placed %d rooms", len(rooms))
        return rooms

    def place_room(self, tree: PartitionTree, leaf: PartitionNode) -> Room:
        padding = self.config.room_padding
        lo, hi = self.config.room_size_ratio_range

        max_size = tuple(max(extent - padding * 2, 1) for extent in leaf.size)
        ratio = self.rng.uniform(lo, hi)
        size = [max(math.floor(extent * ratio), 1) for extent in max_size]

        center = list(leaf.position)
        for axis in (0, 1):
            slack = max((leaf.size[axis] - size[axis] - padding * 2) // 2, 0)
            center[axis] += self.rng.randint(-slack, slack)

        for axis in (0, 1):
            center[axis], size[axis] = align_to_grid(center[axis], size[axis])

        room = Room.from_center(leaf.index, (center[0], center[1]), (size[0], size[1]))
        tree.assign_room(leaf, room)
        return room

    def paint_rooms(self, rooms: list[Room], grid: OccupancyGrid) -> None:
        for room in rooms:
            grid.fill_rectangle(
                TileType.ROOM,
                room.start,
                room.end,
                exclusive=self.config.debug_checks,
            )
