"""Corridor routing between sibling regions of a partition tree.

The router walks the tree bottom-up. Every internal node gets the bounding
rectangle of the rooms below it (its *room range*); the two children's ranges
are intersected on the axis across the split, and a corridor is carved through
the gap between them at a random position inside that overlap.

A straight corridor placed blindly often ends with one corner hanging past a
room wall. To avoid that, the router shifts the candidate across the overlap
and ray-walks from its corners towards each child until both corners on a side
stop on the same wall coordinate (a *clean line*). Walks are bounded by the
joined room ranges, and a line that would cover a room or an earlier corridor
is rejected, so every corridor lies inside its node's room range.

Siblings whose ranges don't overlap are left unconnected at that join. This is
accepted behavior: each side may still be connected through its own children.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.environment.tile_types import TileType, matches
from delve.util.coordinates import Rect, axis_step, make_pos

if TYPE_CHECKING:
    from delve.environment.generators.bsp.config import BSPConfig
    from delve.environment.generators.bsp.tree import PartitionNode, PartitionTree
    from delve.environment.grid import OccupancyGrid
    from delve.types import Axis, TilePos, TileStep
    from delve.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corridor:
    """Rectangle carved to join the two children of ``node``. Corners inclusive."""

    node: int
    start: TilePos
    end: TilePos

    @property
    def rect(self) -> Rect:
        return Rect.from_corners(self.start, self.end)


@dataclass(frozen=True)
class WalkResult:
    """Outcome of a ray walk.

    Attributes:
        hit: True if the walk stopped on a matching tile or the map edge.
            False if it left its bounds or ran out of steps.
        pos: Last cell before the obstacle, edge or bound. After running out
            of steps, the last cell examined.
    """

    hit: bool
    pos: TilePos


def _flush(a: WalkResult, b: WalkResult, axis: Axis) -> bool:
    """Both walks hit something and stopped at the same coordinate."""
    return a.hit and b.hit and a.pos[axis] == b.pos[axis]


class CorridorRouter:
    """Carves corridors joining sibling subtrees of a partition tree."""

    def __init__(self, config: BSPConfig, rng: RNG) -> None:
        self.config = config
        self.rng = rng
        self.corridors: list[Corridor] = []

    @property
    def padding_large(self) -> int:
        return self.config.corridor_size // 2

    @property
    def padding_small(self) -> int:
        return self.config.corridor_size - self.padding_large - 1

    def connect(self, tree: PartitionTree, grid: OccupancyGrid) -> list[Corridor]:
        """Route corridors for the whole tree, children before parents.

        Every leaf must already have a room, and the rooms must already be
        painted on ``grid``.
        """
        self.corridors = []
        if tree.root is not None:
            self._connect_node(tree, tree.root, grid)
        logger.debug("Carved %d corridors", len(self.corridors))
        return self.corridors

    def _connect_node(
        self, tree: PartitionTree, node: PartitionNode, grid: OccupancyGrid
    ) -> None:
        if node.is_leaf:
            assert node.room is not None, f"Leaf {node.index} has no room"
            node.room_range = node.room.rect
            return

        child0, child1 = tree.children_of(node)
        self._connect_node(tree, child0, grid)
        self._connect_node(tree, child1, grid)

        assert child0.room_range is not None and child1.room_range is not None
        node.room_range = child0.room_range.union(child1.room_range)

        corridor = self.route(node, child0.room_range, child1.room_range, grid)
        if corridor is None:
            return

        node.corridor = corridor
        self.corridors.append(corridor)
        grid.fill_rectangle(
            TileType.CORRIDOR,
            corridor.start,
            corridor.end,
            exclusive=self.config.debug_checks,
        )

    def route(
        self,
        node: PartitionNode,
        range0: Rect,
        range1: Rect,
        grid: OccupancyGrid,
    ) -> Corridor | None:
        """Pick the corridor joining two sibling room ranges, or None.

        ``range0`` must lie before ``range1`` along the split axis, which holds
        for the children of any split. The corridor never leaves the union of
        the two ranges, so it stays clear of corridors carved further down.
        """
        # A vertical split puts the children side by side, so the corridor
        # runs along x and is positioned on y.
        axis: Axis = 0 if node.is_split_vertical else 1
        cross: Axis = 1 - axis

        overlap_start = max(range0.start[cross], range1.start[cross])
        overlap_end = min(range0.end[cross], range1.end[cross])
        overlap_start += self.padding_small
        overlap_end -= self.padding_large
        if overlap_start > overlap_end:
            logger.debug(
                "No overlap between children of node %d (%d > %d); left unconnected",
                node.index,
                overlap_start,
                overlap_end,
            )
            return None

        pos = self.rng.randint(overlap_start, overlap_end)
        start = make_pos(axis, range0.end[axis] + 1, pos - self.padding_small)
        end = make_pos(axis, range1.start[axis] - 1, pos + self.padding_large)

        # Padded corners may sit just outside the ranges on the cross axis
        joined = range0.union(range1)
        padding = self.config.corridor_padding
        bounds = Rect.from_corners(
            make_pos(axis, joined.start[axis], joined.start[cross] - padding),
            make_pos(axis, joined.end[axis], joined.end[cross] + padding),
        )

        start, end = self.find_clean_line(
            grid,
            start,
            end,
            axis,
            (overlap_end - pos, pos - overlap_start),
            bounds=bounds,
        )

        corridor = Corridor(node.index, start, end)
        if corridor.rect.is_empty():
            # The two rooms already touch, nothing to carve
            logger.debug(
                "Children of node %d are adjacent; no corridor needed", node.index
            )
            return None
        return corridor

    def find_clean_line(
        self,
        grid: OccupancyGrid,
        start: TilePos,
        end: TilePos,
        axis: Axis,
        slack: tuple[int, int],
        mask: TileType = TileType.SOLID,
        *,
        bounds: Rect | None = None,
    ) -> tuple[TilePos, TilePos]:
        """Shift a candidate corridor across its axis until both ends are flush.

        ``start`` is the corner next to the first child and ``end`` the corner
        next to the second. For every cross-axis offset, first ``0..slack[0]``
        upwards and then ``-1..-slack[1]``, both near-side corners are walked
        towards the first child. If they stop on the same coordinate the
        far-side corners are walked towards the second child, and if those agree
        too the corridor is stretched to the hit positions. A stretched
        corridor that would cover any ``mask`` tile is rejected and the next
        offset is tried.

        The corners are widened by ``corridor_padding`` on the cross axis so the
        walls beside a corridor are flush as well. Walks stop at the edge of
        ``bounds`` when given. Returns the unchanged candidate if no offset
        produces a clean line.
        """
        cross: Axis = 1 - axis
        backward = axis_step(axis, -1)
        forward = axis_step(axis, 1)

        if self.config.corridor_size == 1 and self.config.corridor_padding == 0:
            return (
                self.walk_until_hit(grid, start, backward, mask, bounds=bounds).pos,
                self.walk_until_hit(grid, end, forward, mask, bounds=bounds).pos,
            )

        padding = self.config.corridor_padding
        near = start[axis]
        far = end[axis]
        low = start[cross] - padding
        high = end[cross] + padding

        forward_offsets = range(0, slack[0] + 1)
        backward_offsets = range(-1, -slack[1] - 1, -1)
        for offsets in (forward_offsets, backward_offsets):
            for offset in offsets:
                line = self._try_line(
                    grid, axis, near, far, low + offset, high + offset, mask, bounds
                )
                if line is None:
                    continue
                # Remove padding
                line_start, line_end = line
                line_start = make_pos(
                    axis, line_start[axis], line_start[cross] + padding
                )
                line_end = make_pos(axis, line_end[axis], line_end[cross] - padding)
                if not grid.any_in_rect(mask, line_start, line_end):
                    return line_start, line_end

        logger.debug(
            "No clean line for corridor %s..%s; using unadjusted candidate", start, end
        )
        return start, end

    def _try_line(
        self,
        grid: OccupancyGrid,
        axis: Axis,
        near: int,
        far: int,
        low: int,
        high: int,
        mask: TileType,
        bounds: Rect | None,
    ) -> tuple[TilePos, TilePos] | None:
        """Walk the four corners of one candidate; return the snapped line."""
        backward = axis_step(axis, -1)
        forward = axis_step(axis, 1)

        near_low = self.walk_until_hit(
            grid, make_pos(axis, near, low), backward, mask, bounds=bounds
        )
        near_high = self.walk_until_hit(
            grid, make_pos(axis, near, high), backward, mask, bounds=bounds
        )
        if not _flush(near_low, near_high, axis):
            return None

        far_low = self.walk_until_hit(
            grid, make_pos(axis, far, low), forward, mask, bounds=bounds
        )
        far_high = self.walk_until_hit(
            grid, make_pos(axis, far, high), forward, mask, bounds=bounds
        )
        if not _flush(far_low, far_high, axis):
            return None

        return near_low.pos, far_high.pos

    def walk_until_hit(
        self,
        grid: OccupancyGrid,
        start: TilePos,
        step: TileStep,
        mask: TileType = TileType.SOLID,
        *,
        bounds: Rect | None = None,
    ) -> WalkResult:
        """Step from ``start`` until the next cell matches ``mask`` or leaves the map.

        Returns the last cell before the obstacle. Leaving ``bounds`` stops the
        walk without a hit. The walk gives up after ``max_axis_size`` steps,
        which a walk starting on the map never needs.
        """
        x, y = start
        dx, dy = step
        for _ in range(self.config.max_axis_size):
            x += dx
            y += dy
            if not grid.in_bounds(x, y):
                return WalkResult(True, (x - dx, y - dy))
            if bounds is not None and not bounds.contains((x, y)):
                return WalkResult(False, (x - dx, y - dy))
            if matches(grid.get(x, y), mask):
                return WalkResult(True, (x - dx, y - dy))

        logger.error(
            "Ray walk from %s in direction %s found no hit after %d steps",
            start,
            step,
            self.config.max_axis_size,
        )
        return WalkResult(False, (x, y))
