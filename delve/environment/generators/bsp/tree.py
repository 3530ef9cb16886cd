"""Binary space partition of the map area.

The tree recursively splits the map rectangle into two child regions until the
configured depth is reached or a region is too small to split again. Nodes live
in a flat arena (``PartitionTree.nodes``) and refer to each other by index, so
parent links are plain lookups rather than owning references.

Splitting consumes random numbers depth-first, child 0 before child 1. Leaves
are collected breadth-first. Both orders are part of the determinism contract:
room placement walks the leaf list in order, so changing either order changes
every layout produced from a given seed.

Illustration of a vertical split (flip x and y for a horizontal split)::

    |<---- child0 ---->|<--------------- child1 --------------->|
    |        x0        |         x            x1                |
    ^ start of region           x = parent center, x0/x1 = child centers
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.util.coordinates import Rect

if TYPE_CHECKING:
    from delve.environment.generators.bsp.config import BSPConfig
    from delve.environment.generators.bsp.corridors import Corridor
    from delve.environment.generators.bsp.rooms import Room
    from delve.types import Axis, CenterPos, TilePos, TileSize
    from delve.util.rng import RNG

logger = logging.getLogger(__name__)


@dataclass
class PartitionNode:
    """One region of the partition.

    Attributes:
        index: Position of this node in its tree's arena.
        parent: Arena index of the parent, None for the root.
        position: Center of the region. Sits on a half cell for odd extents.
        size: Extent of the region in cells.
        depth: Remaining split depth; the root holds the configured depth.
        is_split_vertical: True if the region was cut along x (children side by
            side). Only meaningful for internal nodes.
        children: Arena indices of the two children, None for a leaf.
        room: The leaf's room once rooms have been placed.
        room_range: Bounding rectangle of every room below this node, filled in
            by corridor routing.
        corridor: Corridor joining this node's children, if one was carved.
    """

    index: int
    parent: int | None
    position: CenterPos
    size: TileSize
    depth: int
    is_split_vertical: bool = False
    children: tuple[int, int] | None = None
    room: Room | None = None
    room_range: Rect | None = None
    corridor: Corridor | None = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def start(self) -> TilePos:
        """Lowest cell of the region (inclusive)."""
        return (
            math.floor(self.position[0] - self.size[0] * 0.5),
            math.floor(self.position[1] - self.size[1] * 0.5),
        )

    @property
    def end(self) -> TilePos:
        """Highest cell of the region (inclusive)."""
        x, y = self.start
        return (x + self.size[0] - 1, y + self.size[1] - 1)

    @property
    def rect(self) -> Rect:
        return Rect.from_corners(self.start, self.end)


def _split_axis(split_vertical: bool) -> Axis:
    return 0 if split_vertical else 1


class PartitionTree:
    """Arena-backed binary partition of the map area."""

    def __init__(self, config: BSPConfig) -> None:
        self.config = config
        self.nodes: list[PartitionNode] = []
        self.leaves: list[PartitionNode] = []

    @property
    def root(self) -> PartitionNode | None:
        return self.nodes[0] if self.nodes else None

    def generate(self, rng: RNG) -> list[PartitionNode]:
        """Build a fresh tree covering the whole map and return its leaves.

        The first random draw picks the root's split orientation; splits then
        consume the stream depth-first, child 0 before child 1.
        """
        self.clear()
        width, height = self.config.size
        root = self.add_root((width, height), self.config.depth)
        self._generate_node(root, rng.random() > 0.5, rng)
        self.collect_leaves()
        logger.debug(
            "Partitioned %dx%d map into %d leaves (%d nodes, depth %d)",
            width,
            height,
            len(self.leaves),
            len(self.nodes),
            self.config.depth,
        )
        return self.leaves

    def _generate_node(
        self, node: PartitionNode, split_vertical: bool, rng: RNG
    ) -> None:
        if node.depth == 0:
            return

        if self.config.is_balanced:
            split_vertical = node.size[0] > node.size[1]

        if not self.can_split(node, split_vertical):
            return

        ratio = rng.uniform(self.config.min_ratio, self.config.max_ratio)
        child0, child1 = self.split(node.index, split_vertical, ratio)
        self._generate_node(child0, not split_vertical, rng)
        self._generate_node(child1, not split_vertical, rng)

    def add_root(self, size: TileSize, depth: int) -> PartitionNode:
        """Start a new tree whose root region spans ``size`` from (0, 0)."""
        if self.nodes:
            raise ValueError("Tree already has a root; call clear() first")
        return self._add_node(None, (size[0] * 0.5, size[1] * 0.5), size, depth)

    def _add_node(
        self,
        parent: int | None,
        position: CenterPos,
        size: TileSize,
        depth: int,
    ) -> PartitionNode:
        node = PartitionNode(
            index=len(self.nodes),
            parent=parent,
            position=position,
            size=size,
            depth=depth,
        )
        self.nodes.append(node)
        return node

    def can_split(self, node: PartitionNode, split_vertical: bool) -> bool:
        """True if both children of this split can meet the minimum size."""
        axis = _split_axis(split_vertical)
        return node.size[axis] >= self.config.node_min_size[axis] * 2

    def split(
        self, index: int, split_vertical: bool, ratio: float
    ) -> tuple[PartitionNode, PartitionNode]:
        """Split a leaf into two children that exactly tile its region.

        The first child's extent along the split axis is
        ``int(ratio * (axis_size - 2 * min_size)) + min_size``; the second child
        takes the remainder. ``ratio`` must lie in [0, 1].

        Raises:
            ValueError: If the node already has children or is too small to
                give both children the minimum size.
        """
        node = self.nodes[index]
        if not node.is_leaf:
            raise ValueError(f"Node {index} is already split")
        if not self.can_split(node, split_vertical):
            raise ValueError(
                f"Node {index} of size {node.size} is too small to split "
                f"{'vertically' if split_vertical else 'horizontally'}"
            )

        axis = _split_axis(split_vertical)
        axis_size = node.size[axis]
        min_size = self.config.node_min_size[axis]
        axis_start = node.start[axis]

        # (axis_size - min_size * 2) is the free space the ratio moves the cut in
        child0_size = int(ratio * (axis_size - min_size * 2)) + min_size
        child1_size = axis_size - child0_size
        child0_pos = axis_start + child0_size * 0.5
        child1_pos = axis_start + child0_size + child1_size * 0.5

        if split_vertical:
            positions = ((child0_pos, node.position[1]), (child1_pos, node.position[1]))
            sizes = ((child0_size, node.size[1]), (child1_size, node.size[1]))
        else:
            positions = ((node.position[0], child0_pos), (node.position[0], child1_pos))
            sizes = ((node.size[0], child0_size), (node.size[0], child1_size))

        child0 = self._add_node(index, positions[0], sizes[0], node.depth - 1)
        child1 = self._add_node(index, positions[1], sizes[1], node.depth - 1)
        node.is_split_vertical = split_vertical
        node.children = (child0.index, child1.index)
        return child0, child1

    def children_of(self, node: PartitionNode) -> tuple[PartitionNode, PartitionNode]:
        if node.children is None:
            raise ValueError(f"Node {node.index} is a leaf")
        first, second = node.children
        return self.nodes[first], self.nodes[second]

    def parent_of(self, node: PartitionNode) -> PartitionNode | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def assign_room(self, node: PartitionNode, room: Room) -> None:
        """Attach a room to a leaf. Each leaf hosts exactly one room."""
        assert node.is_leaf, f"Node {node.index} is not a leaf"
        assert node.room is None, f"Node {node.index} already has a room"
        node.room = room

    def collect_leaves(self) -> list[PartitionNode]:
        """Refresh and return ``leaves`` after the tree has been (re)built."""
        self.leaves = self.get_nodes(only_leaves=True)
        return self.leaves

    def get_nodes(self, only_leaves: bool) -> list[PartitionNode]:
        """Nodes in breadth-first order, optionally only the leaves."""
        nodes: list[PartitionNode] = []
        if self.root is None:
            return nodes

        queue: deque[PartitionNode] = deque([self.root])
        while queue:
            current = queue.popleft()
            if current.is_leaf:
                nodes.append(current)
            else:
                queue.extend(self.children_of(current))
                if not only_leaves:
                    nodes.append(current)
        return nodes

    def clear(self) -> None:
        """Discard every node so the tree can be regenerated."""
        self.nodes.clear()
        self.leaves = []
