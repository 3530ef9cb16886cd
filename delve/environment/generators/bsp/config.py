"""Generation parameters for the BSP dungeon generator."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TypeVar

from delve import config
from delve.types import TileSize

logger = logging.getLogger(__name__)

# Upper bound on recursion depth; 2**25 leaves is far past any usable map.
MAX_DEPTH = 25


N = TypeVar("N", int, float)


def _clamp(value: N, low: N, high: N) -> N:
    return max(low, min(value, high))


@dataclass(frozen=True)
class BSPConfig:
    """Parameters for one generation run. Read-only while a run is in progress.

    Attributes:
        size: Map size (W, H) in cells.
        depth: Maximum recursion depth of the partition tree.
        ratio_spread: Width of the split-ratio range centered on 0.5.
        node_min_size: Smallest region extent (per axis) a split may produce.
        is_balanced: Split along the longer axis instead of alternating.
        room_size_ratio_range: (lo, hi) fraction of the padded leaf a room fills.
        room_padding: Cells kept free between a room and its region's edge.
        corridor_size: Corridor thickness on its cross axis.
        corridor_padding: Extra cells checked on each side of a corridor when
            searching for a clean line.
        debug_checks: Raise TileOverlapError on overlapping rooms/corridors.
    """

    size: TileSize = (config.MAP_WIDTH, config.MAP_HEIGHT)
    depth: int = config.BSP_DEPTH
    ratio_spread: float = config.BSP_RATIO_SPREAD
    node_min_size: TileSize = config.BSP_NODE_MIN_SIZE
    is_balanced: bool = config.BSP_IS_BALANCED
    room_size_ratio_range: tuple[float, float] = config.ROOM_SIZE_RATIO_RANGE
    room_padding: int = config.ROOM_PADDING
    corridor_size: int = config.CORRIDOR_SIZE
    corridor_padding: int = config.CORRIDOR_PADDING
    debug_checks: bool = config.GENERATION_DEBUG_CHECKS

    # --- Derived values ---

    @property
    def min_ratio(self) -> float:
        return 0.5 - self.ratio_spread * 0.5

    @property
    def max_ratio(self) -> float:
        return 0.5 + self.ratio_spread * 0.5

    @property
    def max_axis_size(self) -> int:
        """Longest map axis. Caps the length of every ray walk."""
        return max(self.size)

    def validated(self) -> BSPConfig:
        """Return a copy with every value clamped into its supported range.

        Logs a warning (but still returns the config) when the minimum node
        size cannot hold the room padding plus a padded corridor.
        """
        width, height = self.size
        min_x, min_y = self.node_min_size
        lo, hi = self.room_size_ratio_range
        clamped = dataclasses.replace(
            self,
            size=(max(1, width), max(1, height)),
            depth=_clamp(self.depth, 0, MAX_DEPTH),
            ratio_spread=_clamp(self.ratio_spread, 0.0, 1.0),
            node_min_size=(max(1, min_x), max(1, min_y)),
            room_size_ratio_range=(_clamp(lo, 0.2, 1.0), _clamp(hi, 0.2, 1.0)),
            room_padding=_clamp(self.room_padding, 0, 3),
            corridor_size=_clamp(self.corridor_size, 1, 5),
            corridor_padding=_clamp(self.corridor_padding, 0, 3),
        )

        needed = (
            clamped.room_padding * 2 + clamped.corridor_size + clamped.corridor_padding
        )
        if min(clamped.node_min_size) < needed:
            logger.warning(
                "node_min_size %s is too small to fit room_padding=%d, "
                "corridor_size=%d and corridor_padding=%d (needs %d per axis)",
                clamped.node_min_size,
                clamped.room_padding,
                clamped.corridor_size,
                clamped.corridor_padding,
                needed,
            )
        return clamped
