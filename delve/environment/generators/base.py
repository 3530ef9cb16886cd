"""Base classes for map generation."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from delve.environment.grid import OccupancyGrid

if TYPE_CHECKING:
    from delve.environment.generators.bsp.corridors import Corridor
    from delve.environment.generators.bsp.rooms import Room
    from delve.environment.generators.bsp.tree import PartitionTree
    from delve.types import TileCoord


@dataclass
class GeneratedMapData:
    """A container for all raw data produced by a map generator.

    Attributes:
        grid: The occupancy grid the generator painted into.
        tree: The partition tree the layout was derived from.
        rooms: One Room per leaf, in leaf-list order.
        corridors: Carved corridors, in the post-order they were routed.
    """

    grid: OccupancyGrid
    tree: PartitionTree | None = None
    rooms: list[Room] = field(default_factory=list)
    corridors: list[Corridor] = field(default_factory=list)

    @property
    def tiles(self) -> np.ndarray:
        """2D numpy array of TileType values. Shape: (width, height)."""
        return self.grid.tiles


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation algorithms."""

    def __init__(self, map_width: TileCoord, map_height: TileCoord) -> None:
        self.map_width = map_width
        self.map_height = map_height

    @abc.abstractmethod
    def generate(self) -> GeneratedMapData:
        """Generate the map layout and its structural data."""
        raise NotImplementedError
