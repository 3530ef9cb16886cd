"""BSP dungeon generator: partition, rooms, then corridors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve import config as defaults
from delve.environment.generators.base import BaseMapGenerator, GeneratedMapData
from delve.environment.grid import OccupancyGrid
from delve.util.performance import measure_block
from delve.util.rng import RNGProvider

from .config import BSPConfig
from .corridors import CorridorRouter
from .rooms import RoomPlacer
from .tree import PartitionTree

if TYPE_CHECKING:
    from delve.types import RandomSeed

logger = logging.getLogger(__name__)

# Independent random streams per phase: tweaking how one phase draws numbers
# must not reshuffle the others.
TREE_RNG_DOMAIN = "map.bsp.tree"
ROOMS_RNG_DOMAIN = "map.bsp.rooms"
CORRIDORS_RNG_DOMAIN = "map.bsp.corridors"


class BSPDungeonGenerator(BaseMapGenerator):
    """Generates a map by binary space partitioning.

    The map area is split recursively into regions, each leaf region receives
    one room, and sibling regions are joined bottom-up by straight corridors.

    Example:
        generator = BSPDungeonGenerator(BSPConfig(size=(80, 48), depth=5), seed=42)
        map_data = generator.generate()
        print("\\n".join(map_data.grid.to_lines()))

    Attributes:
        config: Validated generation parameters.
        seed: Master seed; None gives a different layout on every run.
        generate_rooms: Place rooms in the leaves. Without rooms there is
            nothing to route between, so the grid stays empty.
        generate_corridors: Route corridors after painting the rooms.
    """

    def __init__(
        self,
        config: BSPConfig | None = None,
        seed: RandomSeed = defaults.RANDOM_SEED,
        *,
        generate_rooms: bool = True,
        generate_corridors: bool = True,
    ) -> None:
        self.config = (config or BSPConfig()).validated()
        width, height = self.config.size
        super().__init__(width, height)
        self.seed = seed
        self.generate_rooms = generate_rooms
        self.generate_corridors = generate_corridors
        self.tree: PartitionTree | None = None

    def generate(self) -> GeneratedMapData:
        """Run one full generation pass and return the resulting layout.

        Each call starts from scratch: the tree and grid are rebuilt and the
        random streams restart from the seed, so repeated calls with the same
        seed return identical layouts.
        """
        provider = RNGProvider(self.seed)
        self.tree = tree = PartitionTree(self.config)
        grid = OccupancyGrid(*self.config.size)
        data = GeneratedMapData(grid=grid, tree=tree)

        with measure_block("bsp.tree") as timing:
            tree.generate(provider.get(TREE_RNG_DOMAIN))
        self._log_timing(timing.name, timing.elapsed_ms)

        if not self.generate_rooms:
            return data

        with measure_block("bsp.rooms") as timing:
            placer = RoomPlacer(self.config, provider.get(ROOMS_RNG_DOMAIN))
            data.rooms = placer.place_rooms(tree)
        self._log_timing(timing.name, timing.elapsed_ms)

        with measure_block("bsp.paint_rooms") as timing:
            placer.paint_rooms(data.rooms, grid)
        self._log_timing(timing.name, timing.elapsed_ms)

        if self.generate_corridors:
            with measure_block("bsp.corridors") as timing:
                router = CorridorRouter(self.config, provider.get(CORRIDORS_RNG_DOMAIN))
                data.corridors = router.connect(tree, grid)
            self._log_timing(timing.name, timing.elapsed_ms)

        logger.info(
            "Generated %dx%d BSP map (seed=%s): %d rooms, %d corridors",
            self.map_width,
            self.map_height,
            self.seed,
            len(data.rooms),
            len(data.corridors),
        )
        return data

    @staticmethod
    def _log_timing(name: str, elapsed_ms: float) -> None:
        if defaults.LOG_GENERATION_TIMINGS:
            logger.debug("%s took %.3fms", name, elapsed_ms)
