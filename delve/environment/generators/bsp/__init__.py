"""Binary space partition dungeon generation.

The generation run happens in three phases, each in its own module:
- tree: PartitionTree recursively splits the map into regions
- rooms: RoomPlacer puts one room inside every leaf region
- corridors: CorridorRouter joins sibling regions bottom-up

BSPDungeonGenerator runs the phases in order on a shared OccupancyGrid.
"""

from .config import BSPConfig
from .corridors import Corridor, CorridorRouter, WalkResult
from .generator import BSPDungeonGenerator
from .rooms import Room, RoomPlacer, align_to_grid
from .tree import PartitionNode, PartitionTree

__all__ = [
    "BSPConfig",
    "BSPDungeonGenerator",
    "Corridor",
    "CorridorRouter",
    "PartitionNode",
    "PartitionTree",
    "Room",
    "RoomPlacer",
    "WalkResult",
    "align_to_grid",
]
