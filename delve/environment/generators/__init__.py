"""Map generation algorithms for delve.

This package provides:
- BSPDungeonGenerator: Rooms in binary-space-partitioned regions, joined by
  corridors aligned to the walls they connect
"""

from .base import BaseMapGenerator, GeneratedMapData
from .bsp import BSPConfig, BSPDungeonGenerator

__all__ = [
    "BSPConfig",
    "BSPDungeonGenerator",
    "BaseMapGenerator",
    "GeneratedMapData",
]
