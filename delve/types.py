from __future__ import annotations

from typing import Literal

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================


TileCoord = int  # Always integer tile position

# Grid coordinates - absolute cell positions on the occupancy grid
TilePos = tuple[TileCoord, TileCoord]  # Example: (5, 3) = cell 5,3 on the grid

# Extent of a region or room in cells along each axis
TileSize = tuple[int, int]  # Example: (8, 16) = 8 cells wide, 16 cells tall

# Unit step used when walking across the grid
TileStep = tuple[Literal[-1, 0, 1], Literal[-1, 0, 1]]

# =============================================================================
# REAL-VALUED POSITIONS
# =============================================================================

# Center of a partition region or room. Regions with an odd extent have their
# center on a half cell (e.g. a 9-wide region starting at 0 has x=4.5).
CenterCoord = float
CenterPos = tuple[CenterCoord, CenterCoord]

# Axis selector: 0 = x, 1 = y
Axis = Literal[0, 1]

# =============================================================================
# GENERATION-RELATED TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed = int | str | None
