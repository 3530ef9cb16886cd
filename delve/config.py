"""
Configuration constants.

Centralizes the default values used when a caller does not provide its own
generation parameters. Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "burrito1"

# =============================================================================
# MAP LAYOUT
# =============================================================================

MAP_WIDTH = 80
MAP_HEIGHT = 48

# Number of times the map area is recursively halved. A depth of N produces at
# most 2**N leaf regions, fewer when regions hit the minimum size first.
BSP_DEPTH = 5

# Split ratios are drawn from [0.5 - spread/2, 0.5 + spread/2].
BSP_RATIO_SPREAD = 0.4

# Smallest region extent (per axis) a split may produce.
BSP_NODE_MIN_SIZE = (8, 6)

# Always split along the longer axis instead of alternating.
BSP_IS_BALANCED = True

# =============================================================================
# ROOMS & CORRIDORS
# =============================================================================

# Fraction of the padded leaf area a room occupies, drawn per room.
ROOM_SIZE_RATIO_RANGE = (0.5, 1.0)

# Empty cells kept between a room and the edge of its region.
ROOM_PADDING = 1

# Corridor thickness on its cross axis.
CORRIDOR_SIZE = 1

# Extra cells checked on each side of a corridor when looking for a clean line.
# Not enforced: if no clean line exists the corridor is carved anyway.
CORRIDOR_PADDING = 0

# =============================================================================
# DEBUG
# =============================================================================

# Raise TileOverlapError when a room or corridor is painted over cells of the
# same kind. Off by default since overlapping corridors only degrade the layout.
GENERATION_DEBUG_CHECKS = False

# Log per-phase timings (tree, rooms, painting, corridors) at DEBUG level.
LOG_GENERATION_TIMINGS = True
