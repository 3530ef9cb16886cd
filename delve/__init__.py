"""Procedural dungeon layouts by binary space partitioning."""
