"""
Maze to world conversion package.

Handles conversion from carved maze graphs to wall placements and meshes.
"""

from .wall_materializer import (
    CELL_SIZE,
    Location,
    WallMaterializer,
    WallOrientation,
    WallSegment,
    export_walls_json,
    materialize_walls,
)

__all__ = [
    'CELL_SIZE',
    'Location',
    'WallMaterializer',
    'WallOrientation',
    'WallSegment',
    'export_walls_json',
    'materialize_walls',
]
