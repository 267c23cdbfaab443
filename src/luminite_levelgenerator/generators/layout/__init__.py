"""
Layout Types Module for Maze Rasterization

This module provides the tile raster used to inspect and validate carved
mazes before their walls are placed in the 3D world.
"""

from .layout_types import (
    MazeLayout,
    TileType,
    farthest_cell,
)

__all__ = [
    'MazeLayout',
    'TileType',
    'farthest_cell',
]

__version__ = '1.0.0'
