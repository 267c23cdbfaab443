"""
Maze Generator Module

Grid graph construction and randomized depth-first carving for the
procedural maze levels of the Luminite world.
"""

from .grid_graph import (
    Cell,
    GridGraph,
    GridGraphBuilder,
    InvalidArgument,
    build_grid_graph,
)
from .maze_carver import (
    CarverState,
    CarveResult,
    MazeCarver,
    carve_maze,
    resolve_random_source,
)

__all__ = [
    'Cell',
    'GridGraph',
    'GridGraphBuilder',
    'InvalidArgument',
    'build_grid_graph',
    'CarverState',
    'CarveResult',
    'MazeCarver',
    'carve_maze',
    'resolve_random_source',
]

__version__ = '1.0.0'
