"""
Luminite Level Generator

Procedural maze levels for the Luminite world: a grid graph is carved into a
perfect maze by randomized depth-first search and its remaining walls are
turned into placement descriptors for the renderer.
"""

from .generators.maze import GridGraph, GridGraphBuilder, InvalidArgument, MazeCarver
from .conversion.wall_materializer import WallMaterializer, WallOrientation, WallSegment
from .pipeline.maze_pipeline import MazePipeline, PipelineSettings, generate_maze

__all__ = [
    'GridGraph',
    'GridGraphBuilder',
    'InvalidArgument',
    'MazeCarver',
    'WallMaterializer',
    'WallOrientation',
    'WallSegment',
    'MazePipeline',
    'PipelineSettings',
    'generate_maze',
]

__version__ = '1.0.0'
