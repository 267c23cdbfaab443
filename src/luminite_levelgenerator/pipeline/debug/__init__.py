"""Debug utilities for the generation pipeline."""

from .graph_export import export_maze_dot, export_maze_json, maze_statistics

__all__ = ['export_maze_dot', 'export_maze_json', 'maze_statistics']
