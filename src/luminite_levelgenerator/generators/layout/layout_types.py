#!/usr/bin/env python3
"""
Layout Types for Maze Rasterization

This module rasterizes a carved grid graph into a 2D tile grid. Each maze
cell occupies the odd tile coordinates of a (2 * height + 1) x (2 * width + 1)
grid; the tiles between two cells are floor where a passage was carved and
wall where the edge survived. The outer frame is always wall.

The raster is what the ASCII debug view and the flood-fill checks work on.

Author: Luminite Level Generator
License: MIT
"""

from typing import Dict, List, Set, Tuple
from dataclasses import dataclass, field
from enum import Enum
import numpy as np

from luminite_levelgenerator.generators.maze.grid_graph import GridGraph


class TileType(Enum):
    """Types of tiles in the maze raster"""
    WALL = 0    # Solid wall or pillar
    FLOOR = 1   # Cell interior or carved passage
    START = 2   # Carving start cell
    GOAL = 3    # Cell farthest from the start


@dataclass
class MazeLayout:
    """
    Tile raster of a maze.

    grid is indexed [tile_y, tile_x] and holds TileType values.
    """

    width: int  # Width in maze cells
    height: int  # Height in maze cells
    cell_size: float = 2.0  # World units per maze cell
    grid: np.ndarray = field(init=False)
    metadata: Dict = field(default_factory=dict)

    def __post_init__(self):
        """Start from solid rock"""
        self.grid = np.full((2 * self.height + 1, 2 * self.width + 1),
                            TileType.WALL.value, dtype=np.int8)

    @property
    def tile_width(self) -> int:
        return self.grid.shape[1]

    @property
    def tile_height(self) -> int:
        return self.grid.shape[0]

    @staticmethod
    def cell_tile(row: int, col: int) -> Tuple[int, int]:
        """Tile (x, y) of a maze cell's interior"""
        return (2 * col + 1, 2 * row + 1)

    def set_tile(self, x: int, y: int, tile_type: TileType):
        """Set a tile in the grid"""
        if 0 <= x < self.tile_width and 0 <= y < self.tile_height:
            self.grid[y, x] = tile_type.value

    def get_tile(self, x: int, y: int) -> TileType:
        """Get tile type at position"""
        if 0 <= x < self.tile_width and 0 <= y < self.tile_height:
            return TileType(self.grid[y, x])
        return TileType.WALL

    def is_walkable(self, x: int, y: int) -> bool:
        return self.get_tile(x, y) != TileType.WALL

    @classmethod
    def from_graph(cls, graph: GridGraph, cell_size: float = 2.0) -> 'MazeLayout':
        """
        Rasterize a carved graph.

        Every cell becomes a floor tile. The tile between two neighbouring
        cells stays wall if the graph still has their edge, otherwise it is
        opened as a passage.
        """
        layout = cls(width=graph.width, height=graph.height, cell_size=cell_size)
        for cell in graph.cells:
            x, y = cls.cell_tile(cell.row, cell.col)
            layout.set_tile(x, y, TileType.FLOOR)

            # Right and lower neighbours cover every adjacency once
            if cell.col + 1 < graph.width and not graph.has_edge(cell.index, cell.index + 1):
                layout.set_tile(x + 1, y, TileType.FLOOR)
            if cell.row + 1 < graph.height and not graph.has_edge(cell.index, cell.index + graph.width):
                layout.set_tile(x, y + 1, TileType.FLOOR)
        return layout

    def mark_endpoints(self, start: Tuple[int, int], goal: Tuple[int, int]):
        """Mark start and goal cells, both given as (row, col)"""
        self.set_tile(*self.cell_tile(*start), TileType.START)
        self.set_tile(*self.cell_tile(*goal), TileType.GOAL)

    def get_connected_regions(self) -> List[Set[Tuple[int, int]]]:
        """
        Find all connected walkable regions using flood fill.
        Returns a list of sets, each containing tile coordinates of a connected region.
        """
        visited = set()
        regions = []

        for y in range(self.tile_height):
            for x in range(self.tile_width):
                if (x, y) not in visited and self.is_walkable(x, y):
                    region = self._flood_fill(x, y, visited)
                    if region:
                        regions.append(region)

        return regions

    def _flood_fill(self, start_x: int, start_y: int, visited: Set[Tuple[int, int]]) -> Set[Tuple[int, int]]:
        """Flood fill to find connected walkable tiles"""
        region = set()
        stack = [(start_x, start_y)]

        while stack:
            x, y = stack.pop()

            if (x, y) in visited:
                continue

            if not self.is_walkable(x, y):
                continue

            visited.add((x, y))
            region.add((x, y))

            for dx, dy in [(0, 1), (0, -1), (1, 0), (-1, 0)]:
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.tile_width and 0 <= ny < self.tile_height:
                    stack.append((nx, ny))

        return region

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the raster for common issues.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []

        regions = self.get_connected_regions()
        if len(regions) > 1:
            issues.append(f"Layout has {len(regions)} disconnected regions")
        elif len(regions) == 0:
            issues.append("Layout has no walkable floor")

        # The frame must stay closed
        frame = np.concatenate([self.grid[0, :], self.grid[-1, :], self.grid[:, 0], self.grid[:, -1]])
        if np.any(frame != TileType.WALL.value):
            issues.append("Outer boundary is open")

        # Pillars between four cells never carry floor
        pillars = self.grid[0::2, 0::2]
        if np.any(pillars != TileType.WALL.value):
            issues.append("Corner pillar tile is walkable")

        walkable = int(np.sum(self.grid != TileType.WALL.value))
        expected = 2 * self.width * self.height - 1
        if walkable != expected:
            issues.append(f"Expected {expected} walkable tiles for a perfect maze, found {walkable}")

        return len(issues) == 0, issues

    def to_ascii(self) -> str:
        """
        Render the raster as ASCII for debugging.

        Returns:
            One line per tile row
        """
        char_map = {
            TileType.WALL.value: '#',
            TileType.FLOOR.value: ' ',
            TileType.START.value: 'S',
            TileType.GOAL.value: 'G',
        }

        lines = []
        for y in range(self.tile_height):
            lines.append(''.join(char_map.get(int(v), '?') for v in self.grid[y]))
        return '\n'.join(lines)


def farthest_cell(graph: GridGraph, passages: Set[Tuple[int, int]], start: int = 0) -> Tuple[int, int]:
    """
    Find the cell farthest from start along carved passages.

    Args:
        graph: Carved grid graph
        passages: Carved edges as (low, high) index pairs
        start: Cell index to measure from

    Returns:
        (cell_index, distance_in_steps)
    """
    adjacency: Dict[int, List[int]] = {i: [] for i in range(graph.node_count)}
    for a, b in passages:
        adjacency[a].append(b)
        adjacency[b].append(a)

    distances = {start: 0}
    frontier = [start]
    while frontier:
        next_frontier = []
        for node in frontier:
            for n in sorted(adjacency[node]):
                if n not in distances:
                    distances[n] = distances[node] + 1
                    next_frontier.append(n)
        frontier = next_frontier

    best = max(distances.items(), key=lambda item: (item[1], -item[0]))
    return best
