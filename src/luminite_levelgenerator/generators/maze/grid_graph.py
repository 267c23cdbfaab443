#!/usr/bin/env python3
"""
Grid Graph for Maze Generation

This module builds the rectangular lattice that every maze starts from.
Cells are stored in a flat arena and referenced by their row-major index
(index = row * width + col), so the graph never holds references between
cell objects. Each undirected edge between two side-sharing cells means
"a wall stands between these cells"; carving a passage removes the edge.

Author: Luminite Level Generator
License: MIT
"""

from typing import Iterator, List, Set, Tuple


class InvalidArgument(ValueError):
    """Raised when a maze is requested with unusable dimensions."""


class Cell:
    """One grid position in the maze"""

    __slots__ = ('index', 'row', 'col', 'visited')

    def __init__(self, index: int, row: int, col: int):
        self.index = index
        self.row = row
        self.col = col
        self.visited = False

    def __repr__(self) -> str:
        return f"Cell(index={self.index}, row={self.row}, col={self.col}, visited={self.visited})"


class GridGraph:
    """
    Undirected graph over a width x height grid of cells.

    Edges are kept as adjacency sets keyed by cell index. The graph starts
    out as a full 4-neighbour lattice (see GridGraphBuilder) and only ever
    loses edges afterwards.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[Cell] = [
            Cell(row * width + col, row, col)
            for row in range(height)
            for col in range(width)
        ]
        self._adjacency: List[Set[int]] = [set() for _ in range(width * height)]
        self._edge_count = 0

    @property
    def node_count(self) -> int:
        """Number of cells in the grid"""
        return len(self.cells)

    @property
    def edge_count(self) -> int:
        """Number of edges (walls) currently present"""
        return self._edge_count

    @property
    def lattice_edge_count(self) -> int:
        """Number of edges the full lattice of this size has"""
        return self.width * (self.height - 1) + self.height * (self.width - 1)

    def _check_index(self, index: int):
        assert 0 <= index < len(self.cells), f"cell index {index} out of range"

    def index_of(self, row: int, col: int) -> int:
        """Row-major index of the cell at (row, col)"""
        assert 0 <= row < self.height and 0 <= col < self.width, \
            f"cell ({row}, {col}) outside {self.width}x{self.height} grid"
        return row * self.width + col

    def position(self, index: int) -> Tuple[int, int]:
        """(row, col) of the cell with the given index"""
        self._check_index(index)
        return divmod(index, self.width)

    def add_edge(self, a: int, b: int):
        """Add an undirected edge between two cells"""
        self._check_index(a)
        self._check_index(b)
        if b in self._adjacency[a]:
            return
        self._adjacency[a].add(b)
        self._adjacency[b].add(a)
        self._edge_count += 1

    def remove_edge(self, a: int, b: int) -> bool:
        """
        Remove the edge between two cells.

        Returns:
            True if an edge was removed, False if none existed
        """
        self._check_index(a)
        self._check_index(b)
        if b not in self._adjacency[a]:
            return False
        self._adjacency[a].discard(b)
        self._adjacency[b].discard(a)
        self._edge_count -= 1
        return True

    def has_edge(self, a: int, b: int) -> bool:
        self._check_index(a)
        self._check_index(b)
        return b in self._adjacency[a]

    def neighbors(self, index: int) -> List[int]:
        """Indices of cells still joined to this one by an edge, ascending"""
        self._check_index(index)
        return sorted(self._adjacency[index])

    def unvisited_neighbors(self, index: int) -> List[int]:
        """Edge-neighbours of a cell whose visited flag is still False, ascending"""
        return [n for n in self.neighbors(index) if not self.cells[n].visited]

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield every edge once as (a, b) with a < b, in ascending order"""
        for a in range(len(self.cells)):
            for b in sorted(self._adjacency[a]):
                if b > a:
                    yield (a, b)

    def reset_visited(self):
        """Clear the visited flag on every cell"""
        for cell in self.cells:
            cell.visited = False

    def __repr__(self) -> str:
        return f"GridGraph(width={self.width}, height={self.height}, edges={self._edge_count})"


class GridGraphBuilder:
    """Builds the full 4-neighbour lattice for a maze of a given size."""

    @staticmethod
    def build(width: int, height: int) -> GridGraph:
        """
        Build a grid graph with one edge per pair of side-sharing cells.

        Args:
            width: Number of cell columns (must be > 0)
            height: Number of cell rows (must be > 0)

        Returns:
            GridGraph with width * height cells and
            width * (height - 1) + height * (width - 1) edges

        Raises:
            InvalidArgument: If either dimension is not a positive integer
        """
        for name, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"{name} must be an integer, got {type(value).__name__}")
            if value <= 0:
                raise InvalidArgument(f"{name} must be positive, got {value}")

        graph = GridGraph(width, height)
        for row in range(height):
            for col in range(width):
                index = row * width + col
                # Right neighbour
                if col + 1 < width:
                    graph.add_edge(index, index + 1)
                # Neighbour below
                if row + 1 < height:
                    graph.add_edge(index, index + width)
        return graph


def build_grid_graph(width: int, height: int) -> GridGraph:
    """Build the full lattice for a width x height maze"""
    return GridGraphBuilder.build(width, height)
