"""
Structural checks for generated mazes.

Rule codes:
    MAZE-001  Lattice has the wrong number of edges
    MAZE-002  Lattice edge joins cells that are not side neighbours
    MAZE-003  Lattice is missing a side-neighbour edge
    MAZE-010  Carved passage count is not node_count - 1
    MAZE-011  Carved passages leave cells unreachable
    MAZE-012  Carved passages contain a cycle
    MAZE-013  Carved passage joins cells that are not side neighbours
    MAZE-020  Wall count doesn't match the remaining edges
    MAZE-021  Visited flags were left set after carving
    MAZE-030  Tile raster of the carved grid is not a perfect maze
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from luminite_levelgenerator.generators.layout.layout_types import MazeLayout
from luminite_levelgenerator.generators.maze.grid_graph import GridGraph
from .core import Severity, ValidationResult, ValidationStage

logger = logging.getLogger(__name__)


def _are_side_neighbours(width: int, a: int, b: int) -> bool:
    low, high = min(a, b), max(a, b)
    if high - low == 1:
        return low // width == high // width
    return high - low == width


def check_lattice(graph: GridGraph) -> ValidationResult:
    """Check that an uncarved graph is exactly the 4-neighbour lattice."""
    result = ValidationResult(stage=ValidationStage.LATTICE)

    if graph.edge_count != graph.lattice_edge_count:
        result.add(Severity.FAIL, "MAZE-001",
                   f"Lattice has {graph.edge_count} edges, expected {graph.lattice_edge_count}")

    for a, b in graph.edges():
        if not _are_side_neighbours(graph.width, a, b):
            result.add(Severity.FAIL, "MAZE-002",
                       f"Edge joins non-adjacent cells {a} and {b}",
                       edge=(a, b))

    for cell in graph.cells:
        if cell.col + 1 < graph.width and not graph.has_edge(cell.index, cell.index + 1):
            result.add(Severity.FAIL, "MAZE-003", "Missing edge to right neighbour",
                       cell=cell.index)
        if cell.row + 1 < graph.height and not graph.has_edge(cell.index, cell.index + graph.width):
            result.add(Severity.FAIL, "MAZE-003", "Missing edge to lower neighbour",
                       cell=cell.index)

    return result


class _DisjointSet:
    """Union-find over cell indices"""

    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, a: int) -> int:
        while self.parent[a] != a:
            self.parent[a] = self.parent[self.parent[a]]
            a = self.parent[a]
        return a

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self.parent[rb] = ra
        return True


def check_spanning_tree(graph: GridGraph, carved_edges: Iterable[Tuple[int, int]]) -> ValidationResult:
    """
    Check that the carved passages form a spanning tree over every cell.

    Args:
        graph: The carved graph (only its size is used)
        carved_edges: Passages as (a, b) pairs in any order

    Returns:
        ValidationResult for the CARVE stage
    """
    result = ValidationResult(stage=ValidationStage.CARVE)
    node_count = graph.node_count
    passages = {(min(a, b), max(a, b)) for a, b in carved_edges}

    if len(passages) != node_count - 1:
        result.add(Severity.FAIL, "MAZE-010",
                   f"{len(passages)} passages carved, a spanning tree needs {node_count - 1}")

    components = _DisjointSet(node_count)
    for a, b in sorted(passages):
        if not _are_side_neighbours(graph.width, a, b):
            result.add(Severity.FAIL, "MAZE-013",
                       f"Passage joins non-adjacent cells {a} and {b}",
                       edge=(a, b))
        if not components.union(a, b):
            result.add(Severity.FAIL, "MAZE-012", "Passage closes a loop",
                       remediation="Carve only into unvisited cells",
                       edge=(a, b))

    roots = {components.find(i) for i in range(node_count)}
    if len(roots) > 1:
        result.add(Severity.FAIL, "MAZE-011",
                   f"Passages split the maze into {len(roots)} disconnected regions")

    return result


def check_raster(graph: GridGraph) -> ValidationResult:
    """Rasterize the carved grid and check the tiles form one closed, loop-free maze."""
    result = ValidationResult(stage=ValidationStage.RASTER)
    _, problems = MazeLayout.from_graph(graph).validate()
    for problem in problems:
        result.add(Severity.FAIL, "MAZE-030", problem)
    return result


def check_wall_count(graph: GridGraph, walls: Sequence, include_perimeter: bool = False) -> ValidationResult:
    """Check that one wall was materialized per remaining edge."""
    result = ValidationResult(stage=ValidationStage.WALLS)

    interior = [w for w in walls if not getattr(w, 'perimeter', False)]
    expected = graph.lattice_edge_count - (graph.node_count - 1)
    if len(interior) != graph.edge_count or len(interior) != expected:
        result.add(Severity.FAIL, "MAZE-020",
                   f"{len(interior)} interior walls for {graph.edge_count} remaining edges "
                   f"(expected {expected})")

    if include_perimeter:
        perimeter = len(walls) - len(interior)
        expected_perimeter = 2 * (graph.width + graph.height)
        if perimeter != expected_perimeter:
            result.add(Severity.WARN, "MAZE-020",
                       f"{perimeter} perimeter walls, expected {expected_perimeter}")

    stale = [c.index for c in graph.cells if c.visited]
    if stale:
        result.add(Severity.FAIL, "MAZE-021",
                   f"{len(stale)} cells still marked visited",
                   remediation="Call reset_visited() before materializing",
                   cell=stale[0])

    return result


def validate_maze(graph: GridGraph, carved_edges: Iterable[Tuple[int, int]],
                  walls: Optional[List] = None, include_perimeter: bool = False) -> ValidationResult:
    """Run every post-carve check and merge the results."""
    result = ValidationResult()
    result.merge(check_spanning_tree(graph, carved_edges))
    result.merge(check_raster(graph))
    if walls is not None:
        result.merge(check_wall_count(graph, walls, include_perimeter))

    if result.failed:
        logger.warning("Maze validation failed with %d error(s)", len(result.errors))
    else:
        logger.debug("Maze validation passed (%d issue(s))", len(result.issues))
    return result
