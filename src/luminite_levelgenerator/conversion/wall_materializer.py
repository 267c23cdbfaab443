"""
Wall materialization for carved mazes.

Converts the edges left in a carved grid graph into wall placement
descriptors that a world store can turn into renderable objects. Every
surviving edge becomes one wall segment positioned at the lower-index
endpoint's cell corner and oriented by the direction of the adjacency.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from luminite_levelgenerator.generators.maze.grid_graph import GridGraph, InvalidArgument

logger = logging.getLogger(__name__)

# Edge length of one maze cell in world units
CELL_SIZE = 2.0


class WallOrientation(Enum):
    """Orientation of a wall segment in the XZ plane"""
    VERTICAL = "vertical"      # Separates left/right neighbours, no rotation
    HORIZONTAL = "horizontal"  # Separates upper/lower neighbours, rotated 90 degrees

    @property
    def rotation_degrees(self) -> float:
        return 0.0 if self is WallOrientation.VERTICAL else 90.0


@dataclass(frozen=True)
class Location:
    """A location in world space using Euler angles (pitch and yaw)"""
    x: float
    y: float
    z: float
    pitch: float = 0.0
    yaw: float = 0.0


@dataclass(frozen=True)
class WallSegment:
    """
    One wall to place in the world.

    Attributes:
        position: (x, z) world coordinates of the anchor cell corner; the
            wall stands on the anchor cell's far side (+x for VERTICAL,
            +z for HORIZONTAL)
        orientation: VERTICAL or HORIZONTAL
        cells: (a, b) indices of the two cells the wall separates, a < b
        perimeter: True for walls on the outer boundary of the maze
    """
    position: Tuple[float, float]
    orientation: WallOrientation
    cells: Tuple[int, int] = (-1, -1)
    perimeter: bool = False

    @property
    def rotation_degrees(self) -> float:
        return self.orientation.rotation_degrees

    def to_location(self, y: float = 0.0) -> Location:
        """Full world placement for this wall at height y"""
        x, z = self.position
        return Location(x=x, y=y, z=z, pitch=0.0, yaw=self.rotation_degrees)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'position': {'x': self.position[0], 'z': self.position[1]},
            'orientation': self.orientation.value,
            'rotation': self.rotation_degrees,
            'cells': list(self.cells),
            'perimeter': self.perimeter,
        }


class WallMaterializer:
    """
    Turns the walls remaining in a grid graph into WallSegment descriptors.

    The graph is only read. Visited flags are not consulted, but callers
    reusing a graph across passes must clear them first (reset_visited()).
    """

    def __init__(self, cell_size: float = CELL_SIZE, include_perimeter: bool = False):
        if cell_size <= 0:
            raise InvalidArgument(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size
        self.include_perimeter = include_perimeter

    def _world_position(self, row: int, col: int) -> Tuple[float, float]:
        return (col * self.cell_size, row * self.cell_size)

    def orientation_for(self, graph: GridGraph, a: int, b: int) -> WallOrientation:
        """
        Classify the adjacency between two cells.

        Raises:
            AssertionError: If the cells are not immediate grid neighbours
        """
        if a > b:
            a, b = b, a
        if b - a == 1 and a // graph.width == b // graph.width:
            return WallOrientation.VERTICAL
        if b - a == graph.width:
            return WallOrientation.HORIZONTAL
        raise AssertionError(f"cells {a} and {b} are not adjacent in a {graph.width}-wide grid")

    def materialize(self, graph: GridGraph) -> List[WallSegment]:
        """
        Produce one wall segment per edge still present in the graph.

        Args:
            graph: Carved grid graph

        Returns:
            Wall segments ordered by (a, b) edge index, followed by the
            perimeter walls when include_perimeter is set
        """
        walls: List[WallSegment] = []
        for a, b in graph.edges():
            row, col = graph.position(a)
            walls.append(WallSegment(
                position=self._world_position(row, col),
                orientation=self.orientation_for(graph, a, b),
                cells=(a, b),
            ))

        interior = len(walls)
        if self.include_perimeter:
            walls.extend(self.perimeter_walls(graph))

        logger.debug("Materialized %d interior walls, %d perimeter walls",
                     interior, len(walls) - interior)
        return walls

    def perimeter_walls(self, graph: GridGraph) -> List[WallSegment]:
        """
        Walls of the closed outer frame, one per boundary cell side.

        The frame is never part of the graph, so carving can't open it.
        Each frame wall is anchored at the cell just before it, the same way
        interior walls are, so top and left walls sit at row or column -1.
        Top and bottom sides are HORIZONTAL, left and right sides VERTICAL.
        """
        walls: List[WallSegment] = []
        width, height = graph.width, graph.height
        for col in range(width):
            top = graph.index_of(0, col)
            bottom = graph.index_of(height - 1, col)
            walls.append(WallSegment(self._world_position(-1, col),
                                     WallOrientation.HORIZONTAL, (-1, top), True))
            walls.append(WallSegment(self._world_position(height - 1, col),
                                     WallOrientation.HORIZONTAL, (bottom, -1), True))
        for row in range(height):
            left = graph.index_of(row, 0)
            right = graph.index_of(row, width - 1)
            walls.append(WallSegment(self._world_position(row, -1),
                                     WallOrientation.VERTICAL, (-1, left), True))
            walls.append(WallSegment(self._world_position(row, width - 1),
                                     WallOrientation.VERTICAL, (right, -1), True))
        return walls


def materialize_walls(graph: GridGraph, cell_size: float = CELL_SIZE,
                      include_perimeter: bool = False) -> List[WallSegment]:
    """Convert the walls of a carved graph into placement descriptors"""
    return WallMaterializer(cell_size, include_perimeter).materialize(graph)


def export_walls_json(walls: List[WallSegment], metadata: Optional[Dict[str, Any]] = None) -> str:
    """Export wall placements as JSON.

    Args:
        walls: Wall segments from WallMaterializer
        metadata: Optional extra fields stored under 'metadata'

    Returns:
        JSON string with a 'walls' list
    """
    output = {
        'metadata': dict(metadata or {}),
        'wall_count': len(walls),
        'walls': [wall.to_dict() for wall in walls],
    }
    return json.dumps(output, indent=2)
