"""
Wavefront OBJ export for maze walls.

Turns wall segments into axis-aligned boxes (8 vertices, 6 quad faces
each) and writes them as .obj (and optional .mtl) for inspection in any
mesh viewer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from luminite_levelgenerator.conversion.wall_materializer import (
    CELL_SIZE, WallOrientation, WallSegment
)

Vec3 = Tuple[float, float, float]

WALL_MATERIAL = "maze_wall"
PERIMETER_MATERIAL = "maze_perimeter"

# Corner order of a box: bottom ring then top ring, counter-clockwise from above
_BOX_FACES = (
    (1, 4, 3, 2),  # bottom
    (5, 6, 7, 8),  # top
    (1, 2, 6, 5),  # -z side
    (2, 3, 7, 6),  # +x side
    (3, 4, 8, 7),  # +z side
    (4, 1, 5, 8),  # -x side
)


def wall_bounds(wall: WallSegment, cell_size: float = CELL_SIZE,
                thickness: float = 0.2) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Footprint of a wall as ((x_min, x_max), (z_min, z_max)).

    A wall stands on the far side of its anchor cell: VERTICAL walls at
    x + cell_size spanning the cell in z, HORIZONTAL walls at
    z + cell_size spanning the cell in x.
    """
    x, z = wall.position
    half = thickness / 2.0
    if wall.orientation == WallOrientation.VERTICAL:
        edge = x + cell_size
        return (edge - half, edge + half), (z, z + cell_size)
    edge = z + cell_size
    return (x, x + cell_size), (edge - half, edge + half)


def wall_box(wall: WallSegment, cell_size: float = CELL_SIZE,
             height: float = 3.0, thickness: float = 0.2) -> List[Vec3]:
    """Eight box corners (x, y, z) for a wall, Y up."""
    (x0, x1), (z0, z1) = wall_bounds(wall, cell_size, thickness)
    corners: List[Vec3] = []
    for y in (0.0, height):
        corners.extend([(x0, y, z0), (x1, y, z0), (x1, y, z1), (x0, y, z1)])
    return corners


# ---------------------------------------------------------------------------
# OBJ Writer
# ---------------------------------------------------------------------------

class ObjWriter:
    """Write maze wall geometry as Wavefront OBJ + optional MTL."""

    def __init__(self, cell_size: float = CELL_SIZE, wall_height: float = 3.0,
                 wall_thickness: float = 0.2):
        self.cell_size = cell_size
        self.wall_height = wall_height
        self.wall_thickness = wall_thickness
        self._vertices: List[Vec3] = []
        self._faces: List[Tuple[List[int], str]] = []  # (vertex indices 1-based, material)
        self._materials: Dict[str, bool] = {}

    def add_walls(self, walls: List[WallSegment]):
        for wall in walls:
            base = len(self._vertices)
            self._vertices.extend(wall_box(wall, self.cell_size, self.wall_height,
                                           self.wall_thickness))
            mat = PERIMETER_MATERIAL if wall.perimeter else WALL_MATERIAL
            for face in _BOX_FACES:
                self._faces.append(([base + i for i in face], mat))
            self._materials[mat] = True

    def write(self, obj_path: str, write_mtl: bool = True):
        """Write .obj (and optionally .mtl) files."""
        obj_p = Path(obj_path)
        mtl_name = obj_p.stem + ".mtl"

        lines = []
        lines.append("# Luminite Level Generator OBJ export")
        lines.append(f"# {len(self._vertices)} vertices, {len(self._faces)} faces")
        if write_mtl:
            lines.append(f"mtllib {mtl_name}")
        lines.append("")

        for v in self._vertices:
            lines.append(f"v {v[0]:.4f} {v[1]:.4f} {v[2]:.4f}")

        lines.append("")

        # Faces grouped by material
        current_mat = None
        sorted_faces = sorted(self._faces, key=lambda f: f[1])
        for indices, mat in sorted_faces:
            if mat != current_mat:
                lines.append(f"usemtl {mat}")
                current_mat = mat
            face_str = " ".join(str(i) for i in indices)
            lines.append(f"f {face_str}")

        obj_p.write_text("\n".join(lines) + "\n")

        if write_mtl:
            self._write_mtl(str(obj_p.parent / mtl_name))

    def _write_mtl(self, mtl_path: str):
        lines = ["# Luminite Level Generator MTL", ""]
        for mat in sorted(self._materials.keys()):
            lines.append(f"newmtl {mat}")
            lines.append("Ka 0.2 0.2 0.2")
            lines.append("Kd 0.8 0.8 0.8")
            lines.append("Ks 0.0 0.0 0.0")
            lines.append("d 1.0")
            lines.append("")
        Path(mtl_path).write_text("\n".join(lines) + "\n")

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def face_count(self) -> int:
        return len(self._faces)
