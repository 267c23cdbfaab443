"""
Maze generation pipeline for Luminite levels.

Orchestrates grid construction, depth-first carving, wall materialization
and the optional validation gate and file exports. generate_maze() is the
single-call entry point used by the game; MazePipeline adds settings,
metrics and output files around the same stages.
"""

import logging
import random
import time
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from luminite_levelgenerator.generators.maze.grid_graph import (
    GridGraph, GridGraphBuilder, InvalidArgument
)
from luminite_levelgenerator.generators.maze.maze_carver import (
    CarveResult, MazeCarver, RandomSource
)
from luminite_levelgenerator.conversion.wall_materializer import (
    CELL_SIZE, WallMaterializer, WallSegment, export_walls_json
)
from luminite_levelgenerator.validation.core import ValidationResult
from luminite_levelgenerator.validation.maze_checks import check_lattice, validate_maze

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    BUILD_GRID = "build_grid"
    CARVE = "carve"
    MATERIALIZE = "materialize"
    VALIDATE = "validate"
    EXPORT = "export"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(Exception):
    pass


class InvalidSettings(PipelineError, InvalidArgument):
    """Raised when PipelineSettings hold unusable values."""


class MazeValidationError(PipelineError):
    """Raised when the validation gate finds FAIL issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())


# ---------------------------------------------------------------------------
# Settings / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineSettings:
    # Maze size in cells
    width: int = 16
    height: int = 16

    # World placement
    cell_size: float = CELL_SIZE
    wall_height: float = 3.0
    wall_thickness: float = 0.2
    include_perimeter: bool = False

    # Seeding for reproducible generation
    seed: Optional[int] = None  # None = random seed, otherwise deterministic

    # Run the spanning-tree gate after carving
    validate: bool = True

    # Output
    output_dir: Optional[str] = None
    map_name: str = "maze"
    export_json: bool = False
    export_obj: bool = False

    # Debug output
    enable_graph_dump: bool = False
    graph_dump_format: str = "dot"  # "dot" or "json"

    # Misc
    verbose: bool = False


@dataclass
class PipelineResult:
    success: bool
    walls: List[WallSegment] = field(default_factory=list)
    graph: Optional[GridGraph] = None
    carve: Optional[CarveResult] = None
    validation: Optional[ValidationResult] = None
    output_files: List[str] = field(default_factory=list)
    stages_completed: List[PipelineStage] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def seed(self) -> Optional[int]:
        return self.metrics.get("seed")

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


# ---------------------------------------------------------------------------
# Single-call entry point
# ---------------------------------------------------------------------------

def generate_maze(width: int, height: int, rng: RandomSource = None,
                  cell_size: float = CELL_SIZE) -> List[WallSegment]:
    """
    Generate a perfect maze and return its wall placements.

    Args:
        width: Number of cell columns (> 0)
        height: Number of cell rows (> 0)
        rng: Random source with choice(), an int seed, or None for unseeded
        cell_size: World units per cell

    Returns:
        Wall segments for every wall left standing

    Raises:
        InvalidArgument: If a dimension or the cell size is not positive
    """
    materializer = WallMaterializer(cell_size)
    graph = GridGraphBuilder.build(width, height)
    MazeCarver(rng).carve(graph)
    return materializer.materialize(graph)


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

class MazePipeline:
    """Generates a maze and its wall placements from PipelineSettings."""

    def __init__(self, settings: Optional[PipelineSettings] = None):
        self.settings = settings or PipelineSettings()
        self.current_stage = PipelineStage.INITIALIZE
        self._validate_settings()

    def _validate_settings(self):
        errors = []
        s = self.settings
        for name in ("width", "height"):
            value = getattr(s, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(f"{name} must be a positive integer")
        numeric = True
        for name in ("cell_size", "wall_height", "wall_thickness"):
            value = getattr(s, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number, got {value!r}")
                numeric = False
        if numeric:
            if s.cell_size <= 0:
                errors.append("cell_size must be positive")
            if s.wall_height <= 0:
                errors.append("wall_height must be positive")
            if not 0 < s.wall_thickness <= s.cell_size:
                errors.append("wall_thickness must be positive and no larger than cell_size")
        if s.graph_dump_format not in ("dot", "json"):
            errors.append("graph_dump_format must be 'dot' or 'json'")
        if s.seed is not None and (isinstance(s.seed, bool) or not isinstance(s.seed, int)):
            errors.append("seed must be an integer or None")
        if errors:
            raise InvalidSettings(f"Invalid settings: {'; '.join(errors)}")

    def _resolve_seed(self) -> int:
        if self.settings.seed is not None:
            return self.settings.seed
        return random.SystemRandom().randint(0, 2**31 - 1)

    def _output_dir(self) -> Path:
        out_dir = Path(self.settings.output_dir) if self.settings.output_dir else Path("output") / "mazes"
        out_dir.mkdir(parents=True, exist_ok=True)
        return out_dir

    # -- stages --

    def _build_grid(self) -> GridGraph:
        self.current_stage = PipelineStage.BUILD_GRID
        graph = GridGraphBuilder.build(self.settings.width, self.settings.height)
        logger.debug("Grid: %d cells, %d edges", graph.node_count, graph.edge_count)
        if self.settings.validate:
            self._gate(check_lattice(graph))
        return graph

    def _carve(self, graph: GridGraph, seed: int) -> CarveResult:
        self.current_stage = PipelineStage.CARVE
        carve = MazeCarver(random.Random(seed)).carve(graph)
        logger.info("Carved %d passages, %d walls remain", carve.passage_count, graph.edge_count)
        return carve

    def _materialize(self, graph: GridGraph) -> List[WallSegment]:
        self.current_stage = PipelineStage.MATERIALIZE
        materializer = WallMaterializer(self.settings.cell_size, self.settings.include_perimeter)
        walls = materializer.materialize(graph)
        logger.info("Materialized %d wall segments", len(walls))
        return walls

    def _validate(self, graph: GridGraph, carve: CarveResult,
                  walls: List[WallSegment]) -> ValidationResult:
        self.current_stage = PipelineStage.VALIDATE
        validation = validate_maze(graph, carve.carved_edges, walls, self.settings.include_perimeter)
        self._gate(validation)
        return validation

    def _gate(self, validation: ValidationResult):
        if validation.failed:
            logger.error("Validation gate failed at %s: %s",
                         self.current_stage.value, "; ".join(i.message for i in validation.errors))
            raise MazeValidationError(validation)

    def _export(self, result: PipelineResult, seed: int):
        self.current_stage = PipelineStage.EXPORT
        s = self.settings
        if not (s.export_json or s.export_obj or s.enable_graph_dump):
            return
        out_dir = self._output_dir()

        if s.export_json:
            path = out_dir / f"{s.map_name}_walls.json"
            metadata = {'seed': seed, 'width': s.width, 'height': s.height, 'cell_size': s.cell_size}
            path.write_text(export_walls_json(result.walls, metadata), encoding='utf-8')
            result.output_files.append(str(path))
            logger.info("Wall placements written: %s", path)

        if s.export_obj:
            self._write_obj_file(result, out_dir)

        if s.enable_graph_dump:
            self._write_graph_dump(result, out_dir, seed)

    def _write_obj_file(self, result: PipelineResult, out_dir: Path):
        """Write OBJ wall meshes."""
        from luminite_levelgenerator.conversion.obj_writer import ObjWriter
        obj_path = str(out_dir / f"{self.settings.map_name}.obj")
        writer = ObjWriter(self.settings.cell_size, self.settings.wall_height,
                           self.settings.wall_thickness)
        writer.add_walls(result.walls)
        writer.write(obj_path)
        result.output_files.append(obj_path)
        logger.info("OBJ written: %s (%d verts, %d faces)",
                    obj_path, writer.vertex_count, writer.face_count)

    def _write_graph_dump(self, result: PipelineResult, out_dir: Path, seed: int):
        """Write debug graph dump (DOT or JSON format)."""
        from luminite_levelgenerator.pipeline.debug.graph_export import (
            export_maze_dot, export_maze_json
        )

        try:
            if self.settings.graph_dump_format == "json":
                content = export_maze_json(result.graph, result.carve, seed)
                graph_path = out_dir / f"{self.settings.map_name}_debug.json"
            else:
                content = export_maze_dot(result.graph, result.carve)
                graph_path = out_dir / f"{self.settings.map_name}_debug.dot"

            graph_path.write_text(content, encoding='utf-8')
            result.output_files.append(str(graph_path))
            logger.info("Debug graph written: %s", graph_path)
        except OSError as e:
            logger.warning("Failed to write debug graph: %s", e)
            result.add_warning(f"Failed to write debug graph: {e}", PipelineStage.EXPORT)

    # -- main entry --

    def generate(self) -> PipelineResult:
        """
        Run every stage.

        Returns:
            PipelineResult with the graph, carve record and walls

        Raises:
            InvalidArgument: Dimensions rejected by the grid builder
            MazeValidationError: The validation gate found FAIL issues
            OSError: An export file could not be written
        """
        result = PipelineResult(success=False)
        start_time = time.time()

        seed = self._resolve_seed()
        result.metrics['seed'] = seed
        logger.info("Generation seed: %d", seed)
        logger.info("Starting maze generation: %dx%d cells", self.settings.width, self.settings.height)

        graph = self._build_grid()
        result.graph = graph
        result.metrics['lattice_edges'] = graph.edge_count
        result.stages_completed.append(PipelineStage.BUILD_GRID)

        carve = self._carve(graph, seed)
        result.carve = carve
        result.metrics['passages'] = carve.passage_count
        result.metrics['iterations'] = carve.iterations
        result.metrics['max_stack_depth'] = carve.max_stack_depth
        result.metrics['dead_ends'] = carve.dead_ends
        result.stages_completed.append(PipelineStage.CARVE)

        result.walls = self._materialize(graph)
        result.metrics['walls'] = len(result.walls)
        result.stages_completed.append(PipelineStage.MATERIALIZE)

        if self.settings.validate:
            result.validation = self._validate(graph, carve, result.walls)
            result.stages_completed.append(PipelineStage.VALIDATE)

        self._export(result, seed)
        result.stages_completed.append(PipelineStage.EXPORT)

        self.current_stage = PipelineStage.COMPLETE
        result.success = True
        result.metrics["total_time"] = time.time() - start_time
        logger.info("Pipeline complete in %.3fs", result.metrics["total_time"])
        return result


__all__ = [
    'PipelineStage',
    'PipelineError',
    'InvalidSettings',
    'MazeValidationError',
    'PipelineSettings',
    'PipelineResult',
    'MazePipeline',
    'generate_maze',
    'InvalidArgument',
]
