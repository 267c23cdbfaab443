import json
import logging

import pytest

from luminite_levelgenerator.generators.maze.grid_graph import InvalidArgument
from luminite_levelgenerator.pipeline import (
    InvalidSettings,
    MazePipeline,
    MazeValidationError,
    PipelineError,
    PipelineSettings,
    PipelineStage,
    generate_maze,
)
from luminite_levelgenerator.pipeline import maze_pipeline
from tests.conftest import total_edges


def test_pipeline_generates_valid_maze():
    result = MazePipeline(PipelineSettings(width=6, height=5, seed=17)).generate()

    assert result.success
    assert result.seed == 17
    assert result.validation.passed
    assert len(result.walls) == total_edges(6, 5) - 29
    assert result.metrics['passages'] == 29
    assert result.stages_completed == [
        PipelineStage.BUILD_GRID,
        PipelineStage.CARVE,
        PipelineStage.MATERIALIZE,
        PipelineStage.VALIDATE,
        PipelineStage.EXPORT,
    ]
    assert result.output_files == []


def test_pipeline_matches_single_call_generation():
    result = MazePipeline(PipelineSettings(width=9, height=4, seed=8)).generate()

    assert result.walls == generate_maze(9, 4, rng=8)


def test_unseeded_pipeline_records_replayable_seed():
    first = MazePipeline(PipelineSettings(width=7, height=7)).generate()
    replay = MazePipeline(PipelineSettings(width=7, height=7, seed=first.seed)).generate()

    assert isinstance(first.seed, int)
    assert replay.walls == first.walls


def test_perimeter_setting():
    result = MazePipeline(PipelineSettings(width=3, height=3, seed=1, include_perimeter=True)).generate()

    assert sum(1 for w in result.walls if w.perimeter) == 12
    assert result.validation.passed


def test_seed_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="luminite_levelgenerator.pipeline.maze_pipeline"):
        MazePipeline(PipelineSettings(width=2, height=2, seed=321)).generate()

    assert "Generation seed: 321" in caplog.text


@pytest.mark.parametrize("changes", [
    {'width': 0},
    {'height': -3},
    {'cell_size': 0.0},
    {'wall_thickness': 5.0},
    {'graph_dump_format': 'svg'},
    {'seed': 'abc'},
    {'cell_size': 'big'},
    {'wall_height': None},
    {'wall_thickness': True},
])
def test_invalid_settings_rejected(changes):
    with pytest.raises(InvalidSettings) as excinfo:
        MazePipeline(PipelineSettings(**changes))

    assert isinstance(excinfo.value, PipelineError)
    assert isinstance(excinfo.value, InvalidArgument)


def test_validation_gate_raises(monkeypatch):
    class NoOpCarver:
        def __init__(self, rng):
            pass

        def carve(self, graph):
            from luminite_levelgenerator.generators.maze.maze_carver import CarveResult
            return CarveResult(start=0)

    monkeypatch.setattr(maze_pipeline, "MazeCarver", NoOpCarver)

    with pytest.raises(MazeValidationError) as excinfo:
        MazePipeline(PipelineSettings(width=3, height=3, seed=1)).generate()

    assert "MAZE-010" in excinfo.value.result.codes


def test_validation_can_be_disabled():
    result = MazePipeline(PipelineSettings(width=3, height=3, seed=1, validate=False)).generate()

    assert result.validation is None
    assert PipelineStage.VALIDATE not in result.stages_completed


def test_exports_written(tmp_path):
    settings = PipelineSettings(
        width=4, height=3, seed=5, output_dir=str(tmp_path), map_name="level1",
        export_json=True, export_obj=True, enable_graph_dump=True, graph_dump_format="json",
    )

    result = MazePipeline(settings).generate()

    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["level1.mtl", "level1.obj", "level1_debug.json", "level1_walls.json"]
    assert len(result.output_files) == 3
    walls = json.loads((tmp_path / "level1_walls.json").read_text())
    assert walls['metadata']['seed'] == 5
    assert walls['wall_count'] == len(result.walls)
    debug = json.loads((tmp_path / "level1_debug.json").read_text())
    assert debug['statistics']['passage_count'] == 11


def test_dot_dump_written(tmp_path):
    settings = PipelineSettings(width=2, height=2, seed=5, output_dir=str(tmp_path),
                                enable_graph_dump=True)

    result = MazePipeline(settings).generate()

    (path,) = result.output_files
    assert path.endswith("maze_debug.dot")
    assert (tmp_path / "maze_debug.dot").read_text().startswith("graph Maze {")


def test_non_numeric_sizes_listed_together():
    with pytest.raises(InvalidSettings) as excinfo:
        MazePipeline(PipelineSettings(cell_size="big", wall_height="tall"))

    message = str(excinfo.value)
    assert "cell_size must be a number, got 'big'" in message
    assert "wall_height must be a number, got 'tall'" in message
