import random

from luminite_levelgenerator.conversion.wall_materializer import materialize_walls
from luminite_levelgenerator.generators.maze.grid_graph import build_grid_graph
from luminite_levelgenerator.generators.maze.maze_carver import MazeCarver
from luminite_levelgenerator.validation import (
    Severity,
    ValidationResult,
    ValidationStage,
    check_lattice,
    check_raster,
    check_spanning_tree,
    check_wall_count,
    validate_maze,
)


def test_fresh_lattice_passes():
    result = check_lattice(build_grid_graph(5, 4))

    assert result.passed
    assert result.stage == ValidationStage.LATTICE
    assert result.report() == "Validation passed: No issues found"


def test_lattice_missing_edge_fails():
    graph = build_grid_graph(3, 3)
    graph.remove_edge(4, 5)

    result = check_lattice(graph)

    assert result.failed
    assert "MAZE-001" in result.codes
    assert "MAZE-003" in result.codes


def test_carved_maze_passes_all_checks():
    graph = build_grid_graph(8, 8)
    carve = MazeCarver(random.Random(3)).carve(graph)
    walls = materialize_walls(graph)

    result = validate_maze(graph, carve.carved_edges, walls)

    assert result.passed, result.report()


def test_cycle_and_disconnection_detected():
    graph = build_grid_graph(2, 3)
    # Square loop 0-1-3-2 leaves cells 4 and 5 cut off
    passages = [(0, 1), (1, 3), (3, 2), (2, 0), (4, 5)]

    result = check_spanning_tree(graph, passages)

    assert "MAZE-012" in result.codes
    assert "MAZE-011" in result.codes
    assert "MAZE-010" not in result.codes  # five passages for six cells


def test_too_few_passages_detected():
    graph = build_grid_graph(3, 1)

    result = check_spanning_tree(graph, [(0, 1)])

    assert result.codes.count("MAZE-010") == 1
    assert "MAZE-011" in result.codes


def test_non_adjacent_passage_detected():
    graph = build_grid_graph(2, 2)

    result = check_spanning_tree(graph, [(0, 3), (0, 1), (1, 2)])

    assert "MAZE-013" in result.codes


def test_stale_visited_flags_fail_wall_check():
    graph = build_grid_graph(2, 1)
    graph.remove_edge(0, 1)
    graph.cells[1].visited = True

    result = check_wall_count(graph, [])

    assert result.codes == ["MAZE-021"]
    assert result.errors[0].severity == Severity.FAIL
    assert "reset_visited" in result.errors[0].format()


def test_wall_count_mismatch_detected():
    graph = build_grid_graph(3, 3)
    MazeCarver(random.Random(1)).carve(graph)
    walls = materialize_walls(graph)

    result = check_wall_count(graph, walls[:-1])

    assert result.codes == ["MAZE-020"]


def test_result_to_dict_groups_by_stage():
    graph = build_grid_graph(3, 1)
    result = check_spanning_tree(graph, [(0, 1)])

    data = result.to_dict()

    assert data['passed'] is False
    assert data['error_count'] == 2
    assert list(data['stages']) == ['carve']
    assert [i['code'] for i in data['stages']['carve']] == ["MAZE-010", "MAZE-011"]


def test_issue_names_its_edge():
    graph = build_grid_graph(2, 2)

    result = check_spanning_tree(graph, [(0, 3), (0, 1), (1, 2)])

    issue = next(i for i in result.issues if i.code == "MAZE-013")
    assert issue.edge == (0, 3)
    assert issue.format().startswith("MAZE-013 FAIL edge 0-3:")
    assert issue.to_dict()['edge'] == [0, 3]


def test_merged_report_lists_stages_in_generation_order():
    graph = build_grid_graph(3, 3)
    graph.remove_edge(4, 5)
    walls = materialize_walls(graph, include_perimeter=True)[:-1]

    result = ValidationResult()
    result.merge(check_wall_count(graph, walls, include_perimeter=True))
    result.merge(check_lattice(graph))

    report = result.report().splitlines()
    assert report[0].startswith("Maze validation FAILED:")
    assert report.index("lattice:") < report.index("walls:")
    assert any("MAZE-003 FAIL cell 4:" in line for line in report)


def test_raster_check_catches_uncarved_grid():
    graph = build_grid_graph(3, 2)

    result = check_raster(graph)

    assert result.stage == ValidationStage.RASTER
    assert result.failed
    assert set(result.codes) == {"MAZE-030"}


def test_raster_check_passes_carved_grid():
    graph = build_grid_graph(6, 4)
    MazeCarver(random.Random(9)).carve(graph)

    assert check_raster(graph).passed
