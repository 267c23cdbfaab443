import random

import numpy as np

from luminite_levelgenerator.generators.layout.layout_types import MazeLayout, TileType, farthest_cell
from luminite_levelgenerator.generators.maze.grid_graph import build_grid_graph
from luminite_levelgenerator.generators.maze.maze_carver import MazeCarver


def _carved(width, height, seed=5):
    graph = build_grid_graph(width, height)
    result = MazeCarver(random.Random(seed)).carve(graph)
    return graph, result


def test_raster_shape_and_frame():
    graph, _ = _carved(4, 3)

    layout = MazeLayout.from_graph(graph)

    assert layout.grid.shape == (7, 9)
    assert np.all(layout.grid[0, :] == TileType.WALL.value)
    assert np.all(layout.grid[:, -1] == TileType.WALL.value)


def test_perfect_maze_raster_validates():
    graph, _ = _carved(10, 6)

    layout = MazeLayout.from_graph(graph)
    valid, issues = layout.validate()

    assert valid, issues
    assert len(layout.get_connected_regions()) == 1


def test_uncarved_lattice_is_all_pockets():
    graph = build_grid_graph(3, 2)

    layout = MazeLayout.from_graph(graph)
    valid, issues = layout.validate()

    assert not valid
    assert len(layout.get_connected_regions()) == 6
    assert any("disconnected" in issue for issue in issues)


def test_ascii_rendering():
    graph = build_grid_graph(2, 1)
    graph.remove_edge(0, 1)

    layout = MazeLayout.from_graph(graph)
    layout.mark_endpoints((0, 0), (0, 1))

    assert layout.to_ascii() == "\n".join(["#####", "#S G#", "#####"])


def test_farthest_cell_on_corridor():
    graph = build_grid_graph(5, 1)
    passages = {(0, 1), (1, 2), (2, 3), (3, 4)}

    assert farthest_cell(graph, passages, start=0) == (4, 4)
    assert farthest_cell(graph, passages, start=2) == (0, 2)
