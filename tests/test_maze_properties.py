"""End-to-end properties of generated mazes."""

import random

import pytest

from luminite_levelgenerator import generate_maze
from luminite_levelgenerator.conversion.wall_materializer import WallMaterializer, WallOrientation
from luminite_levelgenerator.generators.maze.grid_graph import (
    GridGraphBuilder,
    InvalidArgument,
)
from luminite_levelgenerator.generators.maze.maze_carver import MazeCarver
from tests.conftest import flood_fill, total_edges

SIZES = [(1, 1), (2, 1), (1, 2), (2, 2), (3, 5), (7, 4), (16, 16)]


@pytest.mark.parametrize("width,height", SIZES)
def test_remaining_wall_count(width, height):
    walls = generate_maze(width, height, rng=random.Random(width * 100 + height))

    assert len(walls) == total_edges(width, height) - (width * height - 1)


@pytest.mark.parametrize("width,height", SIZES)
@pytest.mark.parametrize("seed", [0, 1, 99])
def test_carved_edges_are_a_spanning_tree(width, height, seed):
    graph = GridGraphBuilder.build(width, height)
    lattice = set(graph.edges())

    MazeCarver(random.Random(seed)).carve(graph)
    carved = lattice - set(graph.edges())

    # Connected and exactly n - 1 edges: a tree
    assert len(carved) == width * height - 1
    assert flood_fill(graph.node_count, carved, start=graph.node_count - 1) == set(range(graph.node_count))


def test_same_seed_same_walls():
    first = generate_maze(12, 9, rng=random.Random(2024))
    second = generate_maze(12, 9, rng=random.Random(2024))

    assert first == second


def test_int_seed_matches_random_instance():
    assert generate_maze(6, 6, rng=11) == generate_maze(6, 6, rng=random.Random(11))


def test_unseeded_runs_still_valid():
    walls = generate_maze(5, 5)

    assert len(walls) == total_edges(5, 5) - 24


def test_single_cell_has_no_walls():
    assert generate_maze(1, 1) == []


def test_two_by_one_is_open_corridor():
    graph = GridGraphBuilder.build(2, 1)
    assert list(graph.edges()) == [(0, 1)]

    MazeCarver(random.Random(0)).carve(graph)

    assert graph.edge_count == 0
    assert generate_maze(2, 1, rng=0) == []


@pytest.mark.parametrize("seed", range(10))
def test_two_by_two_leaves_one_wall(seed):
    graph = GridGraphBuilder.build(2, 2)
    assert graph.edge_count == 4

    result = MazeCarver(random.Random(seed)).carve(graph)
    walls = WallMaterializer().materialize(graph)

    assert result.passage_count == 3
    assert len(walls) == 1
    (wall,) = walls
    a, b = wall.cells
    if b - a == 1:
        assert wall.orientation == WallOrientation.VERTICAL
    else:
        assert b - a == 2
        assert wall.orientation == WallOrientation.HORIZONTAL


@pytest.mark.parametrize("height", [0, 1, 5])
def test_zero_width_rejected_before_building(height, monkeypatch):
    built = []
    monkeypatch.setattr(
        "luminite_levelgenerator.generators.maze.grid_graph.GridGraph.__init__",
        lambda self, *args: built.append(args),
    )

    with pytest.raises(InvalidArgument):
        generate_maze(0, height)
    assert built == []
