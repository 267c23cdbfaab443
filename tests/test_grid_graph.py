import pytest

from luminite_levelgenerator.generators.maze.grid_graph import (
    GridGraphBuilder,
    InvalidArgument,
    build_grid_graph,
)
from tests.conftest import total_edges


@pytest.mark.parametrize("width,height", [(1, 1), (2, 1), (1, 5), (3, 4), (8, 8)])
def test_lattice_has_one_edge_per_side_pair(width, height):
    graph = GridGraphBuilder.build(width, height)

    assert graph.node_count == width * height
    assert graph.edge_count == total_edges(width, height)
    assert graph.lattice_edge_count == graph.edge_count
    for a, b in graph.edges():
        assert a < b
        assert b - a == width or (b - a == 1 and a // width == b // width)


def test_cells_are_indexed_row_major():
    graph = build_grid_graph(4, 3)

    assert graph.position(0) == (0, 0)
    assert graph.position(5) == (1, 1)
    assert graph.index_of(2, 3) == 11
    cell = graph.cells[7]
    assert (cell.index, cell.row, cell.col, cell.visited) == (7, 1, 3, False)


def test_no_wraparound_edge_between_rows():
    graph = build_grid_graph(3, 2)

    assert not graph.has_edge(2, 3)
    assert graph.neighbors(2) == [1, 5]
    assert graph.neighbors(4) == [1, 3, 5]


def test_edges_are_ordered():
    graph = build_grid_graph(2, 2)

    assert list(graph.edges()) == [(0, 1), (0, 2), (1, 3), (2, 3)]


def test_remove_edge_is_undirected():
    graph = build_grid_graph(2, 2)

    assert graph.remove_edge(3, 1) is True
    assert not graph.has_edge(1, 3)
    assert graph.edge_count == 3
    assert graph.remove_edge(1, 3) is False
    assert graph.edge_count == 3


def test_unvisited_neighbors_and_reset():
    graph = build_grid_graph(3, 1)
    graph.cells[0].visited = True
    graph.cells[2].visited = True

    assert graph.unvisited_neighbors(1) == []
    graph.reset_visited()
    assert graph.unvisited_neighbors(1) == [0, 2]


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (0, 0), (-1, 3), (3, -2)])
def test_non_positive_dimensions_rejected(width, height):
    with pytest.raises(InvalidArgument):
        GridGraphBuilder.build(width, height)


def test_non_integer_dimensions_rejected():
    with pytest.raises(InvalidArgument):
        GridGraphBuilder.build(2.5, 3)
    with pytest.raises(InvalidArgument):
        GridGraphBuilder.build(True, 3)


def test_invalid_argument_is_value_error():
    assert issubclass(InvalidArgument, ValueError)


def test_out_of_range_index_is_an_assertion():
    graph = build_grid_graph(2, 2)
    with pytest.raises(AssertionError):
        graph.neighbors(4)
    with pytest.raises(AssertionError):
        graph.index_of(0, 2)
