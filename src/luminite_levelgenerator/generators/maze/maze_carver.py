#!/usr/bin/env python3
"""
Randomized depth-first maze carver.

Turns a full grid graph into a perfect maze (every cell reachable, no loops)
by walking the grid depth-first and removing the edge to each newly entered
cell. The walk uses an explicit index stack instead of recursion so large
grids cannot exhaust the interpreter's call stack.

The carver is a state machine:
- ADVANCING: the current cell has unvisited neighbours; carve into one
- BACKTRACKING: dead end; pop the stack and try again from there
- DONE: dead end with an empty stack, every cell has been visited

Author: Luminite Level Generator
License: MIT
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List, Optional, Sequence, Tuple, Union

from .grid_graph import GridGraph

logger = logging.getLogger(__name__)


class CarverState(Enum):
    """States of the depth-first carving walk"""
    ADVANCING = auto()
    BACKTRACKING = auto()
    DONE = auto()


@dataclass
class CarveResult:
    """Record of a single carving run"""
    start: int
    carved_edges: List[Tuple[int, int]] = field(default_factory=list)  # (from, to) in carve order
    iterations: int = 0
    max_stack_depth: int = 0
    dead_ends: int = 0

    @property
    def passage_count(self) -> int:
        return len(self.carved_edges)

    def carved_edge_set(self) -> set:
        """Carved edges normalised to (low, high) pairs"""
        return {(min(a, b), max(a, b)) for a, b in self.carved_edges}


RandomSource = Union[random.Random, int, None]


def resolve_random_source(rng: Any = None) -> Any:
    """
    Turn the rng argument accepted by the generator into an object with choice().

    Args:
        rng: None for a fresh unseeded source, an int seed, or any object
            providing choice(sequence) (random.Random or a test double)

    Returns:
        Object usable as a random source
    """
    if rng is None:
        return random.Random()
    if isinstance(rng, int) and not isinstance(rng, bool):
        return random.Random(rng)
    if not callable(getattr(rng, 'choice', None)):
        raise TypeError(f"random source must provide choice(), got {type(rng).__name__}")
    return rng


class MazeCarver:
    """
    Carves a spanning tree of passages through a grid graph.

    Neighbour candidates are always presented to the random source in
    ascending index order, so a seeded source reproduces the same maze.
    """

    def __init__(self, rng: RandomSource = None, start: int = 0):
        self.rng = resolve_random_source(rng)
        self.start = start
        self.state = CarverState.DONE

    def _choose(self, candidates: Sequence[int]) -> int:
        choice = self.rng.choice(candidates)
        assert choice in candidates, f"random source returned {choice!r}, not one of {list(candidates)}"
        return choice

    def carve(self, graph: GridGraph) -> CarveResult:
        """
        Carve passages through the graph in place.

        Every removed edge becomes a passage; the edges left behind are the
        maze walls. Visited flags are cleared again before returning so the
        graph can go straight to wall materialization.

        Args:
            graph: Freshly built grid graph (all visited flags False)

        Returns:
            CarveResult describing the walk
        """
        node_count = graph.node_count
        assert 0 <= self.start < node_count, f"start cell {self.start} out of range"

        result = CarveResult(start=self.start)
        stack: List[int] = []
        current = self.start
        self.state = CarverState.ADVANCING
        max_iterations = 2 * node_count

        while self.state != CarverState.DONE:
            result.iterations += 1
            assert result.iterations <= max_iterations, \
                f"carving exceeded {max_iterations} iterations on {node_count} cells"

            graph.cells[current].visited = True
            candidates = graph.unvisited_neighbors(current)

            if candidates:
                stack.append(current)
                result.max_stack_depth = max(result.max_stack_depth, len(stack))
                chosen = self._choose(candidates)
                graph.remove_edge(current, chosen)
                result.carved_edges.append((current, chosen))
                current = chosen
                self.state = CarverState.ADVANCING
            elif stack:
                if self.state == CarverState.ADVANCING:
                    result.dead_ends += 1
                current = stack.pop()
                self.state = CarverState.BACKTRACKING
            else:
                if self.state == CarverState.ADVANCING:
                    result.dead_ends += 1
                self.state = CarverState.DONE

        graph.reset_visited()

        logger.debug("Carved %d passages in %d iterations (max stack %d, %d dead ends)",
                     result.passage_count, result.iterations,
                     result.max_stack_depth, result.dead_ends)
        return result


def carve_maze(graph: GridGraph, rng: RandomSource = None) -> CarveResult:
    """Carve a perfect maze into the graph starting from cell 0"""
    return MazeCarver(rng).carve(graph)
