import random
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


class FirstChoice:
    """Random source double that always takes the first candidate."""

    def __init__(self):
        self.calls = []

    def choice(self, seq):
        self.calls.append(list(seq))
        return seq[0]


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def first_choice():
    return FirstChoice()


def flood_fill(node_count, edges, start=0):
    """Cells reachable from start over the given undirected edges."""
    adjacency = {i: set() for i in range(node_count)}
    for a, b in edges:
        adjacency[a].add(b)
        adjacency[b].add(a)
    seen = {start}
    stack = [start]
    while stack:
        node = stack.pop()
        for n in adjacency[node]:
            if n not in seen:
                seen.add(n)
                stack.append(n)
    return seen


def total_edges(width, height):
    return width * (height - 1) + height * (width - 1)
