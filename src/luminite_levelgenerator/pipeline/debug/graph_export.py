"""
Graph export utilities for maze debugging.

Provides export functions to inspect carved mazes in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
"""

from typing import Any, Dict, Optional
import json

from luminite_levelgenerator.generators.maze.grid_graph import GridGraph
from luminite_levelgenerator.generators.maze.maze_carver import CarveResult


def export_maze_dot(graph: GridGraph, carve: Optional[CarveResult] = None) -> str:
    """Export a maze as Graphviz DOT format.

    Cells are pinned to their grid position. Carved passages are drawn
    solid, walls still present in the graph dashed.

    Args:
        graph: Carved (or uncarved) grid graph
        carve: Carve record; without it only the walls are drawn

    Returns:
        DOT format string for visualization with Graphviz (use neato -n)
    """
    lines = ['graph Maze {']
    lines.append('  node [shape=box, style=filled, fillcolor="#D3D3D3", width=0.4, height=0.4];')
    lines.append('')

    start = carve.start if carve else None
    for cell in graph.cells:
        color = '#90EE90' if cell.index == start else '#D3D3D3'
        lines.append(
            f'  c{cell.index} [label="{cell.index}" fillcolor="{color}" '
            f'pos="{cell.col},{-cell.row}!"];'
        )

    lines.append('')

    if carve:
        for a, b in carve.carved_edges:
            lines.append(f'  c{a} -- c{b} [style=solid, penwidth=2];')

    for a, b in graph.edges():
        lines.append(f'  c{a} -- c{b} [style=dashed, color="#A0A0A0"];')

    lines.append('}')
    return '\n'.join(lines)


def maze_statistics(graph: GridGraph, carve: Optional[CarveResult] = None) -> Dict[str, Any]:
    """Summary counts for a maze."""
    stats = {
        'width': graph.width,
        'height': graph.height,
        'cell_count': graph.node_count,
        'lattice_edge_count': graph.lattice_edge_count,
        'wall_count': graph.edge_count,
    }
    if carve:
        stats.update({
            'passage_count': carve.passage_count,
            'iterations': carve.iterations,
            'max_stack_depth': carve.max_stack_depth,
            'dead_ends': carve.dead_ends,
        })
    return stats


def export_maze_json(graph: GridGraph, carve: Optional[CarveResult], seed: int) -> str:
    """Export a maze as JSON with metadata.

    Args:
        graph: Carved grid graph
        carve: Carve record (may be None)
        seed: The seed used for generation

    Returns:
        JSON string with maze and debug metadata
    """
    output = {
        'metadata': {
            'seed': seed,
            'version': '1.0',
            'generator': 'luminite-levelgenerator',
        },
        'statistics': maze_statistics(graph, carve),
        'maze': {
            'start': carve.start if carve else 0,
            'passages': [list(edge) for edge in carve.carved_edges] if carve else [],
            'walls': [list(edge) for edge in graph.edges()],
        },
    }
    return json.dumps(output, indent=2)

