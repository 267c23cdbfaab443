"""
Command-line entry point for the maze generator.

Generates one maze, prints its ASCII view and a summary, and optionally
writes wall placements, OBJ meshes and debug graph dumps.
"""

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from luminite_levelgenerator.generators.layout.layout_types import MazeLayout, farthest_cell
from luminite_levelgenerator.generators.maze.grid_graph import InvalidArgument
from luminite_levelgenerator.pipeline.maze_pipeline import (
    MazePipeline, PipelineError, PipelineSettings
)
from luminite_levelgenerator.pipeline.settings_storage import load_settings, save_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="luminite-maze",
        description="Generate a perfect maze and its wall placements",
    )
    parser.add_argument("width", type=int, nargs="?", help="Maze width in cells")
    parser.add_argument("height", type=int, nargs="?", help="Maze height in cells")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible mazes")
    parser.add_argument("--cell-size", type=float, default=None, help="World units per cell")
    parser.add_argument("--perimeter", action="store_true", help="Also emit the outer frame walls")
    parser.add_argument("--settings", default=None,
                        help="Settings JSON file or saved settings name to start from")
    parser.add_argument("--save-settings", default=None, metavar="NAME",
                        help="Save the effective settings under NAME")
    parser.add_argument("--output-dir", default=None, help="Directory for exported files")
    parser.add_argument("--name", default=None, help="Base name for exported files")
    parser.add_argument("--json", action="store_true", help="Write wall placements as JSON")
    parser.add_argument("--obj", action="store_true", help="Write wall meshes as OBJ")
    parser.add_argument("--graph-dump", choices=["dot", "json"], default=None,
                        help="Write a debug graph dump")
    parser.add_argument("--no-ascii", action="store_true", help="Don't print the ASCII maze")
    parser.add_argument("--no-validate", action="store_true", help="Skip the validation gate")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> PipelineSettings:
    """Merge command-line options over the loaded (or default) settings."""
    settings = load_settings(args.settings) if args.settings else PipelineSettings()

    overrides = {
        'width': args.width,
        'height': args.height,
        'seed': args.seed,
        'cell_size': args.cell_size,
        'output_dir': args.output_dir,
        'map_name': args.name,
    }
    changes = {k: v for k, v in overrides.items() if v is not None}
    if args.perimeter:
        changes['include_perimeter'] = True
    if args.json:
        changes['export_json'] = True
    if args.obj:
        changes['export_obj'] = True
    if args.graph_dump:
        changes['enable_graph_dump'] = True
        changes['graph_dump_format'] = args.graph_dump
    if args.no_validate:
        changes['validate'] = False
    if args.verbose:
        changes['verbose'] = True
    return dataclasses.replace(settings, **changes)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
        if args.save_settings:
            save_settings(settings, args.save_settings)
        result = MazePipeline(settings).generate()
    except (InvalidArgument, PipelineError) as e:
        logger.error("%s", e)
        return 2
    except (OSError, ValueError, TypeError) as e:
        logger.error("Failed to load or write files: %s", e)
        return 1

    if not args.no_ascii:
        layout = MazeLayout.from_graph(result.graph, settings.cell_size)
        goal, _ = farthest_cell(result.graph, result.carve.carved_edge_set(), result.carve.start)
        layout.mark_endpoints(result.graph.position(result.carve.start), result.graph.position(goal))
        print(layout.to_ascii())

    print(f"seed={result.seed} size={settings.width}x{settings.height} "
          f"passages={result.metrics['passages']} walls={len(result.walls)}")
    for path in result.output_files:
        print(f"wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
