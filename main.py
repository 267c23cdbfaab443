#!/usr/bin/env python3
"""
Luminite Level Generator - Main Entry Point

Runs the maze generator from a source checkout without installing it.
"""

import sys
from pathlib import Path


def main():
    """Main application entry point."""
    # Ensure package imports work when executed as a script
    src_root = Path(__file__).resolve().parent / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))

    from luminite_levelgenerator.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
