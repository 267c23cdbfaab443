"""
Validation package for generated mazes.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationStage: Generation stage enumeration
    - check_lattice, check_spanning_tree, check_raster, check_wall_count: Stage checks
    - validate_maze: Run every post-carve check
"""

from .core import (
    Severity,
    ValidationStage,
    ValidationIssue,
    ValidationResult,
)
from .maze_checks import (
    check_lattice,
    check_raster,
    check_spanning_tree,
    check_wall_count,
    validate_maze,
)

__all__ = [
    # Core types
    'Severity',
    'ValidationStage',
    'ValidationIssue',
    'ValidationResult',
    # Checks
    'check_lattice',
    'check_raster',
    'check_spanning_tree',
    'check_wall_count',
    'validate_maze',
]
