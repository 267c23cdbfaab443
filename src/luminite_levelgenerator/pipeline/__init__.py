"""
Luminite Maze Generation Pipeline Module.

Provides single-call maze generation and the settings-driven pipeline.
"""

from .maze_pipeline import (
    MazePipeline,
    PipelineSettings,
    PipelineResult,
    PipelineStage,
    PipelineError,
    InvalidSettings,
    MazeValidationError,
    generate_maze,
)

from .settings_storage import (
    load_settings,
    save_settings,
    settings_from_dict,
    settings_to_dict,
)

__all__ = [
    # Pipeline core
    'MazePipeline',
    'PipelineSettings',
    'PipelineResult',
    'PipelineStage',
    'PipelineError',
    'InvalidSettings',
    'MazeValidationError',
    'generate_maze',
    # Settings persistence
    'load_settings',
    'save_settings',
    'settings_from_dict',
    'settings_to_dict',
]
