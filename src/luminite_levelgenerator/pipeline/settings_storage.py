"""
Settings persistence layer for the maze pipeline.

Handles save/load of PipelineSettings as JSON, by default under
~/.config/luminite_levelgenerator/settings/
"""

from __future__ import annotations
import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .maze_pipeline import PipelineSettings

logger = logging.getLogger(__name__)


def get_settings_dir() -> Path:
    """
    Get the directory for storing saved settings.

    Returns:
        Path to ~/.config/luminite_levelgenerator/settings/
        Creates the directory if it doesn't exist.
    """
    config_dir = Path.home() / ".config" / "luminite_levelgenerator" / "settings"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def settings_to_dict(settings: PipelineSettings) -> Dict[str, Any]:
    """Convert PipelineSettings to a JSON-serializable dictionary."""
    return dataclasses.asdict(settings)


def settings_from_dict(data: Dict[str, Any]) -> PipelineSettings:
    """
    Create PipelineSettings from a dictionary.

    Missing keys keep their defaults; unknown keys are logged and ignored.
    """
    known = {f.name for f in dataclasses.fields(PipelineSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))
    return PipelineSettings(**{k: v for k, v in data.items() if k in known})


def _sanitize_filename(name: str) -> str:
    """
    Sanitize a settings name for use as a filename.

    Args:
        name: The settings name

    Returns:
        A safe filename (lowercase, spaces replaced with underscores, special chars removed)
    """
    safe = name.lower().replace(" ", "_")
    safe = "".join(c for c in safe if c.isalnum() or c in "_-")
    return safe or "settings"


def save_settings(settings: PipelineSettings, name: str,
                  directory: Optional[Path] = None) -> Path:
    """
    Save settings under a name.

    Args:
        settings: The PipelineSettings to save
        name: Name to save under (sanitized into the filename)
        directory: Target directory, defaults to get_settings_dir()

    Returns:
        Path to the saved file

    Raises:
        OSError: If the file cannot be written
    """
    settings_dir = Path(directory) if directory else get_settings_dir()
    settings_dir.mkdir(parents=True, exist_ok=True)
    file_path = settings_dir / (_sanitize_filename(name) + ".json")

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(settings_to_dict(settings), f, indent=2, ensure_ascii=False)

    logger.info("Settings saved: %s", file_path)
    return file_path


def load_settings(source: Union[str, Path], directory: Optional[Path] = None) -> PipelineSettings:
    """
    Load settings from a JSON file path or a saved name.

    Args:
        source: Path to a JSON file, or a name previously given to save_settings()
        directory: Directory searched for saved names, defaults to get_settings_dir()

    Returns:
        PipelineSettings

    Raises:
        FileNotFoundError: If neither a file nor a saved name matches
        json.JSONDecodeError: If the file is not valid JSON
        TypeError: If the file does not hold a JSON object
    """
    file_path = Path(source)
    if not file_path.is_file():
        settings_dir = Path(directory) if directory else get_settings_dir()
        file_path = settings_dir / (_sanitize_filename(str(source)) + ".json")
    if not file_path.is_file():
        logger.error("Settings not found: %s", source)
        raise FileNotFoundError(f"No settings file or saved settings named {source!r}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.error("Settings file is not valid JSON: %s", file_path)
        raise

    if not isinstance(data, dict):
        raise TypeError(f"Settings file {file_path} must hold a JSON object, got {type(data).__name__}")

    logger.debug("Settings loaded: %s", file_path)
    return settings_from_dict(data)


def list_saved_settings(directory: Optional[Path] = None) -> List[str]:
    """
    List saved settings names.

    Returns:
        Sorted list of names (without .json extension)
    """
    settings_dir = Path(directory) if directory else get_settings_dir()
    if not settings_dir.is_dir():
        return []
    return sorted(p.stem for p in settings_dir.glob("*.json"))
