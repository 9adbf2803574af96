"""
Configuration Loader

Loads and saves YAML configuration files: table settings and
the demo product catalog.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def get_config_path(filename: str) -> Path:
    """
    Resolve a file name inside the config directory.

    Args:
        filename: Name of the config file (e.g., 'settings.yaml')

    Returns:
        Path to the file (which may not exist yet)
    """
    return _get_config_dir() / filename


def load_yaml_file(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML content as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'demo_catalog.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    return load_yaml_file(get_config_path(filename))


def save_yaml_file(path: str | Path, data: Dict[str, Any]) -> Path:
    """
    Write a dictionary to a YAML file, creating parent directories.

    Args:
        path: Target path
        data: Data to serialize

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)

    return path
