"""
Shared utilities for CLI commands.

Locating and loading the build description the same way in every command.
"""

import logging
from pathlib import Path
from typing import Optional

from cargojni.config.parser import CONFIG_FILENAME, CargoConfig, parse_config

logger = logging.getLogger(__name__)


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve the project root directory.

    Args:
        path: Optional project root (default: current directory)

    Returns:
        Absolute project root
    """
    return Path(path).resolve() if path else Path.cwd()


def config_path(args) -> Path:
    """Build description path: ``--config`` or ``<project-root>/cargojni.yaml``."""
    if getattr(args, "config", None):
        return Path(args.config)
    return resolve_project_root(getattr(args, "project_root", None)) / CONFIG_FILENAME


def load_build_config(args) -> CargoConfig:
    """
    Load the build description for a command.

    Args:
        args: Parsed arguments with config and project_root

    Returns:
        Validated configuration, rooted at ``--project-root``

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    path = config_path(args)
    project_root = resolve_project_root(getattr(args, "project_root", None))
    logger.debug(f"Using build description {path} (project root {project_root})")
    return parse_config(path, project_dir=project_root)


__all__ = ["resolve_project_root", "config_path", "load_build_config"]
