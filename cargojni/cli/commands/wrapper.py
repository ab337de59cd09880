"""
Linker-wrapper command implementation.

Installs the linker wrapper scripts into a build directory ahead of a build.
"""

import logging
from pathlib import Path

from cargojni.build.linker_wrapper import LinkerWrapper
from cargojni.cli.utils import config_path, load_build_config, resolve_project_root
from cargojni.core.platform import detect_host_platform

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the linker-wrapper command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    if args.build_dir:
        build_dir = Path(args.build_dir)
    elif config_path(args).exists():
        build_dir = load_build_config(args).build_dir
    else:
        build_dir = resolve_project_root(args.project_root) / "build"

    wrapper = LinkerWrapper.for_build_dir(build_dir, detect_host_platform())
    for path in wrapper.install():
        logger.debug(f"Installed {path}")

    print(wrapper.script_path)
    return 0
