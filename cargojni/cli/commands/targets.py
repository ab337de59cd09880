"""
Targets command implementation.

Lists every registered platform.
"""

import logging

from cargojni.toolchain.registry import default_registry

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the targets command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0)
    """
    registry = default_registry()
    width = max(len(identifier) for identifier in registry.identifiers())

    for identifier in registry.identifiers():
        entry = registry.lookup(identifier)
        print(
            f"{identifier:<{width}}  {entry.type.value:<16}  "
            f"{entry.target:<28}  {entry.folder}"
        )

    return 0
