"""
Build command implementation.

Runs cargo for every requested platform and stages the libraries, or with
``--dry-run`` prints what would be run.
"""

import dataclasses
import logging
import shlex

from cargojni.build.orchestrator import BuildOrchestrator
from cargojni.cli.utils import load_build_config

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every target built, 1 otherwise)

    Raises:
        CargoJniError: For invalid configuration (handled by the CLI)
    """
    logger.debug(f"Arguments: {args}")

    if args.jobs < 1:
        logger.error("--jobs must be at least 1")
        return 1

    config = load_build_config(args)
    if args.profile:
        config = dataclasses.replace(config, profile=args.profile)

    orchestrator = BuildOrchestrator(config)

    if args.dry_run:
        for planned in orchestrator.dry_run(args.targets):
            print(f"[{planned.request.platform}] (cd {planned.working_directory})")
            for key, value in planned.environment.items():
                print(f"  {key}={shlex.quote(value)}")
            print(f"  {shlex.join(planned.command)}")
        return 0

    report = orchestrator.build_all(args.targets, jobs=args.jobs)
    return 0 if report.succeeded else 1
