"""
cargojni CLI argument parser.

This module implements the command-line interface for cargojni using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cargojni import __version__
from cargojni.core.exceptions import CargoJniError

logger = logging.getLogger(__name__)


class CLI:
    """cargojni command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="cargojni",
            description="cargojni - Build Rust libraries for desktop and Android targets",
            epilog='Use "cargojni COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"cargojni {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to build description (default: <project-root>/cargojni.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_build_command(subparsers)
        self._add_targets_command(subparsers)
        self._add_linker_wrapper_command(subparsers)

        return parser

    def _add_build_command(self, subparsers):
        """Add 'build' subcommand."""
        parser = subparsers.add_parser(
            "build",
            help="Build the crate for the configured targets",
            description="Run cargo build for each target and stage the libraries",
        )
        parser.add_argument(
            "--target",
            dest="targets",
            action="append",
            metavar="ID",
            help="Platform to build (can be used multiple times; default: configured targets)",
        )
        parser.add_argument(
            "--profile",
            metavar="NAME",
            help="Cargo profile: debug, release or a custom profile (overrides config)",
        )
        parser.add_argument(
            "--jobs",
            "-j",
            type=int,
            default=1,
            metavar="N",
            help="Number of targets built in parallel (default: 1)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the cargo commands and environment without running them",
        )

    def _add_targets_command(self, subparsers):
        """Add 'targets' subcommand."""
        subparsers.add_parser(
            "targets",
            help="List supported platforms",
            description="List registered platforms with their triples and output folders",
        )

    def _add_linker_wrapper_command(self, subparsers):
        """Add 'linker-wrapper' subcommand."""
        parser = subparsers.add_parser(
            "linker-wrapper",
            help="Install the linker wrapper scripts",
            description="Install the linker wrapper scripts used for Android targets",
        )
        parser.add_argument(
            "--build-dir",
            type=Path,
            metavar="DIR",
            help="Build directory (default: build_dir from config, else <project-root>/build)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except CargoJniError as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "build": "cargojni.cli.commands.build",
            "targets": "cargojni.cli.commands.targets",
            "linker-wrapper": "cargojni.cli.commands.wrapper",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to load command module: {e}")
            return 1

        if not hasattr(module, "run"):
            logger.error(f"Command module {module_name} has no run() function")
            return 1

        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
