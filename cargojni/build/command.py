"""
Cargo command line synthesis.

The command is assembled in a fixed order::

    cargo [+channel] build [--verbose] [feature flags] [profile flag]
          [--target=<triple>] [extra arguments...]
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from cargojni.build.request import TargetBuildRequest
from cargojni.config.features import profile_args

logger = logging.getLogger(__name__)


class CommandSynthesizer:
    """Build the ``cargo build`` invocation for a target."""

    def synthesize(
        self, request: TargetBuildRequest, host_triple: Optional[str]
    ) -> List[str]:
        """
        Assemble the cargo command line.

        Args:
            request: Target to build
            host_triple: Host triple from rustc, or None if unknown

        Returns:
            Argument list, executable first
        """
        command = [request.cargo_command]

        if request.rustup_channel:
            command.append(normalize_channel(request.rustup_channel))

        command.append("build")

        if self.wants_verbose(request.verbose):
            command.append("--verbose")

        command.extend(request.features.to_args())
        command.extend(profile_args(request.profile))

        if needs_target_flag(request.entry.target, host_triple):
            command.append(f"--target={request.entry.target}")

        command.extend(request.extra_args)
        return command

    def wants_verbose(self, verbose: Optional[bool]) -> bool:
        """Explicit setting wins; otherwise follow INFO logging."""
        if verbose is not None:
            return verbose
        return logger.isEnabledFor(logging.INFO)

    def working_directory(
        self, module: Union[str, Path], project_dir: Union[str, Path]
    ) -> Path:
        """
        Directory cargo runs in: the module, made absolute and canonical.

        Args:
            module: Crate directory, absolute or relative to project_dir
            project_dir: Project root
        """
        module = Path(module)
        if not module.is_absolute():
            module = Path(project_dir) / module
        return module.resolve()


def normalize_channel(channel: str) -> str:
    """
    Rustup channel selector with exactly one leading '+'.

    Example:
        >>> normalize_channel("nightly")
        '+nightly'
    """
    return channel if channel.startswith("+") else f"+{channel}"


def needs_target_flag(target: str, host_triple: Optional[str]) -> bool:
    """
    Whether ``--target`` must be passed.

    Only non-host targets get the flag, so desktop builds share cargo's
    cache with plain ``cargo build``/``cargo test`` runs. An unknown host
    triple always gets the flag.
    """
    return target != host_triple


__all__ = ["CommandSynthesizer", "normalize_channel", "needs_target_flag"]
