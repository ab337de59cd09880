"""
Building crates for one or more platforms.

- request: per-target build inputs
- command: ``cargo build`` command line synthesis
- environment: cross-compilation environment synthesis
- linker_wrapper: installation of the linker wrapper scripts
- orchestrator: runs cargo per target and stages the libraries
"""

from cargojni.build.request import TargetBuildRequest
from cargojni.build.command import CommandSynthesizer
from cargojni.build.environment import EnvironmentSynthesizer
from cargojni.build.linker_wrapper import LinkerWrapper
from cargojni.build.orchestrator import (
    BuildOrchestrator,
    BuildReport,
    BuildResult,
    BuildState,
    PlannedCommand,
)

__all__ = [
    "TargetBuildRequest",
    "CommandSynthesizer",
    "EnvironmentSynthesizer",
    "LinkerWrapper",
    "BuildOrchestrator",
    "BuildReport",
    "BuildResult",
    "BuildState",
    "PlannedCommand",
]
