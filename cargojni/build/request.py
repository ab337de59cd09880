"""
Per-target build request.

A ``TargetBuildRequest`` holds everything needed to build one platform. It is
created once per requested platform by the orchestrator and never modified.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from cargojni.config.features import DEBUG_PROFILE, FeatureSelection, UnsetFeatures
from cargojni.toolchain.ndk import NdkInfo
from cargojni.toolchain.registry import PlatformEntry


@dataclass(frozen=True)
class TargetBuildRequest:
    """
    Inputs for building one platform.

    Attributes:
        entry: Platform being built
        api_level: Minimum Android API level
        libname: Library base name (``lib<libname>.so``)
        module: Crate directory, absolute or relative to project_dir
        project_dir: Project root
        build_dir: Root of the staged output and linker wrapper
        cargo_target_dir: Cargo target directory, absolute or relative to project_dir
        ndk: NDK installation (required for Android targets)
        profile: 'debug', 'release' or a custom cargo profile
        features: Feature selection policy
        rustup_channel: Toolchain channel ('' for none)
        extra_args: Extra arguments appended to ``cargo build``
        environment: Caller environment overrides
        verbose: Force ``--verbose`` on/off; None follows logging
        auto_configure_clang_sys: Export CLANG_PATH for clang-sys users
        generate_build_id: Add ``--build-id`` to the link arguments
        target_includes: Glob patterns to stage instead of the defaults
        export_target_dir: Pass cargo_target_dir to cargo as CARGO_TARGET_DIR
    """

    entry: PlatformEntry
    api_level: int
    libname: str
    module: str
    project_dir: Path
    build_dir: Path
    cargo_target_dir: str
    ndk: Optional[NdkInfo] = None
    profile: str = DEBUG_PROFILE
    features: FeatureSelection = field(default_factory=UnsetFeatures)
    rustup_channel: str = ""
    extra_args: Tuple[str, ...] = ()
    environment: Dict[str, str] = field(default_factory=dict)
    verbose: Optional[bool] = None
    auto_configure_clang_sys: bool = True
    generate_build_id: bool = False
    target_includes: Optional[Tuple[str, ...]] = None
    export_target_dir: bool = False
    cargo_command: str = "cargo"
    rustc_command: str = "rustc"
    python_command: str = sys.executable

    @property
    def platform(self) -> str:
        return self.entry.platform

    def default_includes(self) -> Tuple[str, ...]:
        """File names of the library for each native extension."""
        return (
            f"lib{self.libname}.so",
            f"lib{self.libname}.dylib",
            f"{self.libname}.dll",
        )

    def include_patterns(self) -> Tuple[str, ...]:
        if self.target_includes:
            return tuple(self.target_includes)
        return self.default_includes()


__all__ = ["TargetBuildRequest"]
