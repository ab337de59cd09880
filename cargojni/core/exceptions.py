"""
Centralized exception hierarchy for cargojni.

This module defines all custom exceptions used across the codebase
so that configuration problems, per-target build failures and staging
mismatches can be told apart by callers.
"""

from typing import Iterable, List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class CargoJniError(Exception):
    """Base exception for all cargojni errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(CargoJniError):
    """Invalid build description or property value."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration field is absent."""

    def __init__(self, field_name: str, detail: str = ""):
        self.field_name = field_name
        msg = f"Missing required configuration: {field_name}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class ConflictingConfigurationError(ConfigurationError):
    """Raised when mutually exclusive settings are used together."""

    def __init__(self, *field_names: str):
        self.field_names = list(field_names)
        names = ", ".join(f"`{name}`" for name in field_names)
        super().__init__(f"Cannot set more than one of {names}")


class UnknownPlatformError(ConfigurationError):
    """Raised when a requested platform is not in the target registry."""

    def __init__(self, identifier: str, known: Iterable[str]):
        self.identifier = identifier
        self.known: List[str] = sorted(known)
        super().__init__(
            f"Target {identifier} is not recognized "
            f"(recognized targets: {', '.join(self.known)})"
        )


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class HostTripleDetectionError(CargoJniError):
    """The host triple could not be read from the compiler.

    Never fatal: detection degrades to passing an explicit ``--target``.
    """

    pass


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildError(CargoJniError):
    """Base exception for per-target build failures."""

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"[{platform}] {message}")


class SubprocessFailure(BuildError):
    """Raised when cargo exits with a non-zero status."""

    def __init__(
        self,
        platform: str,
        exit_code: int,
        command: Optional[List[str]] = None,
        detail: str = "",
    ):
        self.exit_code = exit_code
        self.command = list(command or [])
        super().__init__(
            platform, detail or f"cargo build failed with exit code {exit_code}"
        )


class ArtifactStagingError(BuildError):
    """Raised when expected artifacts are missing after a successful build."""

    def __init__(self, platform: str, directory, patterns: Iterable[str]):
        self.directory = directory
        self.patterns = list(patterns)
        super().__init__(
            platform,
            f"No artifacts matching {self.patterns} found in {directory}",
        )


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class LinkerWrapperError(CargoJniError):
    """Raised when the linker wrapper scripts cannot be installed."""

    pass


class LockTimeoutError(CargoJniError):
    """Raised when a file lock cannot be acquired within the timeout."""

    pass
