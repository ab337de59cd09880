"""
Core infrastructure for cargojni.

Host platform detection, filesystem helpers, locking and the
exception hierarchy shared by every other subpackage.
"""

from cargojni.core.exceptions import (
    CargoJniError,
    ConfigurationError,
    MissingConfigurationError,
    ConflictingConfigurationError,
    UnknownPlatformError,
    HostTripleDetectionError,
    BuildError,
    SubprocessFailure,
    ArtifactStagingError,
    LinkerWrapperError,
    LockTimeoutError,
)
from cargojni.core.platform import HostPlatform, detect_host_platform

__all__ = [
    "CargoJniError",
    "ConfigurationError",
    "MissingConfigurationError",
    "ConflictingConfigurationError",
    "UnknownPlatformError",
    "HostTripleDetectionError",
    "BuildError",
    "SubprocessFailure",
    "ArtifactStagingError",
    "LinkerWrapperError",
    "LockTimeoutError",
    "HostPlatform",
    "detect_host_platform",
]
