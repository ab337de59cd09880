"""
Android NDK installation info.

The NDK major version decides which archiver is used (unified ``llvm-ar``
from r23 on) and is exported to the linker wrapper, which patches ``-lgcc``
for the same NDK releases.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from packaging.version import InvalidVersion, Version

from cargojni.config.properties import PropertyResolver, read_properties

logger = logging.getLogger(__name__)

SOURCE_PROPERTIES = "source.properties"
REVISION_KEY = "Pkg.Revision"
DEFAULT_VERSION = "0.0"


@dataclass(frozen=True)
class NdkInfo:
    """
    An NDK installation.

    Attributes:
        path: NDK root directory
        version: Version string as found in source.properties (e.g., '27.3.13750724')
    """

    path: Path
    version: str = DEFAULT_VERSION

    @property
    def version_major(self) -> int:
        """
        Leading version component, or 0 when the version is unparseable.

        Example:
            >>> NdkInfo(Path("/ndk"), "27.3.13750724").version_major
            27
        """
        return parse_major_version(self.version)

    @classmethod
    def from_directory(cls, path: Path, version: Optional[str] = None) -> "NdkInfo":
        """
        Describe the NDK at path.

        Args:
            path: NDK root directory
            version: Explicit version; read from source.properties when None

        Returns:
            NdkInfo, with version '0.0' if it cannot be determined
        """
        path = Path(path)
        if version is None:
            props = read_properties(path / SOURCE_PROPERTIES)
            version = props.get(REVISION_KEY, DEFAULT_VERSION)
            logger.debug(f"NDK at {path} reports {REVISION_KEY}={version}")
        return cls(path=path, version=str(version))


def parse_major_version(version: str) -> int:
    try:
        return Version(version).major
    except InvalidVersion:
        pass
    head = str(version).split(".")[0].strip()
    try:
        return int(head)
    except ValueError:
        logger.debug(f"Unparseable NDK version {version!r}, treating as 0")
        return 0


def locate_ndk(
    resolver: PropertyResolver,
    explicit_path: Optional[str] = None,
    explicit_version: Optional[str] = None,
    project_dir: Optional[Path] = None,
) -> Optional[NdkInfo]:
    """
    Find the NDK to use.

    Precedence: explicit path, ``ndk.dir`` in local.properties,
    ``ANDROID_NDK_HOME`` then ``ANDROID_NDK_ROOT`` in the environment.

    Returns:
        NdkInfo or None if no NDK is configured
    """
    raw = resolver.get("ndk.dir", "ANDROID_NDK_HOME", explicit=explicit_path)
    if raw is None:
        raw = resolver.get("ndk.dir", "ANDROID_NDK_ROOT")
    if raw is None:
        return None

    path = Path(raw).expanduser()
    if not path.is_absolute() and project_dir is not None:
        path = Path(project_dir) / path
    return NdkInfo.from_directory(path, version=explicit_version)


__all__ = ["NdkInfo", "parse_major_version", "locate_ndk"]
