"""
Host platform detection for cargojni.

The host platform decides how NDK binaries are named (Windows wrappers carry
a ``.cmd`` suffix), which prebuilt NDK directory is used, and which flavour
of linker wrapper script is installed. It is detected once and then passed
explicitly to everything that builds paths.

Usage:
    from cargojni.core.platform import detect_host_platform

    host = detect_host_platform()
    print(host.ndk_host_tag)  # 'linux-x86_64'
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class HostPlatform:
    """
    Build host information.

    Attributes:
        os: Normalized operating system ('windows', 'macos', 'linux')
        arch: Normalized CPU architecture ('x64', 'arm64', 'x86', 'arm')
    """

    os: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_macos(self) -> bool:
        return self.os == "macos"

    @property
    def ndk_host_tag(self) -> str:
        """
        Name of the prebuilt toolchain directory inside an NDK.

        Example:
            >>> HostPlatform("windows", "x86").ndk_host_tag
            'windows'
        """
        if self.is_windows:
            return "windows-x86_64" if self.arch == "x64" else "windows"
        if self.is_macos:
            # NDKs only ship darwin-x86_64, arm64 Macs run it under Rosetta
            return "darwin-x86_64"
        return "linux-x86_64"

    @property
    def compiler_suffix(self) -> str:
        """Suffix of the NDK clang wrappers ('.cmd' on Windows)."""
        return ".cmd" if self.is_windows else ""

    @property
    def script_suffix(self) -> str:
        """Suffix of the linker wrapper script ('.bat' on Windows)."""
        return ".bat" if self.is_windows else ".sh"

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_host_platform() -> HostPlatform:
    """
    Detect the build host.

    This function is cached - it only runs detection once per process.

    Returns:
        HostPlatform describing the current machine
    """
    return HostPlatform(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys")):
        return "windows"
    elif system == "darwin":
        return "macos"
    # Everything else builds like Linux
    return "linux"


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def clear_platform_cache():
    """
    Clear the host detection cache.

    Useful for testing.
    """
    detect_host_platform.cache_clear()


__all__ = [
    "HostPlatform",
    "detect_host_platform",
    "clear_platform_cache",
]
