"""
Target registry.

Static catalog of the platforms cargojni can build for. Each entry maps a
short identifier (as written in ``cargojni.yaml``) to a Rust target triple,
the NDK compiler and binutils prefixes, and the output folder the staged
library is copied into.

See https://doc.rust-lang.org/rustc/platform-support.html and
https://developer.android.com/ndk/guides/other_build_systems#overview
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List

from cargojni.core.exceptions import UnknownPlatformError


class ToolchainType(Enum):
    """How a target is compiled."""

    #: Native build for a desktop host; no NDK involved
    DESKTOP = "desktop"
    #: Cross-compiled with the NDK's prebuilt LLVM toolchain
    ANDROID_PREBUILT = "android-prebuilt"


@dataclass(frozen=True)
class PlatformEntry:
    """
    A buildable platform.

    Attributes:
        platform: Registry identifier (e.g., 'arm64', 'linux-x86-64')
        type: Desktop or Android cross-compiled
        target: Rust target triple (e.g., 'aarch64-linux-android')
        compiler_triple: Prefix of the NDK clang wrappers
        binutils_triple: Prefix of pre-r23 NDK binutils (e.g., '<triple>-ar')
        folder: Output folder relative to the staging root
    """

    platform: str
    type: ToolchainType
    target: str
    compiler_triple: str
    binutils_triple: str
    folder: str

    @property
    def is_desktop(self) -> bool:
        return self.type is ToolchainType.DESKTOP

    @property
    def env_target(self) -> str:
        """Target triple as used in environment variable names.

        Example:
            >>> ARM64.env_target
            'AARCH64_LINUX_ANDROID'
        """
        return self.target.upper().replace("-", "_")


def _desktop(platform: str, target: str, folder: str) -> PlatformEntry:
    return PlatformEntry(platform, ToolchainType.DESKTOP, target, target, target, folder)


def _android(
    platform: str, target: str, compiler: str, binutils: str, abi: str
) -> PlatformEntry:
    return PlatformEntry(
        platform, ToolchainType.ANDROID_PREBUILT, target, compiler, binutils, f"android/{abi}"
    )


ARM64 = _android(
    "arm64",
    "aarch64-linux-android",
    "aarch64-linux-android",
    "aarch64-linux-android",
    "arm64-v8a",
)

BUILTIN_PLATFORMS: List[PlatformEntry] = [
    _desktop("linux-x86-64", "x86_64-unknown-linux-gnu", "desktop/linux-x86-64"),
    # Superseded by darwin-x86-64, kept for existing build descriptions
    _desktop("darwin", "x86_64-apple-darwin", "desktop/darwin"),
    _desktop("darwin-x86-64", "x86_64-apple-darwin", "desktop/darwin-x86-64"),
    _desktop("darwin-aarch64", "aarch64-apple-darwin", "desktop/darwin-aarch64"),
    _desktop("win32-x86-64-msvc", "x86_64-pc-windows-msvc", "desktop/win32-x86-64"),
    _desktop("win32-x86-64-gnu", "x86_64-pc-windows-gnu", "desktop/win32-x86-64"),
    # 32-bit ARM clang is prefixed armv7a-linux-androideabi, its binutils
    # arm-linux-androideabi; every other ABI uses one prefix for both
    _android(
        "arm",
        "armv7-linux-androideabi",
        "armv7a-linux-androideabi",
        "arm-linux-androideabi",
        "armeabi-v7a",
    ),
    ARM64,
    _android(
        "x86", "i686-linux-android", "i686-linux-android", "i686-linux-android", "x86"
    ),
    _android(
        "x86_64",
        "x86_64-linux-android",
        "x86_64-linux-android",
        "x86_64-linux-android",
        "x86_64",
    ),
]


class TargetRegistry:
    """
    Immutable lookup table of platform entries keyed by identifier.

    Example:
        >>> registry = TargetRegistry()
        >>> registry.lookup("arm64").target
        'aarch64-linux-android'
    """

    def __init__(self, entries: Iterable[PlatformEntry] = BUILTIN_PLATFORMS):
        self._entries: Dict[str, PlatformEntry] = {}
        for entry in entries:
            if entry.platform in self._entries:
                raise ValueError(f"Duplicate platform identifier: {entry.platform}")
            self._entries[entry.platform] = entry

    def lookup(self, identifier: str) -> PlatformEntry:
        """
        Get the entry for a platform identifier.

        Raises:
            UnknownPlatformError: If the identifier is not registered; the
                message lists every known identifier, sorted.
        """
        try:
            return self._entries[identifier]
        except KeyError:
            raise UnknownPlatformError(identifier, self._entries.keys()) from None

    def identifiers(self) -> List[str]:
        return sorted(self._entries)

    def entries(self) -> List[PlatformEntry]:
        return list(self._entries.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __iter__(self) -> Iterator[PlatformEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


_DEFAULT_REGISTRY = TargetRegistry()


def default_registry() -> TargetRegistry:
    """Get the built-in registry."""
    return _DEFAULT_REGISTRY


__all__ = [
    "ToolchainType",
    "PlatformEntry",
    "TargetRegistry",
    "BUILTIN_PLATFORMS",
    "default_registry",
]
